from pathlib import Path
from typing import Callable, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# SIMPLIFICATION SETTINGS
# maximum deviation (in degree, lng/lat space) introduced by discarding vertices
SIMPLIFICATION_TOLERANCE: float = 0.00001**0.5

# PATHS
# NOTE: relative to the current working directory
DEFAULT_INPUT_DIR = Path("timezone_data") / "input"
DEFAULT_OUTPUT_DIR = Path("timezone_data") / "output"
# the unzipped JSON is too large to be stored in a git repository (100MB+)
INPUT_ARCHIVE_MEMBER = "tz-combined-with-oceans.json"
DEFAULT_INPUT_PATH = DEFAULT_INPUT_DIR / f"{INPUT_ARCHIVE_MEMBER}.zip"

RING_DIR_NAME = "tz_bin"
RING_FILE_SUFFIX = ".bin"
BVH_FILE_NAME = "bvh.json"

# characters which JavaScript's encodeURIComponent() leaves untouched
# (in addition to the ones urllib always considers safe: letters, digits, "_.-~")
ZONE_DIR_SAFE_CHARS = "!*'()"

# BINARY DATA TYPES
# https://numpy.org/doc/stable/reference/arrays.dtypes.html
# f4 = little endian single precision float
DTYPE_FORMAT_F_NUMPY = "<f4"
NR_BYTES_F = 4
# one vertex = (lng, lat)
NR_BYTES_VERTEX = 2 * NR_BYTES_F

# AXES
LNG_AXIS = 0
LAT_AXIS = 1

# TYPES
CoordinateArray = NDArray[np.float64]  # shape (N, 2): one (lng, lat) row per vertex
CoordPairs = Sequence[Sequence[float]]
Coords = Union[CoordinateArray, CoordPairs]
RingList = List[CoordinateArray]
# callback receiving every surviving (simplified) ring: (timezone id, ring index, coordinates)
RingSink = Callable[[str, int, CoordinateArray], None]
RingKey = Tuple[str, int]
