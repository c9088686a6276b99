"""
script for building the spatial index of the timezone polygons from the data of
https://github.com/evansiroky/timezone-boundary-builder (GeoJSON "combined-with-oceans" release)

steps:
    - the outer boundary of every timezone polygon is being simplified
    - polygons with a zero area bounding box are being discarded
    - the coordinates of every remaining polygon are stored in a separate binary file (float32)
    - the polygons are being partitioned into a bounding volume hierarchy (BVH) stored as JSON

output layout:
    <output>/tz_bin/<percent encoded timezone id>/<ring index>.bin
    <output>/bvh.json

IMPORTANT: the coordinates are being converted to float32. the precision loss is negligible
compared to the error introduced by the simplification.
"""

import zipfile
from enum import Enum
from pathlib import Path
from typing import Union
from urllib.parse import quote

from pydantic import ValidationError

from timezonebvh.bvh import BVHInternal, BVHLeaf, build_bvh
from timezonebvh.catalog import PolygonCatalog, build_polygon_catalog
from timezonebvh.configs import (
    BVH_FILE_NAME,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_DIR,
    INPUT_ARCHIVE_MEMBER,
    RING_DIR_NAME,
    RING_FILE_SUFFIX,
    SIMPLIFICATION_TOLERANCE,
    ZONE_DIR_SAFE_CHARS,
    CoordinateArray,
)
from timezonebvh.encoding import encode_ring, write_bvh_json
from timezonebvh.geojson_schema import GeoJSON
from timezonebvh.reporting import print_build_report
from timezonebvh.utils import time_execution


class DirectoryStatus(Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already exists"


def ensure_directory(path: Path) -> DirectoryStatus:
    """creates the directory (including parents) unless it exists already

    Raises:
        OSError: if the directory cannot be created (e.g. a file is in the way, missing permissions)
    """
    if path.is_dir():
        return DirectoryStatus.ALREADY_EXISTS
    path.mkdir(parents=True)
    return DirectoryStatus.CREATED


def get_ring_dir(output_path: Path = DEFAULT_OUTPUT_DIR) -> Path:
    return output_path / RING_DIR_NAME


def get_bvh_path(output_path: Path = DEFAULT_OUTPUT_DIR) -> Path:
    return output_path / BVH_FILE_NAME


def get_zone_dir_name(timezone_id: str) -> str:
    """file system safe directory name of a timezone. same as JavaScript encodeURIComponent()

    e.g. "America/New_York" -> "America%2FNew_York"
    """
    return quote(timezone_id, safe=ZONE_DIR_SAFE_CHARS)


def get_ring_path(ring_dir: Path, timezone_id: str, ring_index: int) -> Path:
    return ring_dir / get_zone_dir_name(timezone_id) / f"{ring_index}{RING_FILE_SUFFIX}"


class RingFileWriter:
    """stores the vertices of every polygon handed over by the catalog builder in a separate binary file"""

    def __init__(self, ring_dir: Path):
        self.ring_dir = ring_dir
        self.nr_of_files = 0

    def __call__(
        self, timezone_id: str, ring_index: int, coords: CoordinateArray
    ) -> None:
        file_path = get_ring_path(self.ring_dir, timezone_id, ring_index)
        ensure_directory(file_path.parent)
        file_path.write_bytes(encode_ring(coords))
        self.nr_of_files += 1


def read_input_text(input_path: Path) -> bytes:
    """reads the GeoJSON content, either directly or from within a zip archive

    NOTE: the unzipped dataset is too large for being stored in a git repository.
    """
    if not zipfile.is_zipfile(input_path):
        return input_path.read_bytes()

    with zipfile.ZipFile(input_path) as archive:
        member_names = archive.namelist()
        if INPUT_ARCHIVE_MEMBER in member_names:
            member = INPUT_ARCHIVE_MEMBER
        else:
            json_members = [name for name in member_names if name.endswith(".json")]
            if len(json_members) != 1:
                raise ValueError(
                    f"expected a single JSON file in the archive {input_path}, found: {member_names}"
                )
            member = json_members[0]
        print(f"extracting {member} from archive {input_path}")
        return archive.read(member)


def parse_geojson(content: Union[str, bytes]) -> GeoJSON:
    """Parse and validate the timezone dataset.

    Raises:
        ValidationError: If the data does not follow the expected schema
    """
    try:
        return GeoJSON.model_validate_json(content)
    except ValidationError as e:
        print("Data validation failed:")
        for error in e.errors():
            print(f"  - {error['loc']}: {error['msg']}")
        raise


def load_geojson(input_path: Path) -> GeoJSON:
    print(f"parsing input file: {input_path}\n...\n")
    return parse_geojson(read_input_text(input_path))


@time_execution
def compile_catalog(
    geo_json: GeoJSON, ring_dir: Path, tolerance: float
) -> PolygonCatalog:
    ensure_directory(ring_dir)
    ring_writer = RingFileWriter(ring_dir)
    catalog = build_polygon_catalog(geo_json, tolerance, ring_sink=ring_writer)
    print(f"{ring_writer.nr_of_files} polygon files written to {ring_dir}")
    return catalog


@time_execution
def compile_bvh(catalog: PolygonCatalog, bvh_path: Path) -> Union[BVHLeaf, BVHInternal]:
    print("building the bounding volume hierarchy...")
    root = build_bvh(catalog.summaries)
    write_bvh_json(root, bvh_path)
    return root


@time_execution
def parse_data(
    input_path: Union[Path, str] = DEFAULT_INPUT_PATH,
    output_path: Union[Path, str] = DEFAULT_OUTPUT_DIR,
    tolerance: float = SIMPLIFICATION_TOLERANCE,
) -> Union[BVHLeaf, BVHInternal]:
    input_path_obj: Path = Path(input_path)
    output_path_obj: Path = Path(output_path)

    geo_json: GeoJSON = load_geojson(input_path_obj)
    ensure_directory(output_path_obj)

    catalog = compile_catalog(geo_json, get_ring_dir(output_path_obj), tolerance)
    root = compile_bvh(catalog, get_bvh_path(output_path_obj))

    print(f"\n\nfinished building the timezone index in {output_path_obj}")
    print_build_report(catalog, root)
    return root
