"""binary encoding of the polygon vertices and JSON encoding of the BVH

vertex buffers: interleaved little endian float32 values [lng0, lat0, lng1, lat1, ...]
without any header. the amount of vertices follows from the buffer size (8 bytes per vertex).

BVH document (recursive):
    b: bounding box [[min lng, min lat], [max lng, max lat]]
    leaf: p: list of polygons {tz: timezone id, i: ring index, b: bounding box, mp: [x, y]}
    internal node: l, r: left and right child nodes
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
from pydantic import TypeAdapter, ValidationError

from timezonebvh.bvh import BVHInternal, BVHLeaf, BVHNode
from timezonebvh.configs import (
    DTYPE_FORMAT_F_NUMPY,
    NR_BYTES_VERTEX,
    CoordinateArray,
    Coords,
)
from timezonebvh.geometry import to_coord_array

BVHNodeAdapter: TypeAdapter = TypeAdapter(BVHNode)


def flatten_polygon_coords(coords: CoordinateArray) -> np.ndarray:
    """Convert polygon coordinates from shape (N, 2) to a flattened [x0, y0, x1, y1, ...] array."""
    return coords.ravel(order="C")


def reshape_to_polygon_coords(flat_coords: np.ndarray) -> np.ndarray:
    """Reshape flattened coordinates [x0, y0, x1, y1, ...] to the format (N, 2)."""
    return flat_coords.reshape(-1, 2)


def encode_ring(coords: Coords) -> bytes:
    coord_array = to_coord_array(coords)
    flat = flatten_polygon_coords(coord_array).astype(DTYPE_FORMAT_F_NUMPY)
    return flat.tobytes()


def decode_ring(buffer: bytes) -> np.ndarray:
    """the float32 (lng, lat) pairs of a vertex buffer as array of shape (N, 2)"""
    if len(buffer) % NR_BYTES_VERTEX != 0:
        raise ValueError(
            f"buffer size {len(buffer)} is not a multiple of {NR_BYTES_VERTEX} bytes per vertex"
        )
    flat = np.frombuffer(buffer, dtype=DTYPE_FORMAT_F_NUMPY)
    return reshape_to_polygon_coords(flat)


def encode_bvh(node: Union[BVHLeaf, BVHInternal]) -> Dict[str, Any]:
    """the BVH as nested structure of JSON compatible builtin types"""
    return node.model_dump(mode="json", by_alias=True)


def bvh_to_json(node: Union[BVHLeaf, BVHInternal]) -> str:
    return node.model_dump_json(by_alias=True)


def decode_bvh(document: Dict[str, Any]) -> Union[BVHLeaf, BVHInternal]:
    """validates a BVH document and converts it back into node objects

    Raises:
        ValidationError: If the document does not follow the BVH schema
    """
    try:
        return BVHNodeAdapter.validate_python(document)
    except ValidationError as e:
        print("BVH document validation failed:")
        for error in e.errors():
            print(f"  - {error['loc']}: {error['msg']}")
        raise


def write_bvh_json(node: Union[BVHLeaf, BVHInternal], path: Path) -> None:
    print("writing BVH json to ", path)
    path.write_text(bvh_to_json(node))


def read_bvh_json(path: Path) -> Union[BVHLeaf, BVHInternal]:
    with open(path) as json_file:
        return decode_bvh(json.load(json_file))
