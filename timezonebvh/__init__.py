from timezonebvh.bvh import BVHInternal, BVHLeaf, build_bvh
from timezonebvh.catalog import PolygonCatalog, PolygonSummary, build_polygon_catalog
from timezonebvh.encoding import decode_bvh, decode_ring, encode_bvh, encode_ring
from timezonebvh.file_converter import parse_data
from timezonebvh.geometry import BoundingBox, Point, compute_bbox
from timezonebvh.simplification import simplify_polyline

# https://docs.python.org/3/tutorial/modules.html#importing-from-a-package
# determines which objects will be imported with "import *"
__all__ = (
    "BoundingBox",
    "BVHInternal",
    "BVHLeaf",
    "Point",
    "PolygonCatalog",
    "PolygonSummary",
    "build_bvh",
    "build_polygon_catalog",
    "compute_bbox",
    "decode_bvh",
    "decode_ring",
    "encode_bvh",
    "encode_ring",
    "parse_data",
    "simplify_polyline",
)
