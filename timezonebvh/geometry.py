"""basic geometric types and bounding box computations

all coordinates are (lng, lat) in degree. no geodesic computations are being performed,
the coordinates are treated as points in the plane.
"""

from typing import Iterable, NamedTuple

import numpy as np

from timezonebvh.configs import LAT_AXIS, LNG_AXIS, CoordinateArray, Coords


class Point(NamedTuple):
    lng: float
    lat: float


class BoundingBox(NamedTuple):
    min_pt: Point
    max_pt: Point

    @property
    def xmin(self) -> float:
        return self.min_pt.lng

    @property
    def xmax(self) -> float:
        return self.max_pt.lng

    @property
    def ymin(self) -> float:
        return self.min_pt.lat

    @property
    def ymax(self) -> float:
        return self.max_pt.lat

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def extent(self, axis: int) -> float:
        if axis == LNG_AXIS:
            return self.width
        if axis == LAT_AXIS:
            return self.height
        raise ValueError(f"invalid axis {axis}")

    @property
    def midpoint(self) -> Point:
        """the center of the box. NOTE: not the centroid of the enclosed polygon"""
        return Point((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2)

    def is_degenerate(self) -> bool:
        """True if the box has zero width or zero height

        NOTE: exact float comparison. thin slivers with a tiny but non zero extent are not degenerate.
        """
        return self.xmin == self.xmax or self.ymin == self.ymax

    def contains(self, other: "BoundingBox") -> bool:
        """True if the other box lies within this box (borders included)"""
        if not isinstance(other, BoundingBox):
            raise TypeError
        return (
            self.xmin <= other.xmin
            and self.ymin <= other.ymin
            and self.xmax >= other.xmax
            and self.ymax >= other.ymax
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return union_bbox((self, other))


def to_coord_array(coords: Coords) -> CoordinateArray:
    """converts a sequence of (lng, lat) pairs into a float64 array of shape (N, 2)"""
    coord_array = np.asarray(coords, dtype=np.float64)
    if coord_array.ndim != 2 or coord_array.shape[1] != 2:
        raise ValueError(
            f"coordinates must have shape (N, 2), but have shape {coord_array.shape}"
        )
    return coord_array


def compute_bbox(coords: Coords) -> BoundingBox:
    """computes the axis aligned bounding box of a non empty sequence of (lng, lat) points"""
    coord_array = to_coord_array(coords)
    if len(coord_array) == 0:
        raise ValueError("cannot compute the bounding box of an empty point sequence")
    xmin, ymin = coord_array.min(axis=0)
    xmax, ymax = coord_array.max(axis=0)
    return BoundingBox(Point(float(xmin), float(ymin)), Point(float(xmax), float(ymax)))


def union_bbox(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """the smallest box containing all given boxes (min of mins, max of maxes)"""
    xmin = ymin = float("inf")
    xmax = ymax = float("-inf")
    empty = True
    for box in boxes:
        empty = False
        xmin = min(xmin, box.xmin)
        ymin = min(ymin, box.ymin)
        xmax = max(xmax, box.xmax)
        ymax = max(ymax, box.ymax)
    if empty:
        raise ValueError("cannot compute the union of zero bounding boxes")
    return BoundingBox(Point(xmin, ymin), Point(xmax, ymax))
