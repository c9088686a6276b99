"""polyline simplification

Ramer-Douglas-Peucker algorithm, optionally preceded by a (cheap) radial distance pre-pass
cf. https://en.wikipedia.org/wiki/Ramer%E2%80%93Douglas%E2%80%93Peucker_algorithm

the distance of a point is measured to the closest point of the segment connecting the neighbouring
retained points (not to the infinite line through them).
all distances are being compared squared to avoid computing square roots.
"""

from typing import List, Tuple

import numpy as np

from timezonebvh.configs import CoordinateArray, Coords
from timezonebvh.geometry import to_coord_array


def squared_segment_distances(
    coords: CoordinateArray, start: np.ndarray, end: np.ndarray
) -> np.ndarray:
    """squared distances of all given points to the segment [start, end]"""
    direction = end - start
    sq_length = float(direction @ direction)
    if sq_length == 0.0:
        # start and end coincide (e.g. closed ring): distance to this single point
        closest = start
    else:
        # projection of the points onto the segment, restricted to the segment
        t = np.clip(((coords - start) @ direction) / sq_length, 0.0, 1.0)
        closest = start + t[:, np.newaxis] * direction
    diff = coords - closest
    return np.einsum("ij,ij->i", diff, diff)


def simplify_radial_distance(
    coords: CoordinateArray, sq_tolerance: float
) -> CoordinateArray:
    """drops all points lying within the tolerance of the previously kept point

    the first and the last point are always kept
    """
    kept_idxs: List[int] = [0]
    points: List[Tuple[float, float]] = coords.tolist()
    prev_x, prev_y = points[0]
    for idx in range(1, len(points)):
        x, y = points[idx]
        dx = x - prev_x
        dy = y - prev_y
        if dx * dx + dy * dy > sq_tolerance:
            kept_idxs.append(idx)
            prev_x, prev_y = x, y

    last_idx = len(points) - 1
    if kept_idxs[-1] != last_idx:
        kept_idxs.append(last_idx)
    return coords[kept_idxs]


def simplify_douglas_peucker(
    coords: CoordinateArray, sq_tolerance: float
) -> CoordinateArray:
    nr_coords = len(coords)
    keep = np.zeros(nr_coords, dtype=bool)
    keep[0] = True
    keep[-1] = True

    # NOTE: iterative instead of recursive. the order of processing the sections does not matter
    sections: List[Tuple[int, int]] = [(0, nr_coords - 1)]
    while sections:
        first, last = sections.pop()
        if last - first < 2:
            # no points in between
            continue
        sq_dists = squared_segment_distances(
            coords[first + 1 : last], coords[first], coords[last]
        )
        # the first occurrence of the maximum distance is being selected
        max_idx = int(np.argmax(sq_dists))
        if sq_dists[max_idx] > sq_tolerance:
            split_idx = first + 1 + max_idx
            keep[split_idx] = True
            sections.append((first, split_idx))
            sections.append((split_idx, last))

    return coords[keep]


def simplify_polyline(
    coords: Coords, tolerance: float, high_quality: bool = False
) -> CoordinateArray:
    """reduces the amount of vertices of a polyline

    :param coords: sequence of (lng, lat) points, open or closed
    :param tolerance: the maximum allowed distance of a removed point
    :param high_quality: skip the radial distance pre-pass (slower, closer to the pure Douglas-Peucker result)
    :return: a subsequence of the input as float64 array of shape (N, 2),
        always containing the first and the last point
    """
    coord_array = to_coord_array(coords)
    if len(coord_array) <= 2:
        return coord_array.copy()

    sq_tolerance = tolerance * tolerance
    if not high_quality:
        coord_array = simplify_radial_distance(coord_array, sq_tolerance)
    return simplify_douglas_peucker(coord_array, sq_tolerance)
