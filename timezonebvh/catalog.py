"""compiling the catalog of (simplified) timezone polygons

only the outer boundary of every polygon is being considered. holes are not modelled.
"""

from collections import defaultdict
from typing import DefaultDict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from timezonebvh.configs import (
    SIMPLIFICATION_TOLERANCE,
    CoordinateArray,
    RingSink,
)
from timezonebvh.geojson_schema import GeoJSON, Timezone
from timezonebvh.geometry import BoundingBox, Point, compute_bbox
from timezonebvh.simplification import simplify_polyline


class PolygonSummary(BaseModel):
    """all the information about a single polygon required for building the BVH

    the aliases are short, because the summaries are being JSON serialised as part of the BVH
    and the payload should be as small as possible
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # NOTE: not unique. a timezone might consist of multiple polygons
    timezone_id: str = Field(alias="tz")
    # index of the polygon within its timezone (multipolygon case)
    ring_index: int = Field(alias="i", ge=0)
    bounding_box: BoundingBox = Field(alias="b")
    # center of the bounding box, used as sort key only
    midpoint: Point = Field(alias="mp")

    @classmethod
    def from_bbox(
        cls, timezone_id: str, ring_index: int, bbox: BoundingBox
    ) -> "PolygonSummary":
        return cls(
            timezone_id=timezone_id,
            ring_index=ring_index,
            bounding_box=bbox,
            midpoint=bbox.midpoint,
        )


class CatalogStatistics(BaseModel):
    nr_of_features: int = 0
    nr_of_skipped_features: int = 0
    nr_of_rings: int = 0
    nr_of_degenerate_rings: int = 0
    nr_of_coords_original: int = 0
    nr_of_coords_simplified: int = 0


class PolygonCatalog(BaseModel):
    summaries: List[PolygonSummary]
    statistics: CatalogStatistics = Field(default_factory=CatalogStatistics)

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "PolygonCatalog":
        keys = {(s.timezone_id, s.ring_index) for s in self.summaries}
        if len(keys) != len(self.summaries):
            raise ValueError("(timezone id, ring index) pairs must be unique")
        return self

    @property
    def nr_of_polygons(self) -> int:
        return len(self.summaries)

    @property
    def zone_names(self) -> List[str]:
        """the distinct timezone names in the order of their first occurrence"""
        return list(dict.fromkeys(s.timezone_id for s in self.summaries))

    @property
    def nr_of_zones(self) -> int:
        return len(self.zone_names)


def to_ring_array(ring: List[List[float]]) -> CoordinateArray:
    """GeoJSON positions might carry an altitude. only (lng, lat) are being used"""
    coords = np.array(ring, dtype=np.float64)
    if coords.ndim != 2 or coords.shape[1] < 2:
        raise ValueError(f"invalid ring coordinates with shape {coords.shape}")
    return coords[:, :2]


def build_polygon_catalog(
    geo_json: GeoJSON,
    tolerance: float = SIMPLIFICATION_TOLERANCE,
    ring_sink: Optional[RingSink] = None,
) -> PolygonCatalog:
    """simplifies all polygon boundaries and compiles one summary per non degenerate polygon

    :param geo_json: the parsed timezone dataset
    :param tolerance: simplification tolerance in degree
    :param ring_sink: called with (timezone id, ring index, simplified coordinates)
        for every polygon which made it into the catalog
    """
    summaries: List[PolygonSummary] = []
    stats = CatalogStatistics()
    # ring indices are counted per timezone id among the surviving polygons only
    ring_counters: DefaultDict[str, int] = defaultdict(int)

    print("compiling the polygon catalog...")
    for timezone in geo_json.features:
        stats.nr_of_features += 1
        if not _is_supported(timezone):
            stats.nr_of_skipped_features += 1
            continue

        tz_name = timezone.id
        for ring in timezone.geometry.outer_rings:
            stats.nr_of_rings += 1
            if not ring:
                stats.nr_of_degenerate_rings += 1
                continue
            coords = to_ring_array(ring)
            stats.nr_of_coords_original += len(coords)

            simplified = simplify_polyline(coords, tolerance)
            bbox = compute_bbox(simplified)
            # zero area: no polygon
            if bbox.is_degenerate():
                stats.nr_of_degenerate_rings += 1
                continue

            ring_index = ring_counters[tz_name]
            ring_counters[tz_name] += 1
            stats.nr_of_coords_simplified += len(simplified)
            if ring_sink is not None:
                ring_sink(tz_name, ring_index, simplified)
            summaries.append(PolygonSummary.from_bbox(tz_name, ring_index, bbox))

    print(
        f"...Done. {len(summaries)} polygons of {len(ring_counters)} zones in the catalog."
    )
    return PolygonCatalog(summaries=summaries, statistics=stats)


def _is_supported(timezone: Timezone) -> bool:
    geometry = timezone.geometry
    return geometry is not None and geometry.type in ("Polygon", "MultiPolygon")
