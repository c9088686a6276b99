from typing import Any, List, Optional, Union

from pydantic import AliasPath, BaseModel, ConfigDict, Discriminator, Field, Tag
from typing_extensions import Annotated, Literal


class PolygonGeometry(BaseModel):
    """data representation of a timezone geometry consisting of a single polygon with holes"""

    type: Literal["Polygon"]
    # depth: 3
    coordinates: List[List[List[float]]]

    @property
    def outer_rings(self) -> List[List[List[float]]]:
        # the first ring is the boundary, everything else is a hole
        return self.coordinates[:1]


class MultiPolygonGeometry(BaseModel):
    """data representation of a timezone geometry consisting of multiple polygons with holes"""

    type: Literal["MultiPolygon"]
    # depth: 4
    coordinates: List[List[List[List[float]]]]

    @property
    def outer_rings(self) -> List[List[List[float]]]:
        return [polygon[0] for polygon in self.coordinates if polygon]


class UnsupportedGeometry(BaseModel):
    """any other geometry type (Point, LineString, GeometryCollection...). will be skipped"""

    model_config = ConfigDict(extra="allow")

    type: str

    @property
    def outer_rings(self) -> List[List[List[float]]]:
        return []


def _geometry_kind(value: Any) -> str:
    if isinstance(value, dict):
        geometry_type = value.get("type")
    else:
        geometry_type = getattr(value, "type", None)
    if geometry_type in ("Polygon", "MultiPolygon"):
        return geometry_type
    return "unsupported"


Geometry = Annotated[
    Union[
        Annotated[PolygonGeometry, Tag("Polygon")],
        Annotated[MultiPolygonGeometry, Tag("MultiPolygon")],
        Annotated[UnsupportedGeometry, Tag("unsupported")],
    ],
    Discriminator(_geometry_kind),
]


class Timezone(BaseModel):
    """data representation of a timezone"""

    type: Literal["Feature"]
    id: str = Field(..., validation_alias=AliasPath("properties", "tzid"))
    geometry: Optional[Geometry] = None


class GeoJSON(BaseModel):
    """schema for a timezone dataset in GeoJSON format"""

    type: Literal["FeatureCollection"]
    features: List[Timezone]
