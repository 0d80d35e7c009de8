"""
Pydantic models for validated GeoJSON entities.

Instances are built by the validators only after the raw JSON passed the
corresponding checks, so these models describe well-formed GeoJSON. They are
frozen: nothing mutates them after construction.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# (longitude, latitude) or (longitude, latitude, altitude)
Position = Tuple[float, ...]


class GeometryKind(str, Enum):
    """The seven RFC 7946 geometry types."""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


GEOMETRY_TYPES = frozenset(kind.value for kind in GeometryKind)
GEOJSON_TYPES = GEOMETRY_TYPES | {"Feature", "FeatureCollection"}


class BBox(BaseModel):
    """Bounding box: all minimums followed by all maximums."""

    model_config = ConfigDict(frozen=True)

    values: Tuple[float, ...] = Field(..., description="[min_1, ..., min_n, max_1, ..., max_n]")

    @property
    def dimensions(self) -> int:
        return len(self.values) // 2

    @property
    def mins(self) -> Tuple[float, ...]:
        return self.values[: self.dimensions]

    @property
    def maxs(self) -> Tuple[float, ...]:
        return self.values[self.dimensions:]

    @property
    def crosses_antimeridian(self) -> bool:
        """West edge is east of the east edge."""
        return self.mins[0] > self.maxs[0]


class GeoJSONObject(BaseModel):
    """Members shared by every GeoJSON object."""

    model_config = ConfigDict(frozen=True)

    bbox: Optional[BBox] = None
    foreign_members: dict[str, Any] = Field(
        default_factory=dict,
        description="Members not defined by RFC 7946, kept as-is",
    )


class Point(GeoJSONObject):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(GeoJSONObject):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: Tuple[Position, ...]


class LineString(GeoJSONObject):
    type: Literal["LineString"] = "LineString"
    coordinates: Tuple[Position, ...]


class MultiLineString(GeoJSONObject):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: Tuple[Tuple[Position, ...], ...]


class Polygon(GeoJSONObject):
    type: Literal["Polygon"] = "Polygon"
    # Exterior ring first, then holes
    coordinates: Tuple[Tuple[Position, ...], ...]


class MultiPolygon(GeoJSONObject):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: Tuple[Tuple[Tuple[Position, ...], ...], ...]


class GeometryCollection(GeoJSONObject):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: Tuple["Geometry", ...]


Geometry = Annotated[
    Union[
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]

GeometryCollection.model_rebuild()


GEOMETRY_MODELS: dict[str, type[GeoJSONObject]] = {
    GeometryKind.POINT.value: Point,
    GeometryKind.MULTI_POINT.value: MultiPoint,
    GeometryKind.LINE_STRING.value: LineString,
    GeometryKind.MULTI_LINE_STRING.value: MultiLineString,
    GeometryKind.POLYGON.value: Polygon,
    GeometryKind.MULTI_POLYGON.value: MultiPolygon,
}


class Feature(GeoJSONObject):
    """A spatially bounded entity."""

    type: Literal["Feature"] = "Feature"
    geometry: Optional[Geometry] = None
    properties: Optional[dict[str, Any]] = None
    id: Optional[Union[str, int, float]] = None


class FeatureCollection(GeoJSONObject):
    """An ordered list of Features."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: Tuple[Feature, ...] = ()
