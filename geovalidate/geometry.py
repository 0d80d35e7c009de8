"""
GeoJSON Geometry validation (RFC 7946 section 3.1).

Validates the seven geometry types:
- Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon:
  coordinate arrays nested to a fixed depth per type
- GeometryCollection: an array of full Geometry objects, validated
  recursively with an explicit nesting depth counter

Every problem found is recorded as a path-qualified diagnostic; a bad
member deep inside a collection never stops validation of its siblings.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable

from geovalidate.bbox import check_member_bbox
from geovalidate.config import ValidatorSettings, get_settings
from geovalidate.diagnostics import DiagnosticCollector, Path, ValidationResult
from geovalidate.errors import ErrorCode
from geovalidate.models import (
    GEOMETRY_MODELS,
    GEOMETRY_TYPES,
    GeoJSONObject,
    GeometryCollection,
    GeometryKind,
    Position,
)
from geovalidate.position import check_position

MIN_LINE_POSITIONS = 2
MIN_RING_POSITIONS = 4

# Members with a GeoJSON meaning on other object types (RFC 7946 section 7.1)
RESERVED_MEMBERS = {
    "geometry": ("geometry", "properties", "features", "geometries"),
    "collection": ("geometry", "properties", "features", "coordinates"),
}
DEPRECATED_MEMBERS = ("crs",)


@dataclass
class WalkContext:
    """State shared by one walk over a document."""

    collector: DiagnosticCollector
    check_ranges: bool = False
    max_depth: int = 64
    parallel_workers: int = 0
    parallel_threshold: int = 1000

    @classmethod
    def from_settings(cls, settings: ValidatorSettings) -> "WalkContext":
        return cls(
            collector=DiagnosticCollector(settings.upgraded_codes),
            check_ranges=settings.check_ranges,
            max_depth=settings.max_depth,
            parallel_workers=settings.parallel_workers if settings.use_parallel else 0,
            parallel_threshold=settings.parallel_threshold,
        )

    def fork(self) -> "WalkContext":
        """Same options, fresh collector."""
        return replace(self, collector=self.collector.child())


@dataclass
class Dimensions:
    """Position dimensionalities seen while walking an object."""

    seen: set[int] = field(default_factory=set)

    def add(self, position: Position) -> None:
        self.seen.add(len(position))

    def update(self, other: "Dimensions") -> None:
        self.seen |= other.seen

    @property
    def inferred(self) -> int | None:
        """2 if all positions are 2D, 3 if any is 3D, None without positions."""
        return max(self.seen) if self.seen else None

    @property
    def mixed(self) -> bool:
        return len(self.seen) > 1


def collect_foreign_members(
    value: dict,
    defined: Iterable[str],
    reserved: Iterable[str],
    path: Path,
    collector: DiagnosticCollector,
) -> dict[str, Any]:
    """Return members outside ``defined``, warning about misused names."""
    defined = set(defined)
    reserved = set(reserved)
    foreign = {}
    for name, member in value.items():
        if name in defined:
            continue
        if name in reserved:
            collector.warning(
                path + (name,),
                ErrorCode.RESERVED_MEMBER,
                f"'{name}' has a GeoJSON meaning that does not apply to this object",
            )
        elif name in DEPRECATED_MEMBERS:
            collector.warning(
                path + (name,),
                ErrorCode.DEPRECATED_MEMBER,
                f"'{name}' was removed from GeoJSON by RFC 7946",
            )
        foreign[name] = member
    return foreign


# ============================================================
# Coordinate arrays
# ============================================================

def _check_positions(coords: Any, path: Path, ctx: WalkContext, dims: Dimensions):
    """Array of positions (MultiPoint, LineString, rings)."""
    if not isinstance(coords, list):
        ctx.collector.error(
            path,
            ErrorCode.NOT_AN_ARRAY,
            f"expected an array of positions, got {type(coords).__name__}",
        )
        return None

    positions = []
    valid = True
    for i, item in enumerate(coords):
        position = check_position(item, path + (i,), ctx.collector, ctx.check_ranges)
        if position is None:
            valid = False
        else:
            positions.append(position)
            dims.add(position)

    return tuple(positions) if valid else None


def _check_line(coords: Any, path: Path, ctx: WalkContext, dims: Dimensions):
    """LineString coordinates: at least two positions."""
    positions = _check_positions(coords, path, ctx, dims)
    if isinstance(coords, list) and len(coords) < MIN_LINE_POSITIONS:
        ctx.collector.error(
            path,
            ErrorCode.TOO_FEW_POSITIONS,
            f"a LineString must have at least {MIN_LINE_POSITIONS} positions, got {len(coords)}",
        )
        return None
    return positions


def ring_area(ring: tuple[Position, ...]) -> float:
    """Twice the signed planar area of a ring; positive when counter-clockwise."""
    area = 0.0
    for (x1, y1, *_), (x2, y2, *_) in zip(ring, ring[1:] + ring[:1]):
        area += x1 * y2 - x2 * y1
    return area


def _check_ring(
    coords: Any,
    path: Path,
    ctx: WalkContext,
    dims: Dimensions,
    exterior: bool,
):
    """Linear ring: at least four positions, closed, wound by role."""
    ring = _check_positions(coords, path, ctx, dims)
    if isinstance(coords, list) and len(coords) < MIN_RING_POSITIONS:
        ctx.collector.error(
            path,
            ErrorCode.TOO_FEW_POSITIONS,
            f"a linear ring must have at least {MIN_RING_POSITIONS} positions, got {len(coords)}",
        )
        return None
    if ring is None:
        return None

    role = "exterior ring" if exterior else "hole"
    if ring[0] != ring[-1]:
        ctx.collector.warning(
            path,
            ErrorCode.RING_NOT_CLOSED,
            f"{role} is not closed (first position {list(ring[0])} "
            f"!= last position {list(ring[-1])})",
        )

    area = ring_area(ring)
    if exterior and area < 0:
        ctx.collector.warning(
            path,
            ErrorCode.WINDING_ORDER,
            "exterior ring should be counter-clockwise",
        )
    elif not exterior and area > 0:
        ctx.collector.warning(
            path,
            ErrorCode.WINDING_ORDER,
            "hole should be clockwise",
        )

    return ring


def _check_polygon(coords: Any, path: Path, ctx: WalkContext, dims: Dimensions):
    """Polygon coordinates: exterior ring followed by holes."""
    if not isinstance(coords, list):
        ctx.collector.error(
            path,
            ErrorCode.NOT_AN_ARRAY,
            f"expected an array of linear rings, got {type(coords).__name__}",
        )
        return None

    if not coords:
        ctx.collector.error(
            path,
            ErrorCode.TOO_FEW_POSITIONS,
            "a Polygon must have at least one linear ring",
        )
        return None

    rings = []
    valid = True
    for i, ring_coords in enumerate(coords):
        ring = _check_ring(ring_coords, path + (i,), ctx, dims, exterior=(i == 0))
        if ring is None:
            valid = False
        else:
            rings.append(ring)

    return tuple(rings) if valid else None


def _check_each(check: Callable, label: str):
    """Lift a coordinate check to an array of such coordinates."""

    def check_all(coords: Any, path: Path, ctx: WalkContext, dims: Dimensions):
        if not isinstance(coords, list):
            ctx.collector.error(
                path,
                ErrorCode.NOT_AN_ARRAY,
                f"expected an array of {label}, got {type(coords).__name__}",
            )
            return None

        parts = []
        valid = True
        for i, item in enumerate(coords):
            part = check(item, path + (i,), ctx, dims)
            if part is None:
                valid = False
            else:
                parts.append(part)

        return tuple(parts) if valid else None

    return check_all


def _check_point(coords: Any, path: Path, ctx: WalkContext, dims: Dimensions):
    position = check_position(coords, path, ctx.collector, ctx.check_ranges)
    if position is not None:
        dims.add(position)
    return position


COORDINATE_CHECKS = {
    GeometryKind.POINT.value: _check_point,
    GeometryKind.MULTI_POINT.value: _check_positions,
    GeometryKind.LINE_STRING.value: _check_line,
    GeometryKind.MULTI_LINE_STRING.value: _check_each(_check_line, "LineString coordinate arrays"),
    GeometryKind.POLYGON.value: _check_polygon,
    GeometryKind.MULTI_POLYGON.value: _check_each(_check_polygon, "Polygon coordinate arrays"),
}


# ============================================================
# Geometry objects
# ============================================================

def check_geometry(
    value: Any,
    path: Path,
    ctx: WalkContext,
    depth: int = 0,
    dims: Dimensions | None = None,
) -> GeoJSONObject | None:
    """
    Validate a Geometry object, recording diagnostics in ``ctx.collector``.

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the document
        ctx: Walk state (collector and options)
        depth: Number of GeometryCollections enclosing this value
        dims: Receives the dimensionality of every valid position found

    Returns:
        The geometry model, or None if the geometry has errors
    """
    if not isinstance(value, dict):
        ctx.collector.error(
            path,
            ErrorCode.NOT_AN_OBJECT,
            f"geometry must be an object, got {type(value).__name__}",
        )
        return None

    if "type" not in value:
        ctx.collector.error(path, ErrorCode.MISSING_TYPE, "geometry must have a 'type' member")
        return None

    geom_type = value["type"]
    if not isinstance(geom_type, str) or geom_type not in GEOMETRY_TYPES:
        ctx.collector.error(
            path + ("type",),
            ErrorCode.INVALID_TYPE,
            f"invalid geometry type {geom_type!r}. Must be one of: {', '.join(sorted(GEOMETRY_TYPES))}",
        )
        return None

    errors_before = ctx.collector.error_count()
    own_dims = Dimensions()

    if geom_type == GeometryKind.GEOMETRY_COLLECTION.value:
        geometry = _check_geometry_collection(value, path, ctx, depth + 1, own_dims)
    else:
        geometry = _check_simple_geometry(value, geom_type, path, ctx, own_dims)

    if dims is not None:
        dims.update(own_dims)

    if ctx.collector.error_count() != errors_before:
        return None
    return geometry


def _check_simple_geometry(
    value: dict,
    geom_type: str,
    path: Path,
    ctx: WalkContext,
    dims: Dimensions,
) -> GeoJSONObject | None:
    foreign = collect_foreign_members(
        value, ("type", "coordinates", "bbox"), RESERVED_MEMBERS["geometry"], path, ctx.collector
    )

    if "coordinates" not in value:
        ctx.collector.error(
            path,
            ErrorCode.MISSING_COORDINATES,
            f"{geom_type} must have a 'coordinates' member",
        )
        return None

    coords = value["coordinates"]
    coords_path = path + ("coordinates",)

    if isinstance(coords, list) and not coords:
        ctx.collector.warning(
            coords_path,
            ErrorCode.EMPTY_GEOMETRY,
            f"{geom_type} has empty coordinates and is treated as a null geometry",
        )
        coordinates = ()
    else:
        coordinates = COORDINATE_CHECKS[geom_type](coords, coords_path, ctx, dims)

    if dims.mixed:
        ctx.collector.warning(
            coords_path,
            ErrorCode.MIXED_DIMENSIONS,
            f"{geom_type} mixes 2D and 3D positions",
        )

    bbox = None
    if "bbox" in value:
        bbox = check_member_bbox(value["bbox"], dims.inferred, path + ("bbox",), ctx.collector)

    if coordinates is None:
        return None
    return GEOMETRY_MODELS[geom_type](coordinates=coordinates, bbox=bbox, foreign_members=foreign)


def _check_geometry_collection(
    value: dict,
    path: Path,
    ctx: WalkContext,
    level: int,
    dims: Dimensions,
) -> GeometryCollection | None:
    if level > ctx.max_depth:
        ctx.collector.error(
            path,
            ErrorCode.TOO_DEEPLY_NESTED,
            f"GeometryCollection nesting exceeds the limit of {ctx.max_depth}",
        )
        return None

    if level > 1:
        ctx.collector.warning(
            path,
            ErrorCode.NESTED_GEOMETRY_COLLECTION,
            "GeometryCollections should not be nested",
        )

    foreign = collect_foreign_members(
        value, ("type", "geometries", "bbox"), RESERVED_MEMBERS["collection"], path, ctx.collector
    )

    if "geometries" not in value:
        ctx.collector.error(
            path,
            ErrorCode.MISSING_GEOMETRIES,
            "GeometryCollection must have a 'geometries' member",
        )
        return None

    members = value["geometries"]
    members_path = path + ("geometries",)
    geometries = []

    if not isinstance(members, list):
        ctx.collector.error(
            members_path,
            ErrorCode.NOT_AN_ARRAY,
            f"'geometries' must be an array, got {type(members).__name__}",
        )
        members = None
    elif not members:
        ctx.collector.warning(
            members_path,
            ErrorCode.EMPTY_GEOMETRY,
            "GeometryCollection is empty",
        )
    else:
        for i, member in enumerate(members):
            geometry = check_geometry(member, members_path + (i,), ctx, level, dims)
            if geometry is not None:
                geometries.append(geometry)

    bbox = None
    if "bbox" in value:
        bbox = check_member_bbox(value["bbox"], dims.inferred, path + ("bbox",), ctx.collector)

    if members is None:
        return None
    return GeometryCollection(geometries=tuple(geometries), bbox=bbox, foreign_members=foreign)


def validate_geometry(
    value: Any,
    path: Path = (),
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """
    Validate a GeoJSON Geometry object.

    Performs structural validation:
    - Has a 'type' member naming one of the seven geometry types
    - Has 'coordinates' (or 'geometries' for a GeometryCollection)
    - Coordinates are nested to the depth the type requires
    - Positions, rings and bbox follow RFC 7946

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the enclosing document
        settings: Validator settings (defaults to get_settings())

    Returns:
        ValidationResult with the geometry model if valid
    """
    ctx = WalkContext.from_settings(settings or get_settings())
    geometry = check_geometry(value, path, ctx)
    return ctx.collector.result(geometry)
