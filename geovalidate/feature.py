"""
GeoJSON Feature and FeatureCollection validation (RFC 7946 sections 3.2, 3.3).

Feature geometry is delegated to the geometry validator. FeatureCollection
members are validated independently of each other, either sequentially or
on a thread pool for large collections; diagnostics are always merged in
feature order so both modes report identically.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from geovalidate.bbox import check_member_bbox
from geovalidate.config import ValidatorSettings, get_settings
from geovalidate.diagnostics import Path, ValidationResult
from geovalidate.errors import ErrorCode
from geovalidate.geometry import (
    Dimensions,
    WalkContext,
    check_geometry,
    collect_foreign_members,
)
from geovalidate.logger import get_logger
from geovalidate.models import Feature, FeatureCollection
from geovalidate.position import is_number

logger = get_logger(__name__)

FEATURE_MEMBERS = ("type", "geometry", "properties", "id", "bbox")
FEATURE_RESERVED = ("coordinates", "geometries", "features")
COLLECTION_MEMBERS = ("type", "features", "bbox")
COLLECTION_RESERVED = ("coordinates", "geometries", "geometry", "properties")

# Returned by a feature task that started after the deadline
_DEADLINE_PASSED = object()


def _check_envelope(value: Any, expected_type: str, path: Path, ctx: WalkContext) -> bool:
    """Object with the expected 'type' member."""
    if not isinstance(value, dict):
        ctx.collector.error(
            path,
            ErrorCode.NOT_AN_OBJECT,
            f"{expected_type} must be an object, got {type(value).__name__}",
        )
        return False

    if "type" not in value:
        ctx.collector.error(path, ErrorCode.MISSING_TYPE, f"{expected_type} must have a 'type' member")
        return False

    if value["type"] != expected_type:
        ctx.collector.error(
            path + ("type",),
            ErrorCode.INVALID_TYPE,
            f"type must be '{expected_type}', got {value['type']!r}",
        )
        return False

    return True


def check_feature(
    value: Any,
    path: Path,
    ctx: WalkContext,
    dims: Dimensions | None = None,
) -> Feature | None:
    """
    Validate a Feature, recording diagnostics in ``ctx.collector``.

    Returns:
        The Feature model, or None if it has errors
    """
    if not _check_envelope(value, "Feature", path, ctx):
        return None

    errors_before = ctx.collector.error_count()
    own_dims = Dimensions()
    foreign = collect_foreign_members(value, FEATURE_MEMBERS, FEATURE_RESERVED, path, ctx.collector)

    # null geometry means an unlocated feature
    geometry = None
    if "geometry" not in value:
        ctx.collector.error(path, ErrorCode.MISSING_GEOMETRY, "Feature must have a 'geometry' member")
    elif value["geometry"] is not None:
        geometry = check_geometry(value["geometry"], path + ("geometry",), ctx, 0, own_dims)

    properties = None
    if "properties" not in value:
        ctx.collector.error(
            path, ErrorCode.MISSING_PROPERTIES, "Feature must have a 'properties' member"
        )
    else:
        properties = value["properties"]
        if properties is not None and not isinstance(properties, dict):
            ctx.collector.error(
                path + ("properties",),
                ErrorCode.INVALID_PROPERTIES,
                f"properties must be an object or null, got {type(properties).__name__}",
            )

    feature_id = value.get("id")
    if "id" in value and not (isinstance(feature_id, str) or is_number(feature_id)):
        ctx.collector.error(
            path + ("id",),
            ErrorCode.INVALID_ID,
            f"id must be a string or a finite number, got {feature_id!r}",
        )

    bbox = None
    if "bbox" in value:
        bbox = check_member_bbox(value["bbox"], own_dims.inferred, path + ("bbox",), ctx.collector)

    if dims is not None:
        dims.update(own_dims)

    if ctx.collector.error_count() != errors_before:
        return None
    return Feature(
        geometry=geometry,
        properties=properties,
        id=feature_id,
        bbox=bbox,
        foreign_members=foreign,
    )


def _feature_task(value: Any, path: Path, ctx: WalkContext, deadline: float | None):
    """Validate one collection member in isolation."""
    if deadline is not None and time.monotonic() >= deadline:
        return _DEADLINE_PASSED
    sub = ctx.fork()
    dims = Dimensions()
    feature = check_feature(value, path, sub, dims)
    return feature, sub.collector.diagnostics, dims


def check_feature_collection(
    value: Any,
    path: Path,
    ctx: WalkContext,
    deadline: float | None = None,
) -> FeatureCollection | None:
    """
    Validate a FeatureCollection, recording diagnostics in ``ctx.collector``.

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the document
        ctx: Walk state (collector and options)
        deadline: time.monotonic() value after which remaining features are skipped

    Returns:
        The FeatureCollection model, or None if it has errors
    """
    if not _check_envelope(value, "FeatureCollection", path, ctx):
        return None

    errors_before = ctx.collector.error_count()
    foreign = collect_foreign_members(
        value, COLLECTION_MEMBERS, COLLECTION_RESERVED, path, ctx.collector
    )

    if "features" not in value:
        ctx.collector.error(
            path, ErrorCode.MISSING_FEATURES, "FeatureCollection must have a 'features' member"
        )
        return None

    members = value["features"]
    members_path = path + ("features",)
    if not isinstance(members, list):
        ctx.collector.error(
            members_path,
            ErrorCode.NOT_AN_ARRAY,
            f"'features' must be an array, got {type(members).__name__}",
        )
        return None

    dims = Dimensions()
    features = []

    def task(indexed):
        i, member = indexed
        return _feature_task(member, members_path + (i,), ctx, deadline)

    if ctx.parallel_workers and len(members) >= ctx.parallel_threshold:
        logger.debug(
            f"Validating {len(members)} features on {ctx.parallel_workers} threads",
            extra={"features": len(members), "workers": ctx.parallel_workers},
        )
        with ThreadPoolExecutor(max_workers=ctx.parallel_workers) as executor:
            outcomes = list(executor.map(task, enumerate(members)))
    else:
        outcomes = map(task, enumerate(members))

    for i, outcome in enumerate(outcomes):
        if outcome is _DEADLINE_PASSED:
            ctx.collector.error(
                members_path + (i,),
                ErrorCode.DEADLINE_EXCEEDED,
                f"validation deadline passed, {len(members) - i} features not validated",
            )
            logger.warning(
                "Validation deadline passed",
                extra={"validated": i, "skipped": len(members) - i},
            )
            break
        feature, diagnostics, feature_dims = outcome
        ctx.collector.extend(diagnostics)
        dims.update(feature_dims)
        if feature is not None:
            features.append(feature)

    bbox = None
    if "bbox" in value:
        bbox = check_member_bbox(value["bbox"], dims.inferred, path + ("bbox",), ctx.collector)

    if ctx.collector.error_count() != errors_before:
        return None
    return FeatureCollection(features=tuple(features), bbox=bbox, foreign_members=foreign)


def validate_feature(
    value: Any,
    path: Path = (),
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """
    Validate a GeoJSON Feature object.

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the enclosing document
        settings: Validator settings (defaults to get_settings())

    Returns:
        ValidationResult with the Feature model if valid
    """
    ctx = WalkContext.from_settings(settings or get_settings())
    feature = check_feature(value, path, ctx)
    return ctx.collector.result(feature)


def validate_feature_collection(
    value: Any,
    path: Path = (),
    settings: ValidatorSettings | None = None,
    timeout: float | None = None,
) -> ValidationResult:
    """
    Validate a GeoJSON FeatureCollection object.

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the enclosing document
        settings: Validator settings (defaults to get_settings())
        timeout: Seconds after which remaining features are skipped

    Returns:
        ValidationResult with the FeatureCollection model if valid
    """
    ctx = WalkContext.from_settings(settings or get_settings())
    deadline = time.monotonic() + timeout if timeout is not None else None
    collection = check_feature_collection(value, path, ctx, deadline)
    return ctx.collector.result(collection)
