"""
Top-level GeoJSON validation entry point.

Reads the root object's 'type' member and routes to the geometry, Feature or
FeatureCollection validator. Input that cannot be interpreted as GeoJSON at
all (not an object, no type, unknown type) yields exactly one diagnostic.
"""

import time
from typing import Any

from geovalidate.config import ValidatorSettings, get_settings
from geovalidate.diagnostics import DiagnosticCollector, ValidationResult
from geovalidate.errors import ErrorCode
from geovalidate.feature import check_feature, check_feature_collection
from geovalidate.geometry import WalkContext, check_geometry
from geovalidate.logger import ValidationCallLogger, get_logger
from geovalidate.models import GEOJSON_TYPES

logger = get_logger(__name__)


def _reject(code: ErrorCode, message: str) -> ValidationResult:
    collector = DiagnosticCollector()
    collector.error((), code, message)
    return collector.result()


def validate(
    value: Any,
    settings: ValidatorSettings | None = None,
    timeout: float | None = None,
) -> ValidationResult:
    """
    Validate a parsed JSON value as a GeoJSON object.

    Args:
        value: Parsed JSON value (dict/list/str/number/bool/None)
        settings: Validator settings (defaults to get_settings())
        timeout: Seconds after which the remaining features of a
            FeatureCollection are skipped

    Returns:
        ValidationResult with the parsed model if valid and every
        diagnostic found, in document order

    Example:
        result = validate({"type": "Point", "coordinates": [102.0, 0.5]})
        if not result.valid:
            for line in result.format_lines():
                print(line)
    """
    if not isinstance(value, dict):
        return _reject(
            ErrorCode.NOT_AN_OBJECT,
            f"GeoJSON object must be a JSON object, got {type(value).__name__}",
        )

    if "type" not in value:
        return _reject(ErrorCode.MISSING_TYPE, "GeoJSON object must have a 'type' member")

    root_type = value["type"]
    if not isinstance(root_type, str) or root_type not in GEOJSON_TYPES:
        return _reject(
            ErrorCode.UNKNOWN_TYPE,
            f"unknown GeoJSON type {root_type!r}. Must be one of: {', '.join(sorted(GEOJSON_TYPES))}",
        )

    settings = settings or get_settings()
    ctx = WalkContext.from_settings(settings)
    deadline = time.monotonic() + timeout if timeout is not None else None

    with ValidationCallLogger(logger, root_type, strict=settings.strict) as log:
        if root_type == "FeatureCollection":
            model = check_feature_collection(value, (), ctx, deadline)
        elif root_type == "Feature":
            model = check_feature(value, (), ctx)
        else:
            model = check_geometry(value, (), ctx)

        result = ctx.collector.result(model)
        log.set_result(result)

    return result


def is_valid(value: Any, settings: ValidatorSettings | None = None) -> bool:
    """Quick check if a value is valid GeoJSON."""
    return validate(value, settings).valid
