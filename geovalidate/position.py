"""
Position validation.

A position is an array of two or three finite numbers: longitude, latitude
and an optional altitude. RFC 7946 allows (but discourages) further
elements; they are ignored with a warning.
"""

import math
from typing import Any

from geovalidate.diagnostics import DiagnosticCollector, Path, ValidationResult
from geovalidate.errors import ErrorCode
from geovalidate.models import Position

# WGS84 coordinate bounds, only enforced with check_ranges
LON_MIN, LON_MAX = -180.0, 180.0
LAT_MIN, LAT_MAX = -90.0, 90.0

AXIS_NAMES = ("longitude", "latitude", "altitude")


def is_number(value: Any) -> bool:
    """True for finite JSON numbers. Booleans are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def check_position(
    value: Any,
    path: Path,
    collector: DiagnosticCollector,
    check_ranges: bool = False,
) -> Position | None:
    """
    Validate one position, recording diagnostics in ``collector``.

    Returns:
        The position as a tuple of floats, or None if it is invalid
    """
    if not isinstance(value, list):
        collector.error(
            path,
            ErrorCode.NOT_AN_ARRAY,
            f"position must be an array, got {type(value).__name__}",
        )
        return None

    if len(value) < 2:
        collector.error(
            path,
            ErrorCode.WRONG_ARITY,
            f"position must have 2 or 3 elements [longitude, latitude, altitude], got {len(value)}",
        )
        return None

    if len(value) > 3:
        collector.warning(
            path,
            ErrorCode.EXTRA_POSITION_ELEMENTS,
            f"position has {len(value)} elements, only the first 3 are used",
        )

    elements = value[:3]
    valid = True
    for i, element in enumerate(elements):
        if not is_number(element):
            collector.error(
                path,
                ErrorCode.NON_NUMERIC_ELEMENT,
                f"{AXIS_NAMES[i]} (element {i}) must be a finite number, got {element!r}",
            )
            valid = False

    if not valid:
        return None

    position = tuple(float(e) for e in elements)

    if check_ranges:
        lng, lat = position[0], position[1]
        if not LON_MIN <= lng <= LON_MAX:
            collector.error(
                path,
                ErrorCode.OUT_OF_RANGE,
                f"longitude must be between {LON_MIN} and {LON_MAX} (got {lng})",
            )
            valid = False
        if not LAT_MIN <= lat <= LAT_MAX:
            collector.error(
                path,
                ErrorCode.OUT_OF_RANGE,
                f"latitude must be between {LAT_MIN} and {LAT_MAX} (got {lat})",
            )
            valid = False

    return position if valid else None


def validate_position(
    value: Any,
    path: Path = (),
    check_ranges: bool = False,
) -> ValidationResult:
    """
    Validate a single GeoJSON position.

    Args:
        value: Parsed JSON value to validate
        path: Location of the value in the enclosing document
        check_ranges: Whether to enforce WGS84 longitude/latitude ranges

    Returns:
        ValidationResult with the position tuple if valid
    """
    collector = DiagnosticCollector()
    position = check_position(value, path, collector, check_ranges)
    return collector.result(position)
