"""
Bounding box validation (RFC 7946 section 5).

A bbox holds all minimums followed by all maximums, one pair per
dimension. The longitude axis may have west > east to describe a box that
crosses the antimeridian, so only the other axes are checked for inverted
ranges.
"""

from typing import Any

from geovalidate.diagnostics import DiagnosticCollector, Path, ValidationResult
from geovalidate.errors import ErrorCode
from geovalidate.models import BBox
from geovalidate.position import AXIS_NAMES, is_number

VALID_DIMENSIONS = (2, 3)


def check_bbox(
    value: Any,
    expected_dims: int,
    path: Path,
    collector: DiagnosticCollector,
) -> BBox | None:
    """Validate a bbox array, recording diagnostics in ``collector``."""
    if expected_dims not in VALID_DIMENSIONS:
        raise ValueError(f"expected_dims must be 2 or 3, got {expected_dims!r}")

    if not isinstance(value, list):
        collector.error(
            path,
            ErrorCode.NOT_AN_ARRAY,
            f"bbox must be an array, got {type(value).__name__}",
        )
        return None

    if len(value) != 2 * expected_dims:
        collector.error(
            path,
            ErrorCode.WRONG_ARITY,
            f"bbox must have exactly {2 * expected_dims} values for "
            f"{expected_dims}D coordinates, got {len(value)}",
        )
        return None

    valid = True
    for i, element in enumerate(value):
        if not is_number(element):
            collector.error(
                path,
                ErrorCode.NON_NUMERIC_ELEMENT,
                f"bbox element {i} must be a finite number, got {element!r}",
            )
            valid = False
    if not valid:
        return None

    bbox = BBox(values=tuple(float(v) for v in value))

    # Axis 0 (longitude) is exempt: west > east crosses the antimeridian
    for axis in range(1, expected_dims):
        low, high = bbox.mins[axis], bbox.maxs[axis]
        if low > high:
            collector.error(
                path,
                ErrorCode.INVERTED_RANGE,
                f"bbox {AXIS_NAMES[axis]} minimum ({low}) is greater than maximum ({high})",
            )
            valid = False

    return bbox if valid else None


def check_member_bbox(
    value: Any,
    inferred_dims: int | None,
    path: Path,
    collector: DiagnosticCollector,
) -> BBox | None:
    """
    Validate the ``bbox`` member of a GeoJSON object against the
    dimensionality of the positions it encloses.

    With no positions to infer from (``inferred_dims`` is None), a 4- or
    6-element bbox is checked on its own terms.
    """
    if isinstance(value, list) and len(value) in (4, 6):
        bbox_dims = len(value) // 2
        if inferred_dims is None:
            return check_bbox(value, bbox_dims, path, collector)
        if bbox_dims != inferred_dims:
            collector.error(
                path,
                ErrorCode.DIMENSION_MISMATCH,
                f"bbox is {bbox_dims}D but the coordinates are {inferred_dims}D",
            )
            return None

    return check_bbox(value, inferred_dims or 2, path, collector)


def validate_bbox(
    value: Any,
    expected_dims: int,
    path: Path = ("bbox",),
) -> ValidationResult:
    """
    Validate a bounding box [min_1, ..., min_n, max_1, ..., max_n].

    Args:
        value: Parsed JSON value to validate
        expected_dims: Dimensionality of the enclosed positions (2 or 3)
        path: Location of the value in the enclosing document

    Returns:
        ValidationResult with a BBox if valid

    Raises:
        ValueError: If expected_dims is not 2 or 3
    """
    collector = DiagnosticCollector()
    bbox = check_bbox(value, expected_dims, path, collector)
    return collector.result(bbox)
