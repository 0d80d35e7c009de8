"""
Diagnostic codes and exceptions for geovalidate.

This module provides:
- ErrorCode constants naming every kind of validation finding
- Exception classes for callers that prefer raising over inspecting results
- Standardized error response formatting

Usage:
    from geovalidate.errors import ErrorCode, GeoJSONValidationError

    result = validate(document)
    try:
        result.raise_for_errors()
    except GeoJSONValidationError as e:
        return e.to_dict()
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Diagnostic codes reported by the validators."""

    # Structural
    NOT_AN_ARRAY = "NotAnArray"
    NOT_AN_OBJECT = "NotAnObject"
    WRONG_ARITY = "WrongArity"
    MISSING_TYPE = "MissingType"
    INVALID_TYPE = "InvalidType"
    UNKNOWN_TYPE = "UnknownType"
    MISSING_COORDINATES = "MissingCoordinates"
    MISSING_GEOMETRIES = "MissingGeometries"
    MISSING_GEOMETRY = "MissingGeometry"
    MISSING_PROPERTIES = "MissingProperties"
    MISSING_FEATURES = "MissingFeatures"

    # Numeric
    NON_NUMERIC_ELEMENT = "NonNumericElement"
    INVALID_PROPERTIES = "InvalidProperties"
    INVALID_ID = "InvalidId"
    OUT_OF_RANGE = "OutOfRange"

    # Geometric
    TOO_FEW_POSITIONS = "TooFewPositions"
    RING_NOT_CLOSED = "RingNotClosed"
    WINDING_ORDER = "WindingOrder"
    DIMENSION_MISMATCH = "DimensionMismatch"
    MIXED_DIMENSIONS = "MixedDimensions"
    TOO_DEEPLY_NESTED = "TooDeeplyNested"
    EMPTY_GEOMETRY = "EmptyGeometry"
    NESTED_GEOMETRY_COLLECTION = "NestedGeometryCollection"
    EXTRA_POSITION_ELEMENTS = "ExtraPositionElements"

    # Range
    INVERTED_RANGE = "InvertedRange"

    # Members
    RESERVED_MEMBER = "ReservedMember"
    DEPRECATED_MEMBER = "DeprecatedMember"

    # Deadline
    DEADLINE_EXCEEDED = "DeadlineExceeded"

    # Generic
    VALIDATION_ERROR = "ValidationError"


# Codes for SHOULD-level rules that the strict profile may upgrade to errors
STRICT_UPGRADABLE_CODES = (
    ErrorCode.RING_NOT_CLOSED,
    ErrorCode.WINDING_ORDER,
    ErrorCode.EXTRA_POSITION_ELEMENTS,
    ErrorCode.MIXED_DIMENSIONS,
    ErrorCode.NESTED_GEOMETRY_COLLECTION,
)


class GeoValidateError(Exception):
    """Base exception for geovalidate errors.

    Attributes:
        message: Human-readable error message
        code: ErrorCode for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a standardized error response dict."""
        if self.details:
            return create_error_response(self.message, self.code, details=self.details)
        return create_error_response(self.message, self.code)


class GeoJSONValidationError(GeoValidateError):
    """Raised by ValidationResult.raise_for_errors() when a document is invalid.

    Attributes:
        diagnostics: Every diagnostic of the failed validation (errors and warnings)
    """

    def __init__(self, diagnostics: list, details: dict[str, Any] | None = None):
        errors = [d for d in diagnostics if d.is_error]
        first = errors[0] if errors else None
        message = (
            f"Invalid GeoJSON: {first.format()}" if first else "Invalid GeoJSON"
        )
        if len(errors) > 1:
            message += f" (and {len(errors) - 1} more errors)"

        details = details or {}
        details["errors"] = [d.to_dict() for d in errors]
        super().__init__(
            message=message,
            code=first.code if first else ErrorCode.VALIDATION_ERROR,
            details=details,
        )
        self.diagnostics = list(diagnostics)


def create_error_response(
    message: str,
    code: ErrorCode | str = ErrorCode.VALIDATION_ERROR,
    **kwargs: Any,
) -> dict[str, Any]:
    """Create a standardized error response dict.

    Args:
        message: Human-readable error message
        code: Error code (ErrorCode enum or string)
        **kwargs: Additional fields to include in the response

    Returns:
        Standardized error response dict

    Examples:
        return create_error_response(
            "Document is not GeoJSON",
            ErrorCode.UNKNOWN_TYPE,
            path="type",
        )
    """
    result: dict[str, Any] = {
        "error": message,
        "code": code.value if isinstance(code, ErrorCode) else code,
    }
    result.update(kwargs)
    return result
