"""
geovalidate

Structural and semantic validation of RFC 7946 GeoJSON objects.
"""

__version__ = "0.1.0"

from geovalidate.bbox import validate_bbox
from geovalidate.config import ValidatorSettings, get_settings
from geovalidate.diagnostics import Diagnostic, Severity, ValidationResult
from geovalidate.dispatcher import is_valid, validate
from geovalidate.errors import ErrorCode, GeoJSONValidationError, GeoValidateError
from geovalidate.feature import validate_feature, validate_feature_collection
from geovalidate.geometry import validate_geometry
from geovalidate.position import validate_position

__all__ = [
    "validate",
    "is_valid",
    "validate_position",
    "validate_bbox",
    "validate_geometry",
    "validate_feature",
    "validate_feature_collection",
    "ValidationResult",
    "Diagnostic",
    "Severity",
    "ErrorCode",
    "GeoValidateError",
    "GeoJSONValidationError",
    "ValidatorSettings",
    "get_settings",
]
