"""
Diagnostics and validation results.

A Diagnostic is one finding (path, code, message, severity). The
DiagnosticCollector accumulates them while a document is walked, and the
ValidationResult is what every public validator returns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

from geovalidate.errors import ErrorCode, GeoJSONValidationError

PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]


class Severity(str, Enum):
    """Severity of a diagnostic. Only errors make a document invalid."""

    ERROR = "error"
    WARNING = "warning"


def format_path(path: Iterable[PathSegment]) -> str:
    """
    Render a path as ``features[3].geometry.coordinates``.

    The document root renders as ``$``.
    """
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        elif out:
            out += f".{segment}"
        else:
            out = segment
    return out or "$"


def format_pointer(path: Iterable[PathSegment]) -> str:
    """Render a path as an RFC 6901 JSON pointer (``/features/3/geometry``)."""
    parts = []
    for segment in path:
        parts.append(str(segment).replace("~", "~0").replace("/", "~1"))
    return "".join(f"/{p}" for p in parts)


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding."""

    path: Path
    code: ErrorCode
    message: str
    severity: Severity = Severity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def location(self) -> str:
        return format_path(self.path)

    @property
    def pointer(self) -> str:
        return format_pointer(self.path)

    def format(self) -> str:
        """Format as ``path: message [severity]``."""
        return f"{self.location}: {self.message} [{self.severity.value}]"

    def to_dict(self) -> dict:
        return {
            "path": self.location,
            "pointer": self.pointer,
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
        }


class DiagnosticCollector:
    """
    Accumulates diagnostics for one validation run.

    Never raises. Warnings whose code is in ``upgraded_codes`` (the strict
    profile) are recorded as errors.
    """

    def __init__(self, upgraded_codes: Iterable[ErrorCode] = ()):
        self.upgraded_codes = frozenset(upgraded_codes)
        self.diagnostics: list[Diagnostic] = []
        self._error_count = 0

    def error(self, path: Path, code: ErrorCode, message: str) -> None:
        self.diagnostics.append(Diagnostic(tuple(path), code, message, Severity.ERROR))
        self._error_count += 1

    def warning(self, path: Path, code: ErrorCode, message: str) -> None:
        severity = Severity.ERROR if code in self.upgraded_codes else Severity.WARNING
        self.diagnostics.append(Diagnostic(tuple(path), code, message, severity))
        if severity is Severity.ERROR:
            self._error_count += 1

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.diagnostics.append(diagnostic)
            if diagnostic.is_error:
                self._error_count += 1

    def child(self) -> "DiagnosticCollector":
        """A fresh collector with the same profile, for independent sub-runs."""
        return DiagnosticCollector(self.upgraded_codes)

    def error_count(self) -> int:
        return self._error_count

    def is_valid(self) -> bool:
        return self._error_count == 0

    def result(self, value: Any = None) -> "ValidationResult":
        return ValidationResult(value=value, diagnostics=list(self.diagnostics))


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    value: Any = None  # Parsed model (Position, BBox, Geometry, Feature...)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(d.is_error for d in self.diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def error(self) -> str | None:
        """Formatted first error, if any."""
        errors = self.errors
        return errors[0].format() if errors else None

    @property
    def codes(self) -> list[ErrorCode]:
        return [d.code for d in self.diagnostics]

    def format_lines(self) -> list[str]:
        """One ``path: message [severity]`` line per diagnostic, in order."""
        return [d.format() for d in self.diagnostics]

    def raise_for_errors(self) -> None:
        """Raise GeoJSONValidationError if any error was found."""
        if not self.valid:
            raise GeoJSONValidationError(self.diagnostics)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        result: dict = {"valid": self.valid}
        errors = self.errors
        warnings = self.warnings
        if errors:
            result["error"] = errors[0].format()
            result["errors"] = [d.to_dict() for d in errors]
        if warnings:
            result["warnings"] = [d.to_dict() for d in warnings]
        return result
