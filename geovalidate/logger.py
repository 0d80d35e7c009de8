"""
Logging configuration for geovalidate.

Provides structured logging with configurable log levels
and formatted output for debugging and monitoring.

Usage:
    from geovalidate.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Validation started", extra={"root_type": "Feature"})
"""

import logging
import os
import sys
import time
from functools import lru_cache
from typing import Any

from geovalidate.config import get_settings


PACKAGE_LOGGER = "geovalidate"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class ValidatorFormatter(logging.Formatter):
    """
    Formatter for validator logs.

    Renders ``time - logger - LEVEL - message`` and appends the fields
    passed through ``extra`` as ``| key=value ...``.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        ]
        return f"{line} | {' '.join(extras)}" if extras else line


class ValidationCallLogger:
    """
    Context manager for logging validation calls with timing and result tracking.

    Usage:
        with ValidationCallLogger(logger, "Feature") as log:
            result = run_validation(document)
            log.set_result(result)
            return result
    """

    def __init__(
        self,
        logger: logging.Logger,
        root_type: Any,
        **params: Any,
    ):
        self.logger = logger
        self.root_type = root_type
        self.params = params
        self.result: Any = None
        self._start_time: float = 0

    def __enter__(self) -> "ValidationCallLogger":
        self._start_time = time.perf_counter()
        self.logger.debug(
            f"Validating '{self.root_type}'",
            extra={"root_type": self.root_type, **self.params},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed_ms = (time.perf_counter() - self._start_time) * 1000

        if exc_val is not None:
            self.logger.error(
                f"Validation of '{self.root_type}' failed: {exc_val}",
                extra={
                    "root_type": self.root_type,
                    "elapsed_ms": f"{elapsed_ms:.2f}",
                    "error": str(exc_val),
                },
                exc_info=True,
            )
            return False

        self.logger.info(
            f"Validated '{self.root_type}'",
            extra={
                "root_type": self.root_type,
                "elapsed_ms": f"{elapsed_ms:.2f}",
                "result": self._summarize_result(self.result),
            },
        )
        return False

    def set_result(self, result: Any) -> None:
        """Set the result for logging."""
        self.result = result

    def _summarize_result(self, result: Any) -> str:
        """Create a brief summary of the result for logging."""
        if result is None:
            return "None"

        if hasattr(result, "errors") and hasattr(result, "warnings"):
            state = "valid" if result.valid else "invalid"
            return f"{state} errors={len(result.errors)} warnings={len(result.warnings)}"

        return str(type(result).__name__)


def get_log_level() -> int:
    """
    Get log level from the LOG_LEVEL environment variable,
    falling back to the log_level setting.

    Supports: DEBUG, INFO, WARNING, ERROR, CRITICAL
    Default: WARNING
    """
    level_name = (os.environ.get("LOG_LEVEL") or get_settings().log_level).upper()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    return level_map.get(level_name, logging.WARNING)


@lru_cache(maxsize=None)
def _package_logger() -> logging.Logger:
    """The ``geovalidate`` logger, owner of the single stderr handler."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = get_log_level()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ValidatorFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``geovalidate`` namespace.

    Names outside the namespace are nested below it, so every logger
    writes through the package handler.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
