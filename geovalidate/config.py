"""
Configuration settings for geovalidate.

Settings are loaded from environment variables with the GEOVALIDATE_ prefix
(e.g. GEOVALIDATE_MAX_DEPTH=32, GEOVALIDATE_STRICT=true) or from a .env file
in the current directory. Explicit keyword arguments always win.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from geovalidate.errors import STRICT_UPGRADABLE_CODES, ErrorCode

# Nesting costs two Python frames per level, so keep under the default recursion limit
MAX_DEPTH_LIMIT = 256


class ValidatorSettings(BaseSettings):
    """Validator settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEOVALIDATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Nesting limit for GeometryCollections
    max_depth: int = Field(
        default=64,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Maximum GeometryCollection nesting depth",
    )

    # Optional WGS84 range checks (off: RFC 7946 allows other CRS by prior arrangement)
    check_ranges: bool = Field(
        default=False,
        description="Reject longitudes outside [-180, 180] and latitudes outside [-90, 90]",
    )

    # Strict profile
    strict: bool = Field(
        default=False,
        description="Report the codes in strict_codes as errors instead of warnings",
    )
    strict_codes: Annotated[list[ErrorCode], NoDecode] = Field(
        default_factory=lambda: list(STRICT_UPGRADABLE_CODES),
        description="Warning codes upgraded to errors when strict is enabled",
    )

    # FeatureCollection parallelism
    parallel_workers: int = Field(
        default=0,
        ge=0,
        description="Worker threads for large FeatureCollections (0 = sequential)",
    )
    parallel_threshold: int = Field(
        default=1000,
        ge=1,
        description="Minimum number of features before parallel validation kicks in",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("strict_codes", mode="before")
    @classmethod
    def parse_codes(cls, v):
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        return v

    @property
    def upgraded_codes(self) -> frozenset[ErrorCode]:
        """Codes to report as errors under the active profile."""
        if not self.strict:
            return frozenset()
        return frozenset(self.strict_codes)

    @property
    def use_parallel(self) -> bool:
        """Whether parallel feature validation is enabled at all."""
        return self.parallel_workers > 1


@lru_cache
def get_settings() -> ValidatorSettings:
    """Get cached settings instance."""
    return ValidatorSettings()
