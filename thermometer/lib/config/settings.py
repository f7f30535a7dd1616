"""Settings models and configuration loading for the thermometer package."""

import logging
from functools import cached_property, lru_cache
from typing import Annotated, Any, Self

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from thermometer.lib.config.constants import DEFAULT_FETCH_URL, DEFAULT_TOLERANCE
from thermometer.lib.config.enums import Direction

# Entry separator and field separator for the THRESHOLDS watch list,
# e.g. "0,100:increasing,37.5:either:0.2"
_ENTRY_SEP = ","
_FIELD_SEP = ":"


def _validate_http_url(v: str) -> str:
    """Validate HTTP URL format."""
    HttpUrl(v)
    return v


def _validate_log_level(v: str) -> str:
    """Validate and normalize a logging level name."""
    level = v.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {v!r}")
    return level


_HttpUrlStr = Annotated[str, AfterValidator(_validate_http_url)]
_LogLevel = Annotated[str, AfterValidator(_validate_log_level)]


class ThresholdSpec(BaseModel):
    """A threshold declared in configuration (no callback attached yet)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    value: float
    direction: Direction = Direction.EITHER
    tolerance: float | None = Field(default=None, ge=0)

    @classmethod
    def parse(cls, raw: str) -> "ThresholdSpec":
        """Parse a '<value>[:<direction>[:<tolerance>]]' entry."""
        parts = [p.strip() for p in raw.split(_FIELD_SEP)]
        if not parts[0] or len(parts) > 3:
            raise ValueError(f"Malformed threshold entry: {raw!r}")
        data: dict[str, Any] = {"value": parts[0]}
        if len(parts) > 1 and parts[1]:
            data["direction"] = Direction(parts[1])
        if len(parts) > 2 and parts[2]:
            data["tolerance"] = parts[2]
        return cls.model_validate(data)


def parse_threshold_specs(raw: str) -> tuple[ThresholdSpec, ...]:
    """Parse a comma-separated watch list. Empty entries are ignored."""
    return tuple(
        ThresholdSpec.parse(entry)
        for entry in raw.split(_ENTRY_SEP)
        if entry.strip()
    )


class FetchSettings(BaseModel):
    """Remote temperature fetch settings."""

    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_FETCH_URL
    timeout_sec: float = 10.0
    max_retries: int = 1
    initial_backoff_sec: float = 1.0


class PollingSettings(BaseModel):
    """Polling service settings."""

    model_config = ConfigDict(frozen=True)

    frequency_sec: int = 60
    thresholds: tuple[ThresholdSpec, ...] = ()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Thresholds
    default_tolerance: float = Field(default=DEFAULT_TOLERANCE, ge=0, allow_inf_nan=False)
    thresholds: str = ""  # Comma-separated watch list for the polling service

    # Fetch
    fetch_url: _HttpUrlStr = DEFAULT_FETCH_URL
    fetch_timeout_sec: float = Field(default=10.0, gt=0)
    fetch_max_retries: int = Field(default=1, ge=1)
    fetch_initial_backoff_sec: float = Field(default=1.0, ge=0)

    # Polling
    polling_frequency_sec: int = Field(default=60, ge=1)

    # Logging
    log_level: _LogLevel = "INFO"

    @cached_property
    def fetch(self) -> FetchSettings:
        """Get fetch settings as nested object."""
        return FetchSettings(
            url=self.fetch_url,
            timeout_sec=self.fetch_timeout_sec,
            max_retries=self.fetch_max_retries,
            initial_backoff_sec=self.fetch_initial_backoff_sec,
        )

    @cached_property
    def polling(self) -> PollingSettings:
        """Get polling settings as nested object."""
        return PollingSettings(
            frequency_sec=self.polling_frequency_sec,
            thresholds=parse_threshold_specs(self.thresholds),
        )

    @model_validator(mode="after")
    def validate_settings(self) -> Self:
        """Validate the threshold watch list."""
        errors: list[str] = []

        for entry in self.thresholds.split(_ENTRY_SEP):
            if not entry.strip():
                continue
            try:
                ThresholdSpec.parse(entry)
            except (ValueError, ValidationError) as e:
                errors.append(f"THRESHOLDS entry {entry.strip()!r}: {e}")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n  - "
                + "\n  - ".join(errors)
            )

        return self


# Settings override for testing - allows injecting custom Settings without
# modifying environment variables or clearing the lru_cache.
_settings_override: Settings | None = None


@lru_cache(maxsize=1)
def _load_settings() -> Settings:
    """Load settings from environment (cached)."""
    return Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns the test override if set, otherwise loads from environment
    variables (cached after first load). For testing, use set_settings()
    from thermometer.lib.config.testing to override.
    """
    if _settings_override is not None:
        return _settings_override
    return _load_settings()
