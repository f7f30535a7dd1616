"""Centralized configuration for the thermometer package.

This package provides:
- Enums for threshold directions and temperature units
- Pydantic settings models for configuration
- Parsing of the threshold watch list used by the polling service
"""

from .constants import DEFAULT_FETCH_URL, DEFAULT_TOLERANCE
from .enums import Direction, Unit
from .settings import (
    FetchSettings,
    PollingSettings,
    Settings,
    ThresholdSpec,
    get_settings,
    parse_threshold_specs,
)

__all__ = [
    # Enums
    "Direction",
    "Unit",
    # Settings models
    "FetchSettings",
    "PollingSettings",
    "Settings",
    "ThresholdSpec",
    # Constants
    "DEFAULT_FETCH_URL",
    "DEFAULT_TOLERANCE",
    # Functions
    "get_settings",
    "parse_threshold_specs",
]
