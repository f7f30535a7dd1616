"""Temperature tracking with hysteresis threshold notifications."""

from thermometer.lib.config import Direction
from thermometer.lib.exceptions import (
    CallbackError,
    FetchFailureError,
    InvalidConfigError,
    InvalidInputError,
    NotInitializedError,
    ThermometerError,
)
from thermometer.lib.thresholds import ThresholdEvent, ThresholdId
from thermometer.thermometer import Thermometer, ThresholdConfig

__all__ = [
    "CallbackError",
    "Direction",
    "FetchFailureError",
    "InvalidConfigError",
    "InvalidInputError",
    "NotInitializedError",
    "Thermometer",
    "ThermometerError",
    "ThresholdConfig",
    "ThresholdEvent",
    "ThresholdId",
]
