"""Thermometer facade: readings, conversions, thresholds and remote fetch."""

from dataclasses import dataclass
from typing import Any

from thermometer.lib.alerts import check_thresholds
from thermometer.lib.config import Direction, get_settings
from thermometer.lib.exceptions import InvalidConfigError
from thermometer.lib.fetch import fetch_temperature
from thermometer.lib.reading import ReadingStore
from thermometer.lib.thresholds import (
    ThresholdCallback,
    ThresholdId,
    ThresholdRegistry,
)
from thermometer.lib.units import celsius_to_fahrenheit


@dataclass(frozen=True, slots=True)
class ThresholdConfig:
    """Registration parameters for a threshold.

    A tolerance of None uses the thermometer's default tolerance.
    """

    temp: float
    callback: ThresholdCallback
    direction: Direction | str = Direction.EITHER
    tolerance: float | None = None


class Thermometer:
    """Tracks a temperature and notifies thresholds when it is reached.

    Each instance holds its own readings and thresholds; instances never
    share state. Not thread-safe: readings must be recorded from one thread.
    """

    def __init__(self, default_tolerance: float | None = None) -> None:
        if default_tolerance is None:
            default_tolerance = get_settings().default_tolerance
        self._reading = ReadingStore()
        self._thresholds = ThresholdRegistry(default_tolerance)

    @property
    def default_tolerance(self) -> float:
        return self._thresholds.default_tolerance

    def set_temperature(self, celsius: float) -> None:
        """Record a reading in Celsius and evaluate every threshold.

        Raises:
            InvalidInputError: If celsius is not a finite number.
            CallbackError: If one or more threshold callbacks raised. The
                reading is still recorded and every threshold evaluated.
        """
        transition = self._reading.record(celsius)
        check_thresholds(self._thresholds, transition)

    def get_celsius(self) -> float:
        return self._reading.current

    def get_fahrenheit(self) -> float:
        return celsius_to_fahrenheit(self._reading.current)

    def add_threshold(
        self, config: ThresholdConfig | None = None, /, **kwargs: Any
    ) -> ThresholdId:
        """Register a threshold and return its handle for removal.

        Accepts either a ThresholdConfig or its fields as keywords, e.g.
        ``add_threshold(temp=0, callback=cb, direction="decreasing")``.

        Raises:
            InvalidConfigError: If both forms are mixed, required fields are
                missing, or the values are invalid.
        """
        if config is None:
            try:
                config = ThresholdConfig(**kwargs)
            except TypeError as e:
                raise InvalidConfigError(f"Invalid threshold config: {e}") from e
        elif kwargs:
            raise InvalidConfigError(
                "Pass either a ThresholdConfig or keyword fields, not both"
            )
        return self._thresholds.register(
            config.temp,
            config.callback,
            direction=config.direction,
            tolerance=config.tolerance,
        )

    def remove_threshold(self, threshold_id: ThresholdId) -> bool:
        return self._thresholds.unregister(threshold_id)

    async def fetch_temperature(self, url: str | None = None) -> float:
        """Fetch the current temperature and record it.

        Uses the configured fetch URL when url is None.

        Raises:
            FetchFailureError: If the fetch or the payload is bad.
        """
        cfg = get_settings().fetch
        celsius = await fetch_temperature(
            cfg.url if url is None else url,
            timeout_sec=cfg.timeout_sec,
            max_retries=cfg.max_retries,
            initial_backoff_sec=cfg.initial_backoff_sec,
        )
        self.set_temperature(celsius)
        return celsius
