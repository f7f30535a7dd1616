"""Threshold records and the registry that owns them."""

import itertools
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from numbers import Real
from typing import TypeAlias

from thermometer.lib.config import Direction
from thermometer.lib.exceptions import InvalidConfigError
from thermometer.logging import get_logger

logger = get_logger("lib.thresholds")


@dataclass(frozen=True, slots=True, eq=False)
class ThresholdId:
    """Opaque handle returned by registration.

    Compared by identity only: two handles are equal only if they are the
    same object, so a handle from one registry never matches another's.
    """

    seq: int

    def __repr__(self) -> str:
        return f"ThresholdId(#{self.seq})"


@dataclass(frozen=True, slots=True)
class ThresholdEvent:
    """Details about a threshold firing."""

    temperature: float
    threshold_value: float
    direction: Direction


ThresholdCallback: TypeAlias = Callable[[ThresholdEvent], None]


@dataclass(slots=True)
class Threshold:
    """A watched trigger value and its latch state.

    ``armed`` is True while the threshold may fire; it is cleared when the
    threshold fires and set again once the reading leaves the band.
    """

    trigger_value: float
    callback: ThresholdCallback
    direction: Direction = Direction.EITHER
    tolerance: float = 0.0
    armed: bool = field(default=True)

    @property
    def lower_bound(self) -> float:
        return self.trigger_value - self.tolerance

    @property
    def upper_bound(self) -> float:
        return self.trigger_value + self.tolerance

    def in_band(self, value: float) -> bool:
        """Check if value lies in the inclusive tolerance band."""
        return self.lower_bound <= value <= self.upper_bound


def _finite(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidConfigError(f"{name} must be a number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise InvalidConfigError(f"{name} must be finite, got {value!r}")
    return result


class ThresholdRegistry:
    """Maps opaque ThresholdIds to Threshold records.

    Iteration order is not part of the contract.
    """

    def __init__(self, default_tolerance: float) -> None:
        tolerance = _finite(default_tolerance, "Default tolerance")
        if tolerance < 0:
            raise InvalidConfigError(
                f"Default tolerance must be >= 0, got {default_tolerance!r}"
            )
        self.default_tolerance = tolerance
        self._thresholds: dict[ThresholdId, Threshold] = {}
        self._ids = itertools.count(1)

    def register(
        self,
        trigger_value: float,
        callback: ThresholdCallback,
        direction: Direction | str = Direction.EITHER,
        tolerance: float | None = None,
    ) -> ThresholdId:
        """Register a threshold and return its handle.

        Raises:
            InvalidConfigError: If the trigger value or tolerance is not a
                finite number, the tolerance is negative, the direction is
                unknown, or the callback is not callable.
        """
        trigger = _finite(trigger_value, "Threshold value")
        if tolerance is None:
            tolerance = self.default_tolerance
        tol = _finite(tolerance, "Tolerance")
        if tol < 0:
            raise InvalidConfigError(f"Tolerance must be >= 0, got {tolerance!r}")
        if not callable(callback):
            raise InvalidConfigError("Threshold callback must be callable")
        try:
            resolved = Direction(direction)
        except ValueError as e:
            raise InvalidConfigError(f"Unknown direction: {direction!r}") from e

        threshold_id = ThresholdId(next(self._ids))
        self._thresholds[threshold_id] = Threshold(
            trigger_value=trigger,
            callback=callback,
            direction=resolved,
            tolerance=tol,
        )
        logger.debug(
            "Registered threshold %r at %.2f±%.2f (%s)",
            threshold_id,
            trigger,
            tol,
            resolved.value,
        )
        return threshold_id

    def unregister(self, threshold_id: ThresholdId) -> bool:
        """Remove a threshold. Returns whether it was registered."""
        removed = self._thresholds.pop(threshold_id, None) is not None
        if removed:
            logger.debug("Removed threshold %r", threshold_id)
        return removed

    def get(self, threshold_id: ThresholdId) -> Threshold | None:
        return self._thresholds.get(threshold_id)

    def items(self) -> list[tuple[ThresholdId, Threshold]]:
        """Snapshot of registered thresholds.

        A snapshot so callbacks may add or remove thresholds mid-pass.
        """
        return list(self._thresholds.items())

    def __iter__(self) -> Iterator[Threshold]:
        return iter(list(self._thresholds.values()))

    def __len__(self) -> int:
        return len(self._thresholds)

    def __contains__(self, threshold_id: object) -> bool:
        return threshold_id in self._thresholds
