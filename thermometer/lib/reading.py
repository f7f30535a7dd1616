"""Reading store holding the current and previous temperature."""

import math
from dataclasses import dataclass
from numbers import Real

from thermometer.lib.exceptions import InvalidInputError, NotInitializedError


@dataclass(frozen=True, slots=True)
class ReadingTransition:
    """The old/new pair produced by recording a reading.

    ``has_previous`` is False for the very first reading, in which case
    ``previous`` is the uninitialized default and carries no meaning.
    """

    previous: float
    current: float
    has_previous: bool

    @property
    def is_increasing(self) -> bool:
        return self.has_previous and self.current > self.previous

    @property
    def is_decreasing(self) -> bool:
        return self.has_previous and self.current < self.previous


def _coerce_reading(value: object) -> float:
    """Return value as a finite float, or raise InvalidInputError."""
    # bool is a Real subclass but never a temperature
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError()
    result = float(value)
    if not math.isfinite(result):
        raise InvalidInputError()
    return result


class ReadingStore:
    """Latest and previous temperature, in Celsius."""

    def __init__(self) -> None:
        self._current = 0.0
        self._previous = 0.0
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def current(self) -> float:
        if not self._initialized:
            raise NotInitializedError()
        return self._current

    @property
    def previous(self) -> float:
        if not self._initialized:
            raise NotInitializedError()
        return self._previous

    def record(self, value: object) -> ReadingTransition:
        """Shift the current value into previous and store the new one.

        Raises:
            InvalidInputError: If value is not a finite real number.
        """
        celsius = _coerce_reading(value)
        had_previous = self._initialized
        self._previous = self._current
        self._current = celsius
        self._initialized = True
        return ReadingTransition(
            previous=self._previous,
            current=self._current,
            has_previous=had_previous,
        )
