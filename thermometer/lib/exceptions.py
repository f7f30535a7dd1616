"""Custom exceptions for the thermometer package.

Every error raised by the reading store, the threshold registry and the
fetch adapter derives from ThermometerError so callers can catch the whole
family at once.
"""


class ThermometerError(Exception):
    """Base exception for all thermometer errors."""


class InvalidInputError(ThermometerError, ValueError):
    """Raised when a reading is not a real number."""

    def __init__(self, message: str = "Temperature must be a number") -> None:
        super().__init__(message)


class NotInitializedError(ThermometerError):
    """Raised when the temperature is queried before any reading."""

    def __init__(self, message: str = "Temperature has not been set") -> None:
        super().__init__(message)


class InvalidConfigError(ThermometerError, ValueError):
    """Raised when a threshold registration is malformed."""


class FetchFailureError(ThermometerError):
    """Raised when fetching a remote temperature fails for any reason."""


class CallbackError(ThermometerError):
    """Raised after an evaluation pass in which threshold callbacks failed.

    The pass itself always runs to completion; ``errors`` holds every
    exception raised by a callback during that pass.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = tuple(errors)
        super().__init__(
            f"{len(self.errors)} threshold callback(s) failed: "
            + "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        )
