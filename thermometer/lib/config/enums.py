"""Enumerations for the thermometer package."""

from enum import StrEnum


class Direction(StrEnum):
    """Crossing direction a threshold watches for, or that was observed."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    EITHER = "either"

    @classmethod
    def _missing_(cls, value: object) -> "Direction | None":
        # "both" is accepted as an alias for EITHER
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "both":
                return cls.EITHER
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class Unit(StrEnum):
    """Temperature units."""

    CELSIUS = "°C"
    FAHRENHEIT = "°F"
