"""Threshold evaluation and notification dispatch.

Each threshold is a small hysteresis state machine. A threshold fires once
when the reading enters its tolerance band in a matching direction, then
stays latched until the reading leaves the band. This prevents notification
spam when the temperature oscillates around the trigger value.

Single-threaded: evaluation and dispatch run synchronously on the caller's
thread, and callers must not record readings concurrently.
"""

from thermometer.lib.config import Direction, Unit
from thermometer.lib.exceptions import CallbackError
from thermometer.lib.reading import ReadingTransition
from thermometer.lib.thresholds import (
    Threshold,
    ThresholdEvent,
    ThresholdRegistry,
)
from thermometer.logging import get_logger

logger = get_logger("lib.alerts")


def resolve_direction(transition: ReadingTransition) -> Direction:
    """Return the direction actually observed for a transition.

    EITHER when there is no prior reading or the value is unchanged.
    """
    if transition.is_increasing:
        return Direction.INCREASING
    if transition.is_decreasing:
        return Direction.DECREASING
    return Direction.EITHER


def _matches_direction(
    threshold: Threshold, transition: ReadingTransition
) -> bool:
    if threshold.direction == Direction.INCREASING:
        return transition.is_increasing
    if threshold.direction == Direction.DECREASING:
        return transition.is_decreasing
    return True


def evaluate(
    threshold: Threshold, transition: ReadingTransition
) -> ThresholdEvent | None:
    """Update the threshold's latch and return an event if it fires."""
    # No prior reading, so no direction to gate on
    if not transition.has_previous and threshold.direction != Direction.EITHER:
        return None

    if not threshold.in_band(transition.current):
        threshold.armed = True
        return None

    if threshold.armed and _matches_direction(threshold, transition):
        threshold.armed = False
        return ThresholdEvent(
            temperature=transition.current,
            threshold_value=threshold.trigger_value,
            direction=resolve_direction(transition),
        )
    return None


def dispatch(threshold: Threshold, event: ThresholdEvent) -> None:
    """Invoke the threshold's callback with the event."""
    logger.info(
        "Threshold %.2f%s reached: %.2f%s (%s)",
        event.threshold_value,
        Unit.CELSIUS,
        event.temperature,
        Unit.CELSIUS,
        event.direction.value,
    )
    threshold.callback(event)


def check_thresholds(
    registry: ThresholdRegistry, transition: ReadingTransition
) -> list[ThresholdEvent]:
    """Evaluate every registered threshold against a transition.

    Callback failures are isolated: the threshold stays latched, the
    remaining thresholds are still evaluated, and a CallbackError carrying
    every failure is raised once the pass completes.

    Returns:
        The events that were dispatched, in evaluation order.
    """
    fired: list[ThresholdEvent] = []
    errors: list[Exception] = []

    for threshold_id, threshold in registry.items():
        # A callback earlier in the pass may have removed this threshold
        if threshold_id not in registry:
            continue
        event = evaluate(threshold, transition)
        if event is None:
            continue
        fired.append(event)
        try:
            dispatch(threshold, event)
        except Exception as e:
            logger.exception(
                "Callback for threshold %r failed", threshold_id
            )
            errors.append(e)

    if errors:
        raise CallbackError(errors) from errors[0]
    return fired


def format_event_message(event: ThresholdEvent) -> str:
    """Format a threshold event as a human-readable message."""
    if event.direction == Direction.EITHER:
        how = "reached"
    else:
        how = f"reached while {event.direction.value}"
    return (
        f"Temperature {how}: {event.temperature:.1f}{Unit.CELSIUS} "
        f"(threshold: {event.threshold_value:g}{Unit.CELSIUS})"
    )
