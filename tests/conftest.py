"""Shared pytest fixtures for the test suite."""

import logging

import pytest

from thermometer import Thermometer, ThresholdEvent
from thermometer.lib.config.testing import set_settings


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the thermometer namespace."""
    caplog.set_level(logging.DEBUG, logger="thermometer")


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset global settings after each test to avoid cross-test pollution."""
    set_settings(None)
    yield
    set_settings(None)


@pytest.fixture
def thermometer():
    """A fresh thermometer with the default 0.5°C tolerance."""
    return Thermometer(default_tolerance=0.5)


class EventRecorder:
    """Callable that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[ThresholdEvent] = []

    def __call__(self, event: ThresholdEvent) -> None:
        self.events.append(event)

    @property
    def call_count(self) -> int:
        return len(self.events)


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def make_recorder():
    """Factory for independent recorders when a test needs several."""
    return EventRecorder
