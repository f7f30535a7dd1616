"""Tests for logging configuration."""

import logging

import thermometer.logging as thermometer_logging
from thermometer.logging import LOG_FORMAT, configure, get_logger


def test_get_logger_namespaced():
    assert get_logger("lib.alerts").name == "thermometer.lib.alerts"


def test_configure_once(monkeypatch):
    root = logging.getLogger("thermometer")
    monkeypatch.setattr(thermometer_logging, "_configured", False)
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure("WARNING")
    configure(logging.DEBUG)

    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT
    assert root.level == logging.WARNING
