"""Logging configuration for the thermometer package."""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def configure(level: int | str = logging.INFO) -> None:
    """Configure logging for the application.

    Safe to call multiple times - only configures once.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("thermometer")
    root.setLevel(level)
    root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the 'thermometer' namespace.

    Args:
        name: Logger name (will be prefixed with 'thermometer.')

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(f"thermometer.{name}")
