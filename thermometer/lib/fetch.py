"""Remote temperature fetch adapter.

Fetches the current temperature from an Open-Meteo style JSON endpoint,
shaped as ``{"current": {"temperature_2m": <number>}}``. The blocking HTTP
call runs in a worker thread so the event loop stays responsive.
"""

import json
import math
import urllib.error
import urllib.request
from functools import partial
from typing import Any

from thermometer.lib.exceptions import FetchFailureError
from thermometer.lib.retry import with_retry
from thermometer.logging import get_logger

logger = get_logger("lib.fetch")


def _get_json(url: str, timeout: float) -> Any:
    """Perform a blocking GET and decode the JSON body."""
    req = urllib.request.Request(
        url, headers={"Accept": "application/json"}, method="GET"
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            if not 200 <= resp.status < 300:
                raise ValueError(f"HTTP error! status: {resp.status}")
            return json.loads(resp.read())
    except urllib.error.HTTPError as e:
        # Raised as ValueError so a bad status is not retried like OSError
        raise ValueError(f"HTTP error! status: {e.code}") from e


def parse_temperature(payload: Any) -> float:
    """Extract ``current.temperature_2m`` as a finite float."""
    try:
        raw = payload["current"]["temperature_2m"]
    except (KeyError, TypeError) as e:
        raise ValueError("Missing current.temperature_2m in response") from e

    if isinstance(raw, bool) or raw is None:
        raise ValueError("Invalid temperature value fetched")
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError("Invalid temperature value fetched") from e
    if not math.isfinite(value):
        raise ValueError("Invalid temperature value fetched")
    return value


async def fetch_temperature(
    url: str,
    *,
    timeout_sec: float = 10.0,
    max_retries: int = 1,
    initial_backoff_sec: float = 1.0,
) -> float:
    """Fetch the current temperature in Celsius from url.

    Network errors (OSError) are retried up to max_retries attempts; bad
    status codes and bad payloads are not.

    Raises:
        FetchFailureError: On any failure, prefixed with
            "Failed to fetch temperature:" and chained from the cause.
    """
    try:
        payload = await with_retry(
            partial(_get_json, url, timeout_sec),
            name="Temperature fetch",
            logger=logger,
            max_retries=max_retries,
            initial_backoff_sec=initial_backoff_sec,
            run_in_thread=True,
        )
        temperature = parse_temperature(payload)
    except Exception as e:
        raise FetchFailureError(f"Failed to fetch temperature: {e}") from e

    logger.debug("Fetched temperature %.2f from %s", temperature, url)
    return temperature
