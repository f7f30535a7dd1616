"""Temperature polling service.

Periodically fetches the remote temperature into a Thermometer whose
thresholds come from the THRESHOLDS setting, and logs every firing.

Usage: python -m thermometer
"""
import asyncio
import signal
from types import FrameType

from thermometer.lib.alerts import format_event_message
from thermometer.lib.config import ThresholdSpec, get_settings
from thermometer.lib.exceptions import InvalidConfigError
from thermometer.lib.thresholds import ThresholdEvent
from thermometer.lib.units import celsius_to_fahrenheit
from thermometer.logging import configure, get_logger
from thermometer.thermometer import Thermometer, ThresholdConfig

logger = get_logger("polling")


def _log_event(event: ThresholdEvent) -> None:
    logger.info(format_event_message(event))


class TemperaturePollingService:
    """Polls the configured URL and feeds readings to a Thermometer.

    Implements the polling loop with:
    - Configurable polling frequency
    - Graceful shutdown handling
    - Error recovery (a failed poll is logged and the loop continues)
    """

    def __init__(
        self,
        thermometer: Thermometer | None = None,
        url: str | None = None,
        frequency_sec: int | None = None,
        thresholds: tuple[ThresholdSpec, ...] | None = None,
    ) -> None:
        settings = get_settings()
        self.thermometer = thermometer or Thermometer()
        self.url = settings.fetch.url if url is None else url
        self.frequency_sec = (
            settings.polling.frequency_sec
            if frequency_sec is None
            else frequency_sec
        )
        if self.frequency_sec < 1:
            raise InvalidConfigError(
                f"Polling frequency must be >= 1s, got {self.frequency_sec!r}"
            )
        self._shutdown_requested = False

        specs = (
            thresholds if thresholds is not None else settings.polling.thresholds
        )
        for spec in specs:
            self.thermometer.add_threshold(
                ThresholdConfig(
                    temp=spec.value,
                    callback=_log_event,
                    direction=spec.direction,
                    tolerance=spec.tolerance,
                )
            )

    async def poll(self) -> float:
        """Fetch one reading and evaluate thresholds against it."""
        celsius = await self.thermometer.fetch_temperature(self.url)
        logger.debug(
            "Polled %.1f°C (%.1f°F)", celsius, celsius_to_fahrenheit(celsius)
        )
        return celsius

    def on_poll_error(self, error: Exception) -> None:
        """Handle an error that occurred during polling."""
        logger.warning("Poll failed: %s", error)

    def request_shutdown(self) -> None:
        self._shutdown_requested = True

    def _handle_shutdown(self, signum: int, frame: FrameType | None) -> None:
        """Handle shutdown signals gracefully."""
        signal_name = signal.Signals(signum).name
        logger.info("Received %s, initiating graceful shutdown...", signal_name)
        self.request_shutdown()

    def _setup_signal_handlers(self) -> None:
        """Register signal handlers for graceful shutdown."""
        signal.signal(signal.SIGTERM, self._handle_shutdown)
        signal.signal(signal.SIGINT, self._handle_shutdown)

    async def run_loop(self, max_cycles: int | None = None) -> None:
        """Run the polling loop with precise timing.

        Args:
            max_cycles: Stop after this many polls (None runs until shutdown).
        """
        logger.info(
            "Polling %s every %ds", self.url, self.frequency_sec
        )
        loop = asyncio.get_running_loop()
        cycles = 0

        while not self._shutdown_requested:
            cycle_start = loop.time()

            try:
                await self.poll()
            except Exception as e:
                self.on_poll_error(e)

            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break

            # Sleep only the remaining time to maintain consistent intervals
            elapsed = loop.time() - cycle_start
            sleep_time = max(0, self.frequency_sec - elapsed)
            if sleep_time > 0:
                await asyncio.sleep(sleep_time)

        logger.info("Polling service shutdown complete")

    def run(self) -> None:
        """Run the polling loop until SIGTERM/SIGINT."""
        self._setup_signal_handlers()
        asyncio.run(self.run_loop())


def main() -> None:
    configure(get_settings().log_level)
    TemperaturePollingService().run()
