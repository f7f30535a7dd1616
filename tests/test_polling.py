"""Tests for the temperature polling service."""

import signal
from unittest.mock import AsyncMock, patch

import pytest

from thermometer import FetchFailureError, InvalidConfigError
from thermometer.lib.config import Direction, Settings, ThresholdSpec
from thermometer.lib.config.testing import set_settings
from thermometer.polling import TemperaturePollingService

URL = "https://example.com/current"


@pytest.fixture
def service(thermometer):
    return TemperaturePollingService(
        thermometer=thermometer,
        url=URL,
        frequency_sec=1,
        thresholds=(ThresholdSpec(value=0, direction=Direction.DECREASING),),
    )


class TestTemperaturePollingService:
    """Tests for the polling loop."""

    def test_thresholds_from_settings(self, caplog):
        set_settings(
            Settings(
                _env_file=None,
                thresholds="0,100:increasing:2",
                fetch_url=URL,
                polling_frequency_sec=7,
            )
        )
        service = TemperaturePollingService()

        assert service.url == URL
        assert service.frequency_sec == 7
        assert service.thermometer.default_tolerance == 0.5

        service.thermometer.set_temperature(0)
        assert "Temperature reached: 0.0°C (threshold: 0°C)" in caplog.text

    @pytest.mark.asyncio
    async def test_poll_feeds_thermometer_and_logs_events(
        self, service, thermometer, caplog
    ):
        with patch.object(
            thermometer,
            "fetch_temperature",
            AsyncMock(side_effect=lambda url: thermometer.set_temperature(0) or 0.0),
        ):
            thermometer.set_temperature(1)
            await service.poll()

        assert thermometer.get_celsius() == 0
        assert (
            "Temperature reached while decreasing: 0.0°C (threshold: 0°C)"
            in caplog.text
        )

    @pytest.mark.asyncio
    async def test_run_loop_survives_errors(self, service, caplog):
        fetch = AsyncMock(
            side_effect=[FetchFailureError("Failed to fetch temperature: down"), 5.0]
        )
        with (
            patch.object(service.thermometer, "fetch_temperature", fetch),
            patch("thermometer.polling.asyncio.sleep", AsyncMock()),
        ):
            await service.run_loop(max_cycles=2)

        assert fetch.await_count == 2
        assert "Poll failed: Failed to fetch temperature: down" in caplog.text
        assert "Polling service shutdown complete" in caplog.text

    @pytest.mark.asyncio
    async def test_shutdown_stops_loop(self, service):
        fetch = AsyncMock(return_value=5.0)
        service.request_shutdown()

        with patch.object(service.thermometer, "fetch_temperature", fetch):
            await service.run_loop()

        fetch.assert_not_awaited()

    def test_signal_requests_shutdown(self, service, caplog):
        service._handle_shutdown(signal.SIGTERM, None)

        assert service._shutdown_requested is True
        assert "Received SIGTERM" in caplog.text

    def test_explicit_url_and_frequency_kept(self, thermometer):
        service = TemperaturePollingService(
            thermometer=thermometer, url="", frequency_sec=5, thresholds=()
        )

        assert service.url == ""
        assert service.frequency_sec == 5

    def test_zero_frequency_rejected(self, thermometer):
        with pytest.raises(InvalidConfigError, match="Polling frequency"):
            TemperaturePollingService(
                thermometer=thermometer, url=URL, frequency_sec=0, thresholds=()
            )
