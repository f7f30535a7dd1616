"""Tests for the retry helper."""

import logging
from unittest.mock import MagicMock

import pytest

from thermometer.lib.retry import with_retry

logger = logging.getLogger("thermometer.tests.retry")


class TestWithRetry:
    """Tests for with_retry."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        fn = MagicMock(return_value=42)

        result = await with_retry(fn, name="Test", logger=logger)

        assert result == 42
        fn.assert_called_once()

    @pytest.mark.asyncio
    async def test_async_function(self):
        async def fn():
            return "ok"

        assert await with_retry(fn, name="Test", logger=logger) == "ok"

    @pytest.mark.asyncio
    async def test_in_thread(self):
        fn = MagicMock(return_value=7)

        result = await with_retry(
            fn, name="Test", logger=logger, run_in_thread=True
        )

        assert result == 7

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, caplog):
        fn = MagicMock(side_effect=[OSError("flaky"), "done"])

        result = await with_retry(
            fn, name="Test", logger=logger, initial_backoff_sec=0
        )

        assert result == "done"
        assert fn.call_count == 2
        assert "Test attempt 1/3 failed: flaky" in caplog.text

    @pytest.mark.asyncio
    async def test_reraises_after_exhaustion(self, caplog):
        fn = MagicMock(side_effect=OSError("down"))

        with pytest.raises(OSError, match="down"):
            await with_retry(
                fn, name="Test", logger=logger, max_retries=2, initial_backoff_sec=0
            )

        assert fn.call_count == 2
        assert "failed after 2 attempts" in caplog.text

    @pytest.mark.asyncio
    async def test_non_retryable_raised_immediately(self):
        fn = MagicMock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError, match="bad"):
            await with_retry(fn, name="Test", logger=logger, initial_backoff_sec=0)

        fn.assert_called_once()
