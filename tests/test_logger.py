"""Tests for consent_check.utils.logger: structured console logging."""

from __future__ import annotations

import asyncio
from unittest import mock

import pytest

from consent_check.utils import logger


@pytest.fixture(autouse=True)
def _fresh_timers() -> None:
    logger.reset_timers()


class TestLogger:
    """Tests for Logger output."""

    def test_info_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger.create_logger("Test").info("Hello", {"count": 3})
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[Test]" in captured.err
        assert "Hello" in captured.err
        assert "count=" in captured.err

    def test_debug_hidden_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        with mock.patch.object(logger, "_debug_enabled", False):
            logger.create_logger("Test").debug("noisy")
        assert capsys.readouterr().err == ""

    def test_debug_shown_when_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        with mock.patch.object(logger, "_debug_enabled", True):
            logger.create_logger("Test").debug("noisy")
        assert "noisy" in capsys.readouterr().err


class TestTimers:
    """Tests for start_timer()/end_timer() and reset_timers()."""

    def test_end_timer_returns_duration(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = logger.create_logger("Test")
        log.start_timer("step")
        assert log.end_timer("step") >= 0.0
        assert "Completed: step" in capsys.readouterr().err

    def test_end_unknown_timer(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = logger.create_logger("Test")
        assert log.end_timer("never-started") == 0.0
        assert 'Timer "never-started" was not started' in capsys.readouterr().err

    def test_reset_timers_drops_pending(self) -> None:
        log = logger.create_logger("Test")
        log.start_timer("step")
        logger.reset_timers()
        assert log.end_timer("step") == 0.0

    def test_reset_in_task_leaves_caller_timers(self) -> None:
        log = logger.create_logger("Test")

        async def run() -> float:
            log.start_timer("outer")

            async def inner() -> None:
                logger.reset_timers()

            await asyncio.create_task(inner())
            return log.end_timer("outer")

        assert asyncio.run(run()) >= 0.0


class TestFormatDuration:
    """Tests for _format_duration()."""

    @pytest.mark.parametrize(
        ("ms", "expected"),
        [(250, "250ms"), (1500, "1.50s"), (90000, "1m 30.0s")],
    )
    def test_format(self, ms: float, expected: str) -> None:
        assert logger._format_duration(ms) == expected
