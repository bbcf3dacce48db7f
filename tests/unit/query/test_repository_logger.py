"""Unit tests for repository logging callbacks."""

from __future__ import annotations

import pytest

import reachability
from core.errors import ReachabilityConfigError
from core.logging_config import configure_logging
from query.repository_logger import CollectingRepositoryLogger, StructlogRepositoryLogger


@pytest.fixture()
def error_level_logging():
    configure_logging("error")
    try:
        yield
    finally:
        configure_logging("info")


def test_structlog_logger_skips_message_when_level_filtered(error_level_logging) -> None:
    """Disabled levels should never evaluate the message supplier."""
    calls: list[str] = []

    def supplier() -> str:
        calls.append("called")
        return "expensive"

    StructlogRepositoryLogger("info").log("g", "a", "1.0", supplier)

    assert calls == []


def test_structlog_logger_evaluates_message_when_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    """Enabled levels should render the supplied message."""
    configure_logging("info")

    StructlogRepositoryLogger("warning").log("g", "a", None, lambda: "using latest version 2.0")

    output = capsys.readouterr().out
    assert "metadata_repository" in output and "using latest version 2.0" in output


def test_structlog_logger_rejects_unknown_level() -> None:
    """Unknown level names should fail at construction."""
    with pytest.raises(ReachabilityConfigError, match="verbose"):
        StructlogRepositoryLogger("verbose")


def test_collecting_logger_keeps_events_in_order() -> None:
    """Collected events should preserve emission order."""
    logger = CollectingRepositoryLogger()

    logger.log("g", "a", "1.0", lambda: "first")
    logger.log("c", "d", None, lambda: "second")

    assert [event.message for event in logger.events] == ["first", "second"]
    assert logger.events[1].version is None


def test_sdk_logging_filter_enables_debug_events(capsys: pytest.CaptureFixture[str]) -> None:
    """Lowering the filter through the SDK should let debug events through."""
    reachability.configure_logging("debug")
    try:
        StructlogRepositoryLogger("debug").log("g", "a", "1.1", lambda: "using latest version 2.0")
    finally:
        reachability.configure_logging("info")

    assert "using latest version 2.0" in capsys.readouterr().out
