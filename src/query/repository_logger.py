"""Logging callbacks for repository resolution events.

Resolution reports fallbacks, misses, and exclusions through a callback
that receives the coordinate and a message supplier. Suppliers are only
called when the event is actually recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from core.config import parse_log_level
from core.constants import DEFAULT_LOG_LEVEL
from core.logging_config import get_logger, is_level_enabled

_LOGGER = get_logger(__name__)

MessageSupplier = Callable[[], str]


class RepositoryLogger(Protocol):
    """Sink for per-artifact resolution events."""

    def log(self, group: str, artifact: str, version: str | None, message: MessageSupplier) -> None:
        """Record one event; message is evaluated lazily."""


class StructlogRepositoryLogger:
    """Repository logger emitting structlog events at a fixed level."""

    def __init__(self, level: str = DEFAULT_LOG_LEVEL) -> None:
        self._level = parse_log_level(level, "repository log level")

    def log(self, group: str, artifact: str, version: str | None, message: MessageSupplier) -> None:
        """Emit a ``metadata_repository`` event if the level is enabled."""
        if not is_level_enabled(self._level):
            return
        emit = getattr(_LOGGER, self._level)
        emit(
            "metadata_repository",
            coordinate=f"{group}:{artifact}:{version or ''}",
            message=message(),
        )


@dataclass(frozen=True)
class RepositoryLogEvent:
    """One recorded resolution event."""

    group: str
    artifact: str
    version: str | None
    message: str


class CollectingRepositoryLogger:
    """Repository logger keeping events in memory."""

    def __init__(self) -> None:
        self._events: list[RepositoryLogEvent] = []

    @property
    def events(self) -> tuple[RepositoryLogEvent, ...]:
        """Return recorded events in emission order."""
        return tuple(self._events)

    def log(self, group: str, artifact: str, version: str | None, message: MessageSupplier) -> None:
        """Record an event, evaluating its message."""
        self._events.append(
            RepositoryLogEvent(group=group, artifact=artifact, version=version, message=message())
        )
