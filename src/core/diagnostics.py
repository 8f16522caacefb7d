"""Diagnostics channel for skipped work.

Validation, parse, and transport failures inside a run are recorded
here as structured events and forwarded to the logger once each, so
callers and tests can inspect what was skipped without parsing logs.
"""

from __future__ import annotations

from typing import Any

from core.logging_config import get_logger
from core.types import DiagnosticEvent

_LOGGER = get_logger(__name__)


class Diagnostics:
    """Append-only collector of diagnostic events."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger or _LOGGER
        self._events: list[DiagnosticEvent] = []

    def warning(self, kind: str, message: str, **context: object) -> DiagnosticEvent:
        """Record a warning-level event for a skipped configuration unit."""
        event = self._append(kind, message, context)
        self._logger.warning(kind, message=message, **context)
        return event

    def error(self, kind: str, message: str, **context: object) -> DiagnosticEvent:
        """Record an error-level event for a failed fetch, parse, or store."""
        event = self._append(kind, message, context)
        self._logger.error(kind, message=message, **context)
        return event

    def events(self, kind: str | None = None) -> tuple[DiagnosticEvent, ...]:
        """Return recorded events, optionally filtered by kind."""
        if kind is None:
            return tuple(self._events)
        return tuple(event for event in self._events if event.kind == kind)

    def __len__(self) -> int:
        return len(self._events)

    def _append(self, kind: str, message: str, context: dict[str, object]) -> DiagnosticEvent:
        event = DiagnosticEvent(kind=kind, message=message, context=dict(context))
        self._events.append(event)
        return event
