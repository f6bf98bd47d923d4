"""
Clocks supplying "now".

Core functions take `now` explicitly; clocks are only consulted at the edges
(loading a store, starting a session, answering a card).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol

from study_core.memory.memory_state import ensure_utc


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock pinned to an instant; advance it manually in tests.
    """

    def __init__(self, instant: datetime):
        self.instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by a timedelta built from kwargs."""
        self.instant = self.instant + timedelta(**kwargs)
        return self.instant
