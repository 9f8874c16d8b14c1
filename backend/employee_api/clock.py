"""
Employee API — Time Source
===========================

What:  Injectable UTC clock.
Who:   Used by the unit of work (audit timestamps), the auth service (token
       expiry) and the seeder.

Handlers and services never call datetime.now() directly; they receive a
Clock so tests can pin the current time.
"""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything exposing the current UTC time."""

    @property
    def utc_now(self) -> datetime: ...


class SystemClock:
    """Wall-clock implementation used in production."""

    @property
    def utc_now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a given instant; `set` moves it."""

    def __init__(self, now: datetime):
        self._now = now

    @property
    def utc_now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now


system_clock = SystemClock()
