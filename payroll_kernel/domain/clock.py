"""
Injectable time source.

Services that need "now" or "today" take a ``Clock`` argument instead of
reading the system time, so payment dates and login timestamps can be pinned
in tests.  ``SystemClock`` is the only implementation that touches the real
time.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone

_EPOCH_FOR_TESTS = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of timezone-aware timestamps."""

    @abstractmethod
    def now(self) -> datetime: ...

    def today(self) -> date:
        """Calendar date of ``now()``; used as the default payment date."""
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock that only moves when told to.

    Starts at ``fixed_time`` (2024-01-01 12:00 UTC when omitted) and keeps
    returning it until ``advance`` or ``set_time`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._current = fixed_time or _EPOCH_FOR_TESTS

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, seconds: int = 0, *, days: int = 0) -> None:
        self._current += timedelta(days=days, seconds=seconds)
