"""Clock abstraction.

Quota resets and meetup time checks depend on "now"; services read it from
an injected clock so tests can pin and advance time.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Clock:
    """Wall clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return utc_now()

    def today(self, tz: str = "UTC") -> date:
        """Calendar date of ``now()`` in the given IANA zone."""
        return self.now().astimezone(ZoneInfo(tz)).date()


class FixedClock(Clock):
    """Clock frozen at a given instant until moved explicitly."""

    def __init__(self, instant: datetime | None = None) -> None:
        self._instant = instant or datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, **delta: float) -> datetime:
        """Move forward by ``timedelta(**delta)`` and return the new instant."""
        self._instant = self._instant + timedelta(**delta)
        return self._instant
