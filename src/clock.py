"""
Explicit clock + timezone passed into every analytics step.

Calendar-day matching ("same day", "today", the 7 tracking buckets) is done in
the clock's timezone, never in the host's local time.  Naive timestamps are
interpreted as wall time in that timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class Clock:
    tz: tzinfo = timezone.utc
    fixed_now: Optional[datetime] = None

    @classmethod
    def for_timezone(cls, name: str, now: Optional[datetime] = None) -> "Clock":
        """Build a clock for an IANA zone name; raises ValueError for unknown zones."""
        try:
            tz = ZoneInfo(name) if name and name.upper() != "UTC" else timezone.utc
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {name!r}") from e
        clock = cls(tz=tz)
        if now is not None:
            clock = cls(tz=tz, fixed_now=clock.localize(now))
        return clock

    def now(self) -> datetime:
        if self.fixed_now is not None:
            return self.localize(self.fixed_now)
        return datetime.now(self.tz)

    def localize(self, ts: datetime) -> datetime:
        if ts.tzinfo is None:
            return ts.replace(tzinfo=self.tz)
        return ts.astimezone(self.tz)

    def local_date(self, ts: datetime) -> date:
        return self.localize(ts).date()

    def today(self) -> date:
        return self.now().date()
