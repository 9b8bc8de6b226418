"""Wall-clock time in the Central European zone, refreshed on demand."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional

TimeSource = Callable[[], Optional[datetime]]


def _last_sunday(year: int, month: int) -> date:
    first_of_next = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last_day = first_of_next - timedelta(days=1)
    return last_day - timedelta(days=(last_day.weekday() + 1) % 7)


def _to_local(moment: datetime) -> datetime:
    """Convert to CET, or CEST between the last Sundays of March and October."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    summer_start = datetime.combine(_last_sunday(utc.year, 3), time(1), tzinfo=timezone.utc)
    summer_end = datetime.combine(_last_sunday(utc.year, 10), time(1), tzinfo=timezone.utc)
    offset = 2 if summer_start <= utc < summer_end else 1
    return utc.astimezone(timezone(timedelta(hours=offset)))


def _system_utc() -> datetime:
    return datetime.now(timezone.utc)


class Clock:
    """Local hour, minute and second, taken from a UTC time source."""

    def __init__(self, source: Optional[TimeSource] = None) -> None:
        self._source = source or _system_utc
        self.hour = 0
        self.minute = 0
        self.second = 0

    def update(self) -> bool:
        """Refresh from the source; keep the last values if it has no time."""
        now = self._source()
        if now is None:
            return False
        local = _to_local(now)
        self.hour, self.minute, self.second = local.hour, local.minute, local.second
        return True

    def hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"