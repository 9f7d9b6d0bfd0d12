from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

InstantOrDate = Union[datetime, date]


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant. A trailing 'Z' is accepted; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid datetime: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimeService:
    """Civil-time arithmetic for one fixed, process-wide timezone.

    The zone is chosen once at startup from configuration. Components receive
    the instance explicitly; nothing reads the zone from a global.

    ``clock`` is injectable so tests can freeze "now".
    """

    def __init__(self, tz_name: str = DEFAULT_TIMEZONE, *, clock: Optional[Callable[[], datetime]] = None):
        try:
            self._tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError(f"Unknown timezone: {tz_name!r}")
        self._clock = clock or utc_now

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return self.to_civil(self._clock())

    def to_civil(self, instant: datetime) -> datetime:
        # Naive datetimes come from storage, which keeps UTC.
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self._tz)

    def civil_date(self, value: InstantOrDate) -> date:
        if isinstance(value, datetime):
            return self.to_civil(value).date()
        return value

    def civil_day_start(self, value: InstantOrDate) -> datetime:
        """00:00 of the civil date holding ``value``."""
        return datetime.combine(self.civil_date(value), time.min, tzinfo=self._tz)

    def civil_day_bounds(self, value: InstantOrDate) -> tuple[datetime, datetime]:
        """Return [start, next_start) of the civil day.

        next_start is the following civil midnight, which is 24h later except on DST change days.
        """

        day = self.civil_date(value)
        return self.civil_day_start(day), self.civil_day_start(day + timedelta(days=1))

    def civil_day_of_week(self, value: InstantOrDate) -> int:
        """1=Monday .. 7=Sunday."""
        return self.civil_date(value).isoweekday()

    def at_civil_time(self, day: date, hour: int, minute: int) -> datetime:
        return datetime(day.year, day.month, day.day, hour, minute, tzinfo=self._tz)

    def add_exact(self, instant: datetime, delta: timedelta) -> datetime:
        """Elapsed-time addition (wall-clock addition would drift across DST)."""
        return self.to_civil(self.to_civil(instant).astimezone(timezone.utc) + delta)

    def minutes_between(self, a: datetime, b: datetime) -> float:
        """Signed minutes from b to a, unrounded."""
        # Same-tzinfo subtraction ignores offsets, so compare in UTC.
        a_utc = self.to_civil(a).astimezone(timezone.utc)
        b_utc = self.to_civil(b).astimezone(timezone.utc)
        return (a_utc - b_utc).total_seconds() / 60.0

    def format_hhmm(self, instant: datetime) -> str:
        return self.to_civil(instant).strftime("%H:%M:00")
