"""Timezone-shifted calendar arithmetic for the daily report.

All "calendar day" comparisons happen in a fixed UTC offset rather than in
UTC: an issue completed at 23:30 UTC belongs to the next day at ``+9``.

Usage
-----
>>> import datetime as dt
>>> window = TimeWindow.at(dt.datetime(2024, 7, 8, 23, 30, tzinfo=dt.UTC), 9)
>>> window.today, window.yesterday
(datetime.date(2024, 7, 9), datetime.date(2024, 7, 8))
>>> window.since_utc
datetime.datetime(2024, 7, 7, 15, 0, tzinfo=datetime.timezone.utc)

"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from bulletin.common.time import ensure_utc, utcnow

DEFAULT_OFFSET_HOURS = 9

_ONE_DAY = dt.timedelta(days=1)


def offset_timezone(offset_hours: int) -> dt.timezone:
    """Return the fixed-offset timezone for ``offset_hours``."""
    return dt.timezone(dt.timedelta(hours=offset_hours))


def shifted_now(
    offset_hours: int = DEFAULT_OFFSET_HOURS,
    *,
    clock: typ.Callable[[], dt.datetime] = utcnow,
) -> dt.datetime:
    """Return the current UTC instant expressed in the shifted zone."""
    return ensure_utc(clock()).astimezone(offset_timezone(offset_hours))


def yesterday_calendar_date(shifted: dt.datetime) -> dt.date:
    """Return the calendar date one day before ``shifted``'s own date."""
    return shifted.date() - _ONE_DAY


@dc.dataclass(frozen=True, slots=True)
class TimeWindow:
    """Reference instant and the derived today/yesterday calendar dates.

    Attributes
    ----------
    now
        Reference instant, expressed in the shifted zone.
    offset_hours
        Signed UTC offset used for every calendar comparison.
    today
        Calendar date of ``now`` in the shifted zone.
    yesterday
        ``today`` minus one calendar day.

    """

    now: dt.datetime
    offset_hours: int
    today: dt.date
    yesterday: dt.date

    @classmethod
    def at(cls, instant: dt.datetime, offset_hours: int) -> TimeWindow:
        """Build the window for ``instant`` seen from ``offset_hours``."""
        shifted = ensure_utc(instant).astimezone(offset_timezone(offset_hours))
        return cls(
            now=shifted,
            offset_hours=offset_hours,
            today=shifted.date(),
            yesterday=yesterday_calendar_date(shifted),
        )

    @classmethod
    def current(
        cls,
        offset_hours: int,
        *,
        clock: typ.Callable[[], dt.datetime] = utcnow,
    ) -> TimeWindow:
        """Build the window for the clock's current instant."""
        return cls.at(clock(), offset_hours)

    @property
    def tz(self) -> dt.timezone:
        """Fixed-offset timezone of the window."""
        return offset_timezone(self.offset_hours)

    @property
    def since_utc(self) -> dt.datetime:
        """Shifted midnight at the start of ``yesterday``, as a UTC instant."""
        midnight = dt.datetime.combine(self.yesterday, dt.time.min, tzinfo=self.tz)
        return midnight.astimezone(dt.UTC)

    @property
    def date_label(self) -> str:
        """``today`` formatted as ``YYYY-MM-DD``."""
        return self.today.isoformat()

    def local_date(self, instant: dt.datetime) -> dt.date:
        """Return the calendar date of ``instant`` in the shifted zone."""
        return ensure_utc(instant).astimezone(self.tz).date()
