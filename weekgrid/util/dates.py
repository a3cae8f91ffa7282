# weekgrid/util/dates.py
from __future__ import annotations

import datetime as dt

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def to_date(v: dt.date) -> dt.date:
    """Truncate a date or datetime to its calendar date (midnight)."""
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, dt.date):
        return v
    raise TypeError(f"expected date or datetime, got {type(v).__name__}")


def day_of_week(d: dt.date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7


def today_date() -> dt.date:
    return dt.date.today()


def add_days(d: dt.date, n: int) -> dt.date:
    return d + dt.timedelta(days=int(n))


def end_of_day(d: dt.date) -> dt.datetime:
    return dt.datetime.combine(d, dt.time.max)


def align_to_week_start(d: dt.date, week_start_day: int) -> dt.date:
    """Latest date on or before `d` whose weekday is `week_start_day`."""
    back = (day_of_week(d) - int(week_start_day) + 7) % 7
    return d - dt.timedelta(days=back)
