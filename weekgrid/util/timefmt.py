# weekgrid/util/timefmt.py
from __future__ import annotations

from typing import Tuple


def format_time(
    minutes_of_day: int,
    *,
    omit_minutes_for_whole_hours: bool = False,
    omit_meridian_suffix: bool = False,
    use_24_hour_time: bool = False,
) -> str:
    """Format minutes since midnight for display.

    For 1380 (23:00) in 12-hour mode:
      - omit_minutes_for_whole_hours=True            -> "11 pm"
      - defaults                                     -> "11:00 pm"
      - omit_minutes..., omit_meridian_suffix=True   -> "11"
      - omit_meridian_suffix=True                    -> "11:00"
    In 24-hour mode the same value yields "23" or "23:00" and never a suffix.
    """
    m = int(minutes_of_day)
    hour, mins = divmod(m, 60)
    show_minutes = not (omit_minutes_for_whole_hours and mins == 0)

    if use_24_hour_time:
        out = f"{hour:02d}"
        if show_minutes:
            out += f":{mins:02d}"
        return out

    out = f"{hour % 12 or 12}"
    if show_minutes:
        out += f":{mins:02d}"
    if not omit_meridian_suffix:
        out += " am" if hour % 24 < 12 else " pm"
    return out


def format_start_end(start_time_mins: int, duration_mins: int, *, use_24_hour_time: bool) -> Tuple[str, str]:
    """Return (start, end) labels; the end label is the exclusive end minute."""
    start = format_time(start_time_mins, use_24_hour_time=use_24_hour_time)
    end = format_time(int(start_time_mins) + int(duration_mins), use_24_hour_time=use_24_hour_time)
    return start, end
