# weekgrid/util/viewkey.py
from __future__ import annotations

import datetime as dt


def make_view_key(
    start_date: dt.date,
    days: int,
    start_day: int,
    view_start_min: int,
    view_end_min: int,
    granularity: int,
    render_off: int,
) -> str:
    """Return a stable key identifying a rendered page of the grid.

    Consumers use it to tell whether a cached rendering still matches the window.
    """
    raw = f"{start_date.isoformat()}|{days}|{start_day}|{view_start_min}|{view_end_min}|{granularity}|{render_off}"
    h = 0
    for ch in raw:
        h = (h * 131 + ord(ch)) & 0xFFFFFFFF
    return f"{h:08x}"
