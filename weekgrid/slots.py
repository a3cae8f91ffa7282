"""Time-of-day slot axis shared by every visible day.

Design goals:
  - One axis per page: all day columns line up row by row.
  - Bounds come from the items inside the page (or 09:00-17:00 when it is empty),
    padded by the render offset on both sides for context rows.
  - Deterministic, finite and cheap to regenerate.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Tuple

from .config import DEFAULT_VIEW_END_TIME_MINS, DEFAULT_VIEW_START_TIME_MINS
from .model import SchedulingItem, Slot
from .util.timefmt import format_time


def compute_time_bounds(items: Iterable[SchedulingItem]) -> Tuple[int, int]:
    """Return (view_start_time_mins, view_end_time_mins) for the given items.

    The end bound is exclusive: one past the latest occupied minute.
    Falls back to the default working day when `items` is empty.
    """
    lo = None
    hi = None
    for it in items:
        if lo is None or it.start_time_mins < lo:
            lo = it.start_time_mins
        end_excl = it.end_time_mins + 1
        if hi is None or end_excl > hi:
            hi = end_excl
    if lo is None or hi is None:
        return DEFAULT_VIEW_START_TIME_MINS, DEFAULT_VIEW_END_TIME_MINS
    return int(lo), int(hi)


def window_items(store, start_date: dt.date, num_days: int) -> List[SchedulingItem]:
    end = start_date + dt.timedelta(days=int(num_days))
    return list(store.items_between(start_date, end))


def generate_slots(view_start_mins: int, view_end_mins: int, granularity: int, render_off: int) -> Tuple[Slot, ...]:
    """Slots from `start - render_off` in `granularity` steps, stopping before `end + render_off`."""
    if granularity <= 0:
        raise ValueError(f"granularity must be > 0, got {granularity}")
    render_start = int(view_start_mins) - int(render_off)
    render_end = int(view_end_mins) + int(render_off)

    out: List[Slot] = []
    cur = render_start
    while cur < render_end:
        out.append(Slot(minute_of_day=cur, in_view=view_start_mins <= cur < view_end_mins))
        cur += granularity
    return tuple(out)


def slot_labels(slots: Iterable[Slot], *, use_24_hour_time: bool) -> List[str]:
    """Row labels for the time legend; padding rows get an empty label."""
    labels: List[str] = []
    for s in slots:
        if not s.in_view:
            labels.append("")
            continue
        labels.append(
            format_time(
                s.minute_of_day,
                omit_minutes_for_whole_hours=s.on_the_hour,
                omit_meridian_suffix=not s.on_the_hour,
                use_24_hour_time=use_24_hour_time,
            )
        )
    return labels
