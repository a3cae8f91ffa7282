# weekgrid/window.py
from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional, Tuple

from .config import SchedulerConfig
from .model import DayHeader, Slot
from .slots import compute_time_bounds, generate_slots, window_items
from .store import ItemStore
from .util.dates import (
    DAY_NAMES,
    MONTH_NAMES,
    add_days,
    align_to_week_start,
    day_of_week,
    end_of_day,
    to_date,
    today_date,
)
from .validate import (
    MINUTES_PER_DAY,
    InvalidStartDate,
    SchedulerConfigError,
    assert_supported_granularity,
)

logger = logging.getLogger(__name__)


class ViewWindow:
    """Visible date range and time-of-day bounds of the grid.

    Derived values are memoized and dropped by `invalidate()`:
      - effective range: first/last item day (today when empty)
      - view start date: effective start aligned back to `view_start_day`
      - time bounds: min start / max exclusive end of items on the page
      - slot axis generated from the time bounds

    Any delivered store change invalidates everything derived from items,
    including an explicitly set effective start or view start date.
    """

    def __init__(self, store: ItemStore, cfg: SchedulerConfig) -> None:
        self._store = store
        self._view_start_day = int(cfg.view_start_day)
        self._view_num_days = int(cfg.view_num_days)
        self._granularity = int(cfg.time_view_granularity_mins)
        self._render_off = int(cfg.time_view_render_off_mins)
        self._enabled_start = to_date(cfg.enabled_start_date) if cfg.enabled_start_date is not None else None
        self._enabled_end = to_date(cfg.enabled_end_date) if cfg.enabled_end_date is not None else None

        self._effective_start: Optional[dt.date] = None
        self._effective_end: Optional[dt.date] = None
        self._view_start: Optional[dt.date] = None
        self._pinned_start_time: Optional[int] = None
        self._pinned_end_time: Optional[int] = None
        self._time_bounds: Optional[Tuple[int, int]] = None
        self._slots: Optional[Tuple[Slot, ...]] = None

        store.subscribe(self.invalidate)

    # --- invalidation ------------------------------------------------------

    def invalidate(self) -> None:
        self._effective_start = None
        self._effective_end = None
        self._view_start = None
        self._invalidate_time_axis()

    def _invalidate_time_axis(self) -> None:
        self._time_bounds = None
        self._slots = None

    # --- effective / enabled range -----------------------------------------

    @property
    def effective_start_date(self) -> dt.date:
        if self._effective_start is None:
            self._effective_start = self._store.first_day() or today_date()
        return self._effective_start

    @effective_start_date.setter
    def effective_start_date(self, v: dt.date) -> None:
        self._effective_start = to_date(v)
        self._view_start = None
        self._invalidate_time_axis()

    @property
    def effective_end_date(self) -> dt.date:
        if self._effective_end is None:
            self._effective_end = self._store.last_day() or today_date()
        return self._effective_end

    @effective_end_date.setter
    def effective_end_date(self, v: dt.date) -> None:
        self._effective_end = to_date(v)

    @property
    def enabled_start_date(self) -> dt.date:
        return self._enabled_start if self._enabled_start is not None else self.effective_start_date

    @enabled_start_date.setter
    def enabled_start_date(self, v: Optional[dt.date]) -> None:
        self._enabled_start = to_date(v) if v is not None else None

    @property
    def enabled_end_date(self) -> dt.date:
        return self._enabled_end if self._enabled_end is not None else self.effective_end_date

    @enabled_end_date.setter
    def enabled_end_date(self, v: Optional[dt.date]) -> None:
        self._enabled_end = to_date(v) if v is not None else None

    def is_day_enabled(self, day: dt.date) -> bool:
        d = to_date(day)
        return self.enabled_start_date <= d <= self.enabled_end_date

    # --- date window -------------------------------------------------------

    @property
    def view_start_day(self) -> int:
        return self._view_start_day

    @view_start_day.setter
    def view_start_day(self, v: int) -> None:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 6:
            raise SchedulerConfigError(f"view_start_day must be int in 0..6, got {v!r}")
        if v != self._view_start_day:
            self._view_start_day = v
            self._view_start = None
            self._invalidate_time_axis()

    @property
    def view_num_days(self) -> int:
        return self._view_num_days

    @view_num_days.setter
    def view_num_days(self, v: int) -> None:
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise SchedulerConfigError(f"view_num_days must be int >= 1, got {v!r}")
        if v != self._view_num_days:
            self._view_num_days = v
            self._invalidate_time_axis()

    @property
    def view_start_date(self) -> dt.date:
        if self._view_start is None:
            self._view_start = align_to_week_start(self.effective_start_date, self._view_start_day)
            logger.debug("view start derived: %s", self._view_start.isoformat())
        return self._view_start

    @view_start_date.setter
    def view_start_date(self, v: dt.date) -> None:
        d = to_date(v)
        if day_of_week(d) != self._view_start_day:
            raise InvalidStartDate(
                f"view start date should fall on {DAY_NAMES[self._view_start_day]}, "
                f"but {d.isoformat()} is a {DAY_NAMES[day_of_week(d)]}"
            )
        self._view_start = d
        self._invalidate_time_axis()

    @property
    def view_end_date(self) -> dt.datetime:
        return end_of_day(add_days(self.view_start_date, self._view_num_days))

    def change_view_page(self, count: int = 1) -> dt.date:
        """Move the page by whole weeks: > 0 forward, < 0 back, 0 no-op."""
        if count:
            self.view_start_date = add_days(self.view_start_date, 7 * int(count))
            logger.debug("view page moved by %d week(s) to %s", count, self.view_start_date.isoformat())
        return self.view_start_date

    def view_dates(self) -> List[dt.date]:
        start = self.view_start_date
        return [add_days(start, i) for i in range(self._view_num_days)]

    def day_headers(self) -> List[DayHeader]:
        out: List[DayHeader] = []
        prev_month = None
        prev_year = None
        for d in self.view_dates():
            month_name = None
            year = None
            if prev_month != d.month:
                month_name = MONTH_NAMES[d.month - 1]
                prev_month = d.month
            if prev_year != d.year:
                year = d.year
                prev_year = d.year
            dow = day_of_week(d)
            out.append(
                DayHeader(
                    date=d,
                    day_name=DAY_NAMES[dow][:3],
                    day_number=d.day,
                    day_of_week=dow,
                    month_number=d.month,
                    month_name=month_name,
                    year=year,
                )
            )
        return out

    # --- time axis ---------------------------------------------------------

    @property
    def time_view_granularity_mins(self) -> int:
        return self._granularity

    @time_view_granularity_mins.setter
    def time_view_granularity_mins(self, v: int) -> None:
        assert_supported_granularity(v)

    @property
    def time_view_render_off_mins(self) -> int:
        return self._render_off

    @time_view_render_off_mins.setter
    def time_view_render_off_mins(self, v: int) -> None:
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            raise SchedulerConfigError(f"time_view_render_off_mins must be int >= 0, got {v!r}")
        self._render_off = v
        self._slots = None

    def _bounds(self) -> Tuple[int, int]:
        if self._time_bounds is None:
            derived = compute_time_bounds(window_items(self._store, self.view_start_date, self._view_num_days))
            start = self._pinned_start_time if self._pinned_start_time is not None else derived[0]
            end = self._pinned_end_time if self._pinned_end_time is not None else derived[1]
            self._time_bounds = (start, end)
            logger.debug("time bounds computed: %d..%d", start, end)
        return self._time_bounds

    @property
    def view_start_time_mins(self) -> int:
        return self._bounds()[0]

    @view_start_time_mins.setter
    def view_start_time_mins(self, v: Optional[int]) -> None:
        self._pin_time_bounds(v, self._pinned_end_time)

    @property
    def view_end_time_mins(self) -> int:
        return self._bounds()[1]

    @view_end_time_mins.setter
    def view_end_time_mins(self, v: Optional[int]) -> None:
        self._pin_time_bounds(self._pinned_start_time, v)

    def _pin_time_bounds(self, start: Optional[int], end: Optional[int]) -> None:
        for name, v in (("view_start_time_mins", start), ("view_end_time_mins", end)):
            if v is None:
                continue
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= MINUTES_PER_DAY:
                raise SchedulerConfigError(f"{name} must be int in 0..{MINUTES_PER_DAY}, got {v!r}")
        if start is not None and end is not None and start >= end:
            raise SchedulerConfigError(f"view_start_time_mins ({start}) must be before view_end_time_mins ({end})")
        self._pinned_start_time = start
        self._pinned_end_time = end
        self._invalidate_time_axis()

    @property
    def time_slots(self) -> Tuple[Slot, ...]:
        if self._slots is None:
            start, end = self._bounds()
            self._slots = generate_slots(start, end, self._granularity, self._render_off)
        return self._slots
