# weekgrid/scheduler.py
from __future__ import annotations

import datetime as dt
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .config import SchedulerConfig
from .model import DayHeader, Placement, SchedulingItem, SelectionSummary, Slot
from .planner import place_day, place_week
from .selection import SelectionController, selection_summary
from .slots import slot_labels
from .store import ItemStore
from .util.timefmt import format_start_end
from .validate import InvalidItemSpec
from .window import ViewWindow

logger = logging.getLogger(__name__)

# Keys of a by-day row item that map onto item fields; the rest becomes `data`.
_ROW_ITEM_KEYS = {"sta", "fin", "dur", "id", "caption"}


class WeeklyScheduler:
    """Weekly scheduling grid: one item store, one view window, one selection.

    The scheduler is a plain command/query object; rendering surfaces read the
    slot axis and placements from it and forward clicks to `select()`.
    """

    def __init__(self, cfg: Optional[SchedulerConfig] = None) -> None:
        self.cfg = cfg or SchedulerConfig()
        self.store = ItemStore()
        self.window = ViewWindow(self.store, self.cfg)
        self.selection = SelectionController(self.cfg.max_selected_items)
        self.use_24_hour_time = bool(self.cfg.use_24_hour_time)

    # --- items -------------------------------------------------------------

    def add_item(self, spec: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> SchedulingItem:
        return self.store.add_item(spec, **kwargs)

    def remove_item(self, item: SchedulingItem) -> bool:
        removed = self.store.remove_item(item)
        if removed:
            self.selection.discard(item)
        return removed

    def lookup(self, day: dt.date) -> Tuple[SchedulingItem, ...]:
        return self.store.lookup(day)

    def purge(self) -> None:
        self.selection.clear()
        self.store.purge()

    def begin_changes(self) -> None:
        self.store.begin_changes()

    def end_changes(self) -> None:
        self.store.end_changes()

    @contextmanager
    def changes(self) -> Iterator["WeeklyScheduler"]:
        with self.store.changes():
            yield self

    def load_items(self, specs: Iterable[Mapping[str, Any]]) -> List[SchedulingItem]:
        """Add many items under a single change bracket."""
        out: List[SchedulingItem] = []
        with self.store.changes():
            for spec in specs:
                out.append(self.store.add_item(spec))
        logger.debug("loaded %d item(s)", len(out))
        return out

    def set_items_by_day(self, rows: Iterable[Mapping[str, Any]]) -> List[SchedulingItem]:
        """Bulk load `[{day, items: [{sta, fin|dur, ...extra}]}]` rows.

        `fin` is the inclusive last minute, so duration = fin - sta + 1 when
        `dur` is missing. Keys other than sta/fin/dur/id/caption become `data`.
        """
        specs: List[Dict[str, Any]] = []
        for r, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise InvalidItemSpec(f"rows[{r}] must be a mapping")
            items = row.get("items") or []
            if not isinstance(items, list):
                raise InvalidItemSpec(f"rows[{r}].items must be a list")
            for raw in items:
                if not isinstance(raw, Mapping):
                    raise InvalidItemSpec(f"rows[{r}].items entries must be mappings")
                sta = raw.get("sta")
                dur = raw.get("dur")
                fin = raw.get("fin")
                if dur is None and isinstance(sta, int) and isinstance(fin, int):
                    dur = fin - sta + 1
                extra = {k: v for k, v in raw.items() if k not in _ROW_ITEM_KEYS}
                specs.append(
                    {
                        "id": raw.get("id"),
                        "caption": raw.get("caption"),
                        "day": row.get("day"),
                        "start_time_mins": sta,
                        "duration_mins": dur,
                        "data": extra or None,
                    }
                )
        return self.load_items(specs)

    # --- window ------------------------------------------------------------

    @property
    def view_start_date(self) -> dt.date:
        return self.window.view_start_date

    @view_start_date.setter
    def view_start_date(self, v: dt.date) -> None:
        self.window.view_start_date = v

    @property
    def view_end_date(self) -> dt.datetime:
        return self.window.view_end_date

    @property
    def view_start_time_mins(self) -> int:
        return self.window.view_start_time_mins

    @property
    def view_end_time_mins(self) -> int:
        return self.window.view_end_time_mins

    @property
    def time_view_granularity_mins(self) -> int:
        return self.window.time_view_granularity_mins

    @time_view_granularity_mins.setter
    def time_view_granularity_mins(self, v: int) -> None:
        self.window.time_view_granularity_mins = v

    def change_view_page(self, count: int = 1) -> dt.date:
        return self.window.change_view_page(count)

    @property
    def time_slots(self) -> Tuple[Slot, ...]:
        return self.window.time_slots

    def time_labels(self) -> List[str]:
        return slot_labels(self.window.time_slots, use_24_hour_time=self.use_24_hour_time)

    def day_headers(self) -> List[DayHeader]:
        return self.window.day_headers()

    # --- placement ---------------------------------------------------------

    def placements(self, day: dt.date) -> List[Placement]:
        return place_day(self.store.lookup(day), self.window.time_slots, self.window.time_view_granularity_mins)

    def week_placements(self) -> Dict[dt.date, List[Placement]]:
        return place_week(self.store, self.window)

    # --- selection ---------------------------------------------------------

    @property
    def max_selected_items(self) -> int:
        return self.selection.max_selected_items

    @max_selected_items.setter
    def max_selected_items(self, v: int) -> None:
        self.selection.max_selected_items = v

    @property
    def selected_items(self) -> Tuple[SchedulingItem, ...]:
        return self.selection.selected_items

    def toggle(self, item: SchedulingItem) -> bool:
        return self.selection.toggle(item)

    def select(self, item: SchedulingItem) -> bool:
        """Interactive toggle: refused for items outside the enabled date range."""
        if not self.window.is_day_enabled(item.day):
            logger.debug("selection of %r refused: %s is outside the enabled range", item.id, item.day.isoformat())
            return False
        return self.selection.toggle(item)

    def rank(self, item: SchedulingItem) -> Optional[int]:
        return self.selection.rank(item)

    def selection_summary(self) -> SelectionSummary:
        return selection_summary(self.selection.selected_items)

    # --- formatting --------------------------------------------------------

    def format_start_end(self, item: SchedulingItem) -> Tuple[str, str]:
        return format_start_end(item.start_time_mins, item.duration_mins, use_24_hour_time=self.use_24_hour_time)

    def caption_text(self, item: SchedulingItem) -> str:
        start, end = self.format_start_end(item)
        return item.caption_text(start, end)
