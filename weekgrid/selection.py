# weekgrid/selection.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .model import SchedulingItem, SelectionSummary
from .validate import SchedulerConfigError


class SelectionController:
    """Capped, order-significant selection of items.

    Ranks are 1-based positions in selection order and shift down when an
    earlier item is deselected.
    """

    def __init__(self, max_selected_items: int = 2) -> None:
        self._items: List[SchedulingItem] = []
        self._max = 1
        self.max_selected_items = max_selected_items

    @property
    def max_selected_items(self) -> int:
        return self._max

    @max_selected_items.setter
    def max_selected_items(self, v: int) -> None:
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise SchedulerConfigError(f"max_selected_items must be int >= 1, got {v!r}")
        self._max = v
        # Shrinking keeps the earliest picks.
        del self._items[v:]

    @property
    def selected_items(self) -> Tuple[SchedulingItem, ...]:
        return tuple(self._items)

    def _index(self, item: SchedulingItem) -> int:
        for i, x in enumerate(self._items):
            if x is item:
                return i
        return -1

    def is_selected(self, item: SchedulingItem) -> bool:
        return self._index(item) >= 0

    def rank(self, item: SchedulingItem) -> Optional[int]:
        i = self._index(item)
        return i + 1 if i >= 0 else None

    def toggle(self, item: SchedulingItem) -> bool:
        """Select or deselect `item`. Returns True when the selection changed.

        When the selection is full, a multi-select controller ignores the new
        item while a single-select one replaces its current pick.
        """
        i = self._index(item)
        if i >= 0:
            del self._items[i]
            return True
        if len(self._items) >= self._max:
            if self._max > 1:
                return False
            self._items.clear()
        self._items.append(item)
        return True

    def discard(self, item: SchedulingItem) -> bool:
        i = self._index(item)
        if i < 0:
            return False
        del self._items[i]
        return True

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


def selection_summary(items: Sequence[SchedulingItem]) -> SelectionSummary:
    """sum duration, span and total gaps between selected items (per-day minutes, day-ordered)."""
    if not items:
        return SelectionSummary(count=0, duration_min=0, span_min=0, gap_min=0)

    ints = sorted(
        ((it.day.toordinal() * 1440 + it.start_time_mins, it.day.toordinal() * 1440 + it.start_time_mins + it.duration_mins) for it in items),
        key=lambda x: x[0],
    )
    total = sum(int(it.duration_mins) for it in items)
    span = max(e for _, e in ints) - ints[0][0]

    gap = 0
    prev_end = ints[0][1]
    for start, end in ints[1:]:
        if start > prev_end:
            gap += start - prev_end
        prev_end = max(prev_end, end)

    return SelectionSummary(count=len(ints), duration_min=int(total), span_min=int(span), gap_min=int(gap))
