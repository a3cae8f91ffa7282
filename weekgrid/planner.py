# weekgrid/planner.py
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Sequence

from .model import Placement, SchedulingItem, Slot

logger = logging.getLogger(__name__)


def item_span(item: SchedulingItem, granularity: int) -> int:
    """Rows occupied by `item`; partial rows are truncated, but never below one."""
    return max(1, int(item.duration_mins) // int(granularity))


def place_day(
    items: Sequence[SchedulingItem],
    slots: Sequence[Slot],
    granularity: int,
) -> List[Placement]:
    """
    Map one day's items onto the shared slot axis.

    Walks the slots in order:
      - in-view slot whose minute equals an item's start exactly -> item record,
        and the next span-1 slots are consumed by it
      - anything else -> empty record (span 1)

    Items sharing a start minute: only the first in bucket order is placed.
    Items whose start is not on a slot boundary never get a record.
    """
    by_start: Dict[int, SchedulingItem] = {}
    for it in items:
        if it.start_time_mins in by_start:
            logger.debug(
                "item %r on %s shares start minute %d with %r; skipped",
                it.id,
                it.day.isoformat(),
                it.start_time_mins,
                by_start[it.start_time_mins].id,
            )
            continue
        by_start[it.start_time_mins] = it

    out: List[Placement] = []
    i = 0
    n = len(slots)
    while i < n:
        slot = slots[i]
        found = by_start.get(slot.minute_of_day) if slot.in_view else None
        if found is not None:
            span = item_span(found, granularity)
            out.append(Placement(item=found, span=span, slot_index=i, minute_of_day=slot.minute_of_day, in_view=True))
            i += span
            continue
        out.append(Placement(item=None, span=1, slot_index=i, minute_of_day=slot.minute_of_day, in_view=slot.in_view))
        i += 1
    return out


def place_week(store, window) -> Dict[dt.date, List[Placement]]:
    """Placements for every visible date of the window's current page."""
    slots = window.time_slots
    granularity = window.time_view_granularity_mins
    return {d: place_day(store.lookup(d), slots, granularity) for d in window.view_dates()}


def unplaced_items(items: Sequence[SchedulingItem], placements: Sequence[Placement]) -> List[SchedulingItem]:
    """Items of a day that received no placement record (collision, misaligned or out of view)."""
    placed = {id(p.item) for p in placements if p.item is not None}
    return [it for it in items if id(it) not in placed]
