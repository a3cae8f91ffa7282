# weekgrid/store.py
from __future__ import annotations

import bisect
import datetime as dt
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .model import DayBucket, SchedulingItem, caption_from
from .util.dates import to_date
from .validate import InvalidItemSpec, assert_valid_item_spec

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class ItemStore:
    """Day-bucketed, insertion-ordered collection of scheduling items.

    Buckets are kept sorted ascending by calendar day. Every mutation signals
    subscribed listeners; inside a `begin_changes()`/`end_changes()` bracket the
    signals are coalesced and delivered once when the outermost bracket closes.
    """

    def __init__(self) -> None:
        self._buckets: List[DayBucket] = []
        # Parallel to _buckets; bisect target.
        self._days: List[dt.date] = []
        self._by_day: Dict[dt.date, DayBucket] = {}
        self._by_id: Dict[str, SchedulingItem] = {}
        self._seq = 0
        self._depth = 0
        self._dirty = False
        self._revision = 0
        self._listeners: List[ChangeListener] = []

    # --- change signalling -------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    @property
    def revision(self) -> int:
        """Number of change signals delivered so far."""
        return self._revision

    @property
    def in_changes(self) -> bool:
        return self._depth > 0

    def begin_changes(self) -> None:
        self._depth += 1

    def end_changes(self) -> None:
        if self._depth <= 0:
            raise RuntimeError("end_changes() called without matching begin_changes()")
        self._depth -= 1
        if self._depth == 0 and self._dirty:
            self._flush()

    @contextmanager
    def changes(self) -> Iterator["ItemStore"]:
        """Scoped change bracket; released on every exit path."""
        self.begin_changes()
        try:
            yield self
        finally:
            self.end_changes()

    def _changed(self) -> None:
        self._dirty = True
        if self._depth == 0:
            self._flush()

    def _flush(self) -> None:
        self._dirty = False
        self._revision += 1
        logger.debug("item store changed (revision=%d, days=%d, items=%d)", self._revision, len(self._buckets), len(self._by_id))
        for listener in list(self._listeners):
            listener()

    # --- mutation ----------------------------------------------------------

    def _next_id(self) -> str:
        while True:
            self._seq += 1
            candidate = f"item-{self._seq}"
            if candidate not in self._by_id:
                return candidate

    def add_item(self, spec: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> SchedulingItem:
        """Validate a spec, store the resulting item and return it.

        Accepts a mapping (`day`, `start_time_mins`, `duration_mins`, optional
        `id`, `caption`, `data`) and/or the same keys as keyword arguments.
        Raises InvalidItemSpec without touching the store when the spec is invalid.
        """
        raw: Dict[str, Any] = dict(spec or {})
        raw.update(kwargs)
        assert_valid_item_spec(raw)

        item_id = raw.get("id")
        if item_id is not None and item_id in self._by_id:
            raise InvalidItemSpec(f"item: duplicate id {item_id!r}")

        item = SchedulingItem(
            id=item_id if item_id is not None else self._next_id(),
            day=to_date(raw["day"]),
            start_time_mins=int(raw["start_time_mins"]),
            duration_mins=int(raw["duration_mins"]),
            caption=caption_from(raw.get("caption")),
            data=raw.get("data"),
        )

        bucket = self._by_day.get(item.day)
        if bucket is None:
            bucket = DayBucket(day=item.day)
            i = bisect.bisect_left(self._days, item.day)
            self._days.insert(i, item.day)
            self._buckets.insert(i, bucket)
            self._by_day[item.day] = bucket
        else:
            clash = next((x for x in bucket.items if x.start_time_mins == item.start_time_mins), None)
            if clash is not None:
                logger.warning(
                    "items %r and %r on %s both start at minute %d; only the first is placed",
                    clash.id,
                    item.id,
                    item.day.isoformat(),
                    item.start_time_mins,
                )
        bucket.items.append(item)
        self._by_id[item.id] = item

        self._changed()
        return item

    def remove_item(self, item: SchedulingItem) -> bool:
        """Remove a stored item. The day bucket stays even when it becomes empty."""
        if self._by_id.get(item.id) is not item:
            return False
        bucket = self._by_day.get(item.day)
        if bucket is None:
            return False
        bucket.items = [x for x in bucket.items if x is not item]
        del self._by_id[item.id]
        self._changed()
        return True

    def purge(self) -> None:
        self._buckets = []
        self._days = []
        self._by_day = {}
        self._by_id = {}
        self._seq = 0
        self._changed()

    # --- queries -----------------------------------------------------------

    def lookup(self, day: dt.date) -> Tuple[SchedulingItem, ...]:
        bucket = self._by_day.get(to_date(day))
        return tuple(bucket.items) if bucket is not None else ()

    def get(self, item_id: str) -> Optional[SchedulingItem]:
        return self._by_id.get(item_id)

    @property
    def buckets(self) -> Tuple[DayBucket, ...]:
        """Copies of the day buckets; mutating them does not touch the store."""
        return tuple(DayBucket(day=b.day, items=list(b.items)) for b in self._buckets)

    @property
    def days(self) -> Tuple[dt.date, ...]:
        return tuple(self._days)

    def first_day(self) -> Optional[dt.date]:
        for b in self._buckets:
            if b.items:
                return b.day
        return None

    def last_day(self) -> Optional[dt.date]:
        for b in reversed(self._buckets):
            if b.items:
                return b.day
        return None

    def items_between(self, start: dt.date, end: dt.date) -> Iterator[SchedulingItem]:
        """Items whose day is in [start, end)."""
        i = bisect.bisect_left(self._days, start)
        while i < len(self._buckets) and self._buckets[i].day < end:
            yield from self._buckets[i].items
            i += 1

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[SchedulingItem]:
        for b in self._buckets:
            yield from b.items

    def __contains__(self, item: object) -> bool:
        return isinstance(item, SchedulingItem) and self._by_id.get(item.id) is item
