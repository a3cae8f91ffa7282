# weekgrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union


@dataclass(frozen=True)
class LiteralCaption:
    text: str

    def render(self, start_label: str, end_label: str) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedCaption:
    fn: Callable[[str, str], str]

    def render(self, start_label: str, end_label: str) -> str:
        return str(self.fn(start_label, end_label))


Caption = Union[LiteralCaption, ComputedCaption]


def default_caption(start_label: str, end_label: str) -> str:
    return f"{start_label} - {end_label}"


def caption_from(value: Any) -> Optional[Caption]:
    """Lift a raw caption (None, text, callable or variant) into a Caption variant."""
    if value is None:
        return None
    if isinstance(value, (LiteralCaption, ComputedCaption)):
        return value
    if isinstance(value, str):
        return LiteralCaption(value)
    if callable(value):
        return ComputedCaption(value)
    raise TypeError(f"caption must be str, callable or None, got {type(value).__name__}")


# Items compare by identity: two items with equal fields are still distinct entries.
@dataclass(frozen=True, eq=False)
class SchedulingItem:
    id: str
    day: dt.date
    start_time_mins: int
    duration_mins: int
    caption: Optional[Caption] = None
    data: Any = None

    @property
    def end_time_mins(self) -> int:
        """Last minute occupied by the item (inclusive)."""
        return self.start_time_mins + self.duration_mins - 1

    def caption_text(self, start_label: str, end_label: str) -> str:
        if self.caption is None:
            return default_caption(start_label, end_label)
        return self.caption.render(start_label, end_label)


@dataclass
class DayBucket:
    day: dt.date
    items: List[SchedulingItem] = field(default_factory=list)


@dataclass(frozen=True)
class Slot:
    minute_of_day: int
    in_view: bool

    @property
    def on_the_hour(self) -> bool:
        return self.minute_of_day % 60 == 0


@dataclass(frozen=True)
class Placement:
    item: Optional[SchedulingItem]
    span: int
    slot_index: int
    minute_of_day: int = 0
    in_view: bool = False

    @property
    def is_empty(self) -> bool:
        return self.item is None


@dataclass(frozen=True)
class DayHeader:
    date: dt.date
    day_name: str
    day_number: int
    day_of_week: int         # 0=Sunday
    month_number: int        # 1..12
    month_name: Optional[str]  # only when the month changes from the previous column
    year: Optional[int]        # only when the year changes from the previous column


@dataclass(frozen=True)
class SelectionSummary:
    count: int
    duration_min: int
    span_min: int
    gap_min: int


__all__ = [
    "Caption",
    "ComputedCaption",
    "DayBucket",
    "DayHeader",
    "LiteralCaption",
    "Placement",
    "SchedulingItem",
    "SelectionSummary",
    "Slot",
    "caption_from",
    "default_caption",
]
