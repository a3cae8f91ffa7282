"""weekgrid.api

Stable *library* entrypoint for weekgrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from weekgrid.config import SchedulerConfig
from weekgrid.io import load_items_file, parse_items_document
from weekgrid.model import (
    ComputedCaption,
    DayBucket,
    DayHeader,
    LiteralCaption,
    Placement,
    SchedulingItem,
    SelectionSummary,
    Slot,
)
from weekgrid.planner import place_day, place_week, unplaced_items
from weekgrid.render.snapshot import build_snapshot, dumps_snapshot
from weekgrid.scheduler import WeeklyScheduler
from weekgrid.selection import SelectionController, selection_summary
from weekgrid.slots import compute_time_bounds, generate_slots, slot_labels
from weekgrid.store import ItemStore
from weekgrid.util.timefmt import format_start_end, format_time
from weekgrid.validate import (
    InvalidItemSpec,
    InvalidStartDate,
    SchedulerConfigError,
    SchedulerError,
    UnsupportedGranularity,
)
from weekgrid.window import ViewWindow


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "ComputedCaption",
    "DayBucket",
    "DayHeader",
    "InvalidItemSpec",
    "InvalidStartDate",
    "ItemStore",
    "LiteralCaption",
    "Placement",
    "SchedulerConfig",
    "SchedulerConfigError",
    "SchedulerError",
    "SchedulingItem",
    "SelectionController",
    "SelectionSummary",
    "Slot",
    "UnsupportedGranularity",
    "ViewWindow",
    "WeeklyScheduler",
    "build_snapshot",
    "compute_time_bounds",
    "dumps_snapshot",
    "format_start_end",
    "format_time",
    "generate_slots",
    "load_items_file",
    "parse_items_document",
    "place_day",
    "place_week",
    "selection_summary",
    "slot_labels",
    "unplaced_items",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
