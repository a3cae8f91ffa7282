# weekgrid/render/snapshot.py
from __future__ import annotations

import json
from typing import Any, Dict, List

from weekgrid.model import Placement, SchedulingItem
from weekgrid.util.viewkey import make_view_key

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


def _item_dict(scheduler, item: SchedulingItem) -> Dict[str, Any]:
    start, end = scheduler.format_start_end(item)
    return {
        "id": item.id,
        "day": item.day.isoformat(),
        "start_time_mins": item.start_time_mins,
        "duration_mins": item.duration_mins,
        "end_time_mins": item.end_time_mins,
        "start_label": start,
        "end_label": end,
        "caption": item.caption_text(start, end),
        "rank": scheduler.rank(item),
        "data": item.data,
    }


def _cell_dict(scheduler, p: Placement) -> Dict[str, Any]:
    return {
        "slot_index": p.slot_index,
        "minute_of_day": p.minute_of_day,
        "in_view": p.in_view,
        "span": p.span,
        "item": _item_dict(scheduler, p.item) if p.item is not None else None,
    }


def build_snapshot(scheduler) -> Dict[str, Any]:
    """Renderer-neutral, JSON-ready picture of the current page of the grid."""
    w = scheduler.window
    slots = w.time_slots
    labels = scheduler.time_labels()
    placements = scheduler.week_placements()

    days: List[Dict[str, Any]] = []
    for h in w.day_headers():
        days.append(
            {
                "date": h.date.isoformat(),
                "day_name": h.day_name,
                "day_number": h.day_number,
                "day_of_week": h.day_of_week,
                "month_number": h.month_number,
                "month_name": h.month_name,
                "year": h.year,
                "enabled": w.is_day_enabled(h.date),
                "cells": [_cell_dict(scheduler, p) for p in placements.get(h.date, [])],
            }
        )

    view_key = make_view_key(
        w.view_start_date,
        w.view_num_days,
        w.view_start_day,
        w.view_start_time_mins,
        w.view_end_time_mins,
        w.time_view_granularity_mins,
        w.time_view_render_off_mins,
    )

    return {
        "view": {
            "key": view_key,
            "start_date": w.view_start_date.isoformat(),
            "end_date": w.view_end_date.isoformat(),
            "start_day": w.view_start_day,
            "num_days": w.view_num_days,
            "start_time_mins": w.view_start_time_mins,
            "end_time_mins": w.view_end_time_mins,
            "granularity_mins": w.time_view_granularity_mins,
            "render_off_mins": w.time_view_render_off_mins,
            "effective_start_date": w.effective_start_date.isoformat(),
            "effective_end_date": w.effective_end_date.isoformat(),
            "enabled_start_date": w.enabled_start_date.isoformat(),
            "enabled_end_date": w.enabled_end_date.isoformat(),
            "use_24_hour_time": scheduler.use_24_hour_time,
        },
        "slots": [
            {"minute_of_day": s.minute_of_day, "in_view": s.in_view, "on_the_hour": s.on_the_hour, "label": label}
            for s, label in zip(slots, labels)
        ],
        "days": days,
        "selection": {
            "max": scheduler.max_selected_items,
            "ids": [it.id for it in scheduler.selected_items],
        },
    }


def dumps_snapshot(snapshot: Dict[str, Any]) -> str:
    if not isinstance(snapshot, dict):
        raise TypeError(f"snapshot must be dict, got {type(snapshot).__name__}")
    # Opaque item payloads may hold values JSON cannot express; stringify those.
    if orjson is not None:
        return orjson.dumps(snapshot, default=str).decode("utf-8")
    return json.dumps(snapshot, ensure_ascii=False, separators=(",", ":"), default=str)
