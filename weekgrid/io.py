"""Item file I/O helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .util.timeparse import parse_date_yyyy_mm_dd, parse_minutes_of_day

# File keys accepted besides the canonical snake_case ones.
_ALIASES = {
    "startTimeMins": "start_time_mins",
    "durationMins": "duration_mins",
}


def _as_int(v: Any) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    return None


def _parse_day(v: Any, where: str):
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"{where}: day must be a YYYY-MM-DD string")
    try:
        return parse_date_yyyy_mm_dd(v)
    except ValueError as ex:
        raise ValueError(f"{where}: invalid day {v!r}") from ex


def _item_spec(raw: Mapping[str, Any], where: str) -> Dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{where} must be an object")
    obj = {_ALIASES.get(k, k): v for k, v in raw.items()}

    start = _as_int(obj.get("start_time_mins"))
    if start is None and isinstance(obj.get("start"), str):
        start = parse_minutes_of_day(obj["start"])
    if start is None:
        raise ValueError(f"{where}: needs int start_time_mins or start HH:MM")

    dur = _as_int(obj.get("duration_mins"))
    if dur is None and isinstance(obj.get("end"), str):
        dur = parse_minutes_of_day(obj["end"]) - start
    if dur is None:
        raise ValueError(f"{where}: needs int duration_mins or end HH:MM")

    caption = obj.get("caption")
    if caption is not None and not isinstance(caption, str):
        raise ValueError(f"{where}: caption must be a string")

    return {
        "id": obj.get("id"),
        "caption": caption or None,
        "day": _parse_day(obj.get("day"), where),
        "start_time_mins": start,
        "duration_mins": dur,
        "data": obj.get("data"),
    }


def parse_items_document(obj: Any) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Split a decoded items document into (flat item specs, by-day rows).

    Accepted shapes:
      { "items": [ {"day": "2024-12-28", "start": "09:00", "end": "10:00", ...}, ... ] }
      { "days":  [ {"day": "2024-12-28", "items": [ {"sta": 540, "dur": 60, ...} ]} ] }
    Both keys may be present.
    """
    if not isinstance(obj, dict):
        raise ValueError("items file must be a JSON object")
    if "items" not in obj and "days" not in obj:
        raise ValueError("items file must contain 'items' and/or 'days'")

    flat_raw = obj.get("items", [])
    if not isinstance(flat_raw, list):
        raise ValueError("'items' must be a list")
    specs = [_item_spec(raw, f"items[{i}]") for i, raw in enumerate(flat_raw)]

    days_raw = obj.get("days", [])
    if not isinstance(days_raw, list):
        raise ValueError("'days' must be a list")
    rows: List[Dict[str, Any]] = []
    for i, row in enumerate(days_raw):
        if not isinstance(row, dict):
            raise ValueError(f"days[{i}] must be an object")
        items = row.get("items", [])
        if not isinstance(items, list):
            raise ValueError(f"days[{i}].items must be a list")
        rows.append({"day": _parse_day(row.get("day"), f"days[{i}]"), "items": items})

    return specs, rows


def load_items_file(path: Path) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    obj = json.loads(Path(path).read_text(encoding="utf-8", errors="replace"))
    return parse_items_document(obj)
