# weekgrid/render/text.py
from __future__ import annotations

from typing import Any, Dict, List

_COL_W = 16


def _fit(s: str, w: int) -> str:
    s = s.replace("\n", " ")
    return s[: w - 1] + "~" if len(s) > w else s.ljust(w)


def render_text(snapshot: Dict[str, Any]) -> str:
    """Plain-text table of a snapshot, one row per slot (CLI diagnostic output)."""
    slots = snapshot.get("slots") or []
    days = snapshot.get("days") or []

    # Expand each day's placement records back into one cell string per slot row.
    columns: List[List[str]] = []
    for day in days:
        col = [""] * len(slots)
        for cell in day.get("cells") or []:
            idx = cell["slot_index"]
            item = cell.get("item")
            if item is None:
                col[idx] = "." if cell.get("in_view") else ""
                continue
            mark = f"#{item['rank']} " if item.get("rank") else ""
            col[idx] = mark + str(item.get("caption") or "")
            for k in range(1, int(cell.get("span") or 1)):
                if idx + k < len(col):
                    col[idx + k] = "|"
        columns.append(col)

    lines: List[str] = []
    head = [_fit("", 8)]
    for day in days:
        flag = "" if day.get("enabled", True) else "*"
        head.append(_fit(f"{day['day_name']} {day['date']}{flag}", _COL_W))
    lines.append(" ".join(head).rstrip())

    for r, slot in enumerate(slots):
        row = [_fit(slot.get("label") or "", 8)]
        for col in columns:
            row.append(_fit(col[r], _COL_W))
        lines.append(" ".join(row).rstrip())

    sel = snapshot.get("selection") or {}
    lines.append(f"selected: {', '.join(sel.get('ids') or []) or '-'} (max {sel.get('max')})")
    return "\n".join(lines) + "\n"
