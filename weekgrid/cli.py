from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List

from .config import SchedulerConfig
from .io import load_items_file
from .render.snapshot import build_snapshot, dumps_snapshot
from .render.text import render_text
from .scheduler import WeeklyScheduler
from .util.console import eprint
from .util.timeparse import parse_date_yyyy_mm_dd
from .validate import InvalidItemSpec, SchedulerConfigError

logger = logging.getLogger("weekgrid")


def _obs_enabled() -> bool:
    v = (os.getenv("WEEKGRID_OBS_LOG", "") or "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"Invalid {name} value: {raw!r}")


def _die(msg: str, rc: int) -> int:
    eprint(f"[weekgrid] ERROR: {msg}")
    return rc


def _date_arg(s: str):
    try:
        return parse_date_yyyy_mm_dd(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="weekgrid",
        description="Lay scheduling items out on a weekly time grid and print the page.",
    )
    ap.add_argument("--items", required=True, help="Items JSON file ({'items': [...]} and/or {'days': [...]})")
    ap.add_argument(
        "--start-day",
        type=int,
        default=_env_int("WEEKGRID_START_DAY", 1),
        help="First weekday of a page, 0=Sunday (default: env WEEKGRID_START_DAY or 1)",
    )
    ap.add_argument(
        "--days",
        type=int,
        default=_env_int("WEEKGRID_DAYS", 6),
        help="Number of days per page (default: env WEEKGRID_DAYS or 6)",
    )
    ap.add_argument("--render-off", type=int, default=60, help="Padding minutes around the time bounds (default: 60)")
    ap.add_argument("--max-selected", type=int, default=2, help="Selection cap (default: 2)")
    ap.add_argument("--12h", dest="twelve_hour", action="store_true", help="Use 12-hour time labels")
    ap.add_argument("--enabled-start", type=_date_arg, default=None, help="First selectable date YYYY-MM-DD")
    ap.add_argument("--enabled-end", type=_date_arg, default=None, help="Last selectable date YYYY-MM-DD")
    ap.add_argument("--view-start", type=_date_arg, default=None, help="Explicit page start date YYYY-MM-DD")
    ap.add_argument("--page", type=int, default=0, help="Move the page by N weeks after loading (default: 0)")
    ap.add_argument("--select", action="append", default=[], metavar="ID", help="Toggle selection of item ID (repeatable)")
    ap.add_argument("--format", choices=("text", "json"), default="text", help="Output format (default: text)")
    ap.add_argument("--out", default=None, help="Write output to this path instead of stdout")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    ns = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (ns.verbose or _obs_enabled()) else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    items_path = Path(ns.items)
    if not items_path.exists():
        return _die(f"Missing items file: {items_path}", 2)

    try:
        cfg = SchedulerConfig(
            view_start_day=ns.start_day,
            view_num_days=ns.days,
            time_view_render_off_mins=ns.render_off,
            max_selected_items=ns.max_selected,
            use_24_hour_time=not ns.twelve_hour,
            enabled_start_date=ns.enabled_start,
            enabled_end_date=ns.enabled_end,
        )
    except SchedulerConfigError as e:
        return _die(f"Invalid configuration: {e}", 3)

    try:
        specs, rows = load_items_file(items_path)
    except ValueError as e:
        return _die(f"Failed to load items: {items_path} ({e})", 2)

    sch = WeeklyScheduler(cfg)
    try:
        with sch.changes():
            sch.load_items(specs)
            sch.set_items_by_day(rows)
    except InvalidItemSpec as e:
        return _die(f"Invalid item: {e}", 2)
    logger.debug("loaded %d item(s) from %s", len(sch.store), items_path)

    try:
        if ns.view_start is not None:
            sch.view_start_date = ns.view_start
        sch.change_view_page(ns.page)
    except SchedulerConfigError as e:
        return _die(str(e), 3)

    for item_id in ns.select:
        item = sch.store.get(item_id)
        if item is None:
            return _die(f"Unknown item id for --select: {item_id!r}", 2)
        if not sch.select(item):
            eprint(f"[weekgrid] WARN: selection of {item_id!r} was refused")

    snapshot = build_snapshot(sch)
    text = dumps_snapshot(snapshot) + "\n" if ns.format == "json" else render_text(snapshot)

    if ns.out:
        out = Path(ns.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8", newline="\n")
        print(out)
    else:
        print(text, end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
