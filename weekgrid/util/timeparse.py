# weekgrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    # 24:00 is accepted as an end-of-day bound.
    if not ((0 <= hh <= 23 and 0 <= mm <= 59) or (hh == 24 and mm == 0)):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_minutes_of_day(s: str) -> int:
    hh, mm = parse_hhmm(s)
    return hh * 60 + mm


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()
