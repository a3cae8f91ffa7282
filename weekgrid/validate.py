"""Item spec and configuration validation helpers (library-facing)."""

from __future__ import annotations

import datetime as dt
from typing import Any, List, Mapping

from .model import ComputedCaption, LiteralCaption

MINUTES_PER_DAY = 24 * 60
SUPPORTED_GRANULARITY_MINS = 30


class SchedulerError(ValueError):
    """Base class for every error raised by the scheduling engine."""


class InvalidItemSpec(SchedulerError):
    """Raised when an item spec fails validation. Nothing is stored."""


class SchedulerConfigError(SchedulerError):
    """Raised when a configuration value is rejected."""


class InvalidStartDate(SchedulerConfigError):
    """Raised when an explicit view start date does not fall on the view start day."""


class UnsupportedGranularity(SchedulerConfigError):
    """Raised for any slot granularity other than 30 minutes.

    Other granularities are known to make slot generation loop without end,
    so they are refused instead of being worked around.
    """


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_item_spec(spec: Mapping[str, Any], *, label: str = "item") -> List[str]:
    if not isinstance(spec, Mapping):
        return [f"{label}: spec must be a mapping"]

    errs: List[str] = []

    item_id = spec.get("id")
    if item_id is not None:
        _require(isinstance(item_id, str) and bool(item_id.strip()), f"{label}: id must be a non-empty string", errs)

    day = spec.get("day")
    _require(day is not None, f"{label}: day is required", errs)
    if day is not None:
        _require(isinstance(day, dt.date), f"{label}: day must be a date or datetime", errs)

    start = spec.get("start_time_mins")
    if not _is_int(start):
        errs.append(f"{label}: start_time_mins must be int")
    else:
        _require(0 <= start < MINUTES_PER_DAY, f"{label}: start_time_mins must be in [0, {MINUTES_PER_DAY})", errs)

    dur = spec.get("duration_mins")
    if not _is_int(dur):
        errs.append(f"{label}: duration_mins must be int")
    else:
        _require(dur > 0, f"{label}: duration_mins must be > 0", errs)

    caption = spec.get("caption")
    if caption is not None and not callable(caption) and not isinstance(caption, (LiteralCaption, ComputedCaption)):
        if not isinstance(caption, str):
            errs.append(f"{label}: caption must be a string, a callable or None")
        else:
            _require(bool(caption), f"{label}: caption must not be empty", errs)

    return errs


def assert_valid_item_spec(spec: Mapping[str, Any], *, label: str = "item") -> None:
    errs = validate_item_spec(spec, label=label)
    if errs:
        raise InvalidItemSpec(errs[0])


def validate_config(cfg: Any) -> List[str]:
    """Return the problems found in a SchedulerConfig-like object (empty if valid).

    Granularity is not checked here; see `assert_supported_granularity`.
    """
    errs: List[str] = []

    sd = getattr(cfg, "view_start_day", None)
    _require(_is_int(sd) and 0 <= sd <= 6, "view_start_day must be int in 0..6 (0=Sunday)", errs)

    nd = getattr(cfg, "view_num_days", None)
    _require(_is_int(nd) and nd >= 1, "view_num_days must be int >= 1", errs)

    off = getattr(cfg, "time_view_render_off_mins", None)
    _require(_is_int(off) and off >= 0, "time_view_render_off_mins must be int >= 0", errs)

    mx = getattr(cfg, "max_selected_items", None)
    _require(_is_int(mx) and mx >= 1, "max_selected_items must be int >= 1", errs)

    _require(isinstance(getattr(cfg, "use_24_hour_time", None), bool), "use_24_hour_time must be bool", errs)

    es = getattr(cfg, "enabled_start_date", None)
    ee = getattr(cfg, "enabled_end_date", None)
    if es is not None:
        _require(isinstance(es, dt.date), "enabled_start_date must be a date", errs)
    if ee is not None:
        _require(isinstance(ee, dt.date), "enabled_end_date must be a date", errs)
    if isinstance(es, dt.date) and isinstance(ee, dt.date):
        _require(_as_date(es) <= _as_date(ee), "enabled_start_date must not be after enabled_end_date", errs)

    return errs


def assert_valid_config(cfg: Any) -> None:
    assert_supported_granularity(getattr(cfg, "time_view_granularity_mins", None))
    errs = validate_config(cfg)
    if errs:
        raise SchedulerConfigError(errs[0])


def assert_supported_granularity(value: Any) -> None:
    if not _is_int(value) or value != SUPPORTED_GRANULARITY_MINS:
        raise UnsupportedGranularity(
            f"time_view_granularity_mins must be {SUPPORTED_GRANULARITY_MINS}, got {value!r}"
        )


def _as_date(d: dt.date) -> dt.date:
    return d.date() if isinstance(d, dt.datetime) else d


__all__ = [
    "InvalidItemSpec",
    "InvalidStartDate",
    "MINUTES_PER_DAY",
    "SUPPORTED_GRANULARITY_MINS",
    "SchedulerConfigError",
    "SchedulerError",
    "UnsupportedGranularity",
    "assert_supported_granularity",
    "assert_valid_config",
    "assert_valid_item_spec",
    "validate_config",
    "validate_item_spec",
]
