# weekgrid/config.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .validate import SUPPORTED_GRANULARITY_MINS, SchedulerConfigError, assert_valid_config

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DEFAULT_VIEW_START_TIME_MINS = 9 * 60
DEFAULT_VIEW_END_TIME_MINS = 17 * 60

# Option names used by widget hosts.
_CAMEL_KEYS = {
    "viewStartDay": "view_start_day",
    "viewNumDays": "view_num_days",
    "timeViewGranularityMins": "time_view_granularity_mins",
    "timeViewRenderOffMins": "time_view_render_off_mins",
    "maxSelectedItems": "max_selected_items",
    "use24HourTime": "use_24_hour_time",
    "enabledStartDate": "enabled_start_date",
    "enabledEndDate": "enabled_end_date",
}


@dataclass(frozen=True)
class SchedulerConfig:
    view_start_day: int = MONDAY
    view_num_days: int = 6  # Monday - Saturday
    time_view_granularity_mins: int = SUPPORTED_GRANULARITY_MINS
    time_view_render_off_mins: int = 60
    max_selected_items: int = 2
    use_24_hour_time: bool = True
    enabled_start_date: Optional[dt.date] = None
    enabled_end_date: Optional[dt.date] = None

    def __post_init__(self) -> None:
        assert_valid_config(self)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SchedulerConfig":
        """Build a config from snake_case or camelCase option names.

        Date options may be given as `date` objects or `YYYY-MM-DD` strings.
        Unknown keys are rejected.
        """
        if not isinstance(raw, Mapping):
            raise SchedulerConfigError("config must be a mapping")

        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in raw.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise SchedulerConfigError(f"unknown config option: {key!r}")
            if name in ("enabled_start_date", "enabled_end_date") and isinstance(value, str):
                try:
                    value = dt.datetime.strptime(value.strip(), "%Y-%m-%d").date()
                except ValueError as ex:
                    raise SchedulerConfigError(f"{key} must be YYYY-MM-DD, got {value!r}") from ex
            kwargs[name] = value
        return cls(**kwargs)


__all__ = [
    "DEFAULT_VIEW_END_TIME_MINS",
    "DEFAULT_VIEW_START_TIME_MINS",
    "FRIDAY",
    "MONDAY",
    "SATURDAY",
    "SUNDAY",
    "SchedulerConfig",
    "THURSDAY",
    "TUESDAY",
    "WEDNESDAY",
]
