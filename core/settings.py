from __future__ import annotations

import calendar
import os
from dataclasses import dataclass, field
from typing import Mapping

from core.domain.enums import ViewMode
from core.exceptions import ValidationError

_WEEKDAY_NAMES = {
    "monday": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
}


def _default_day_widths() -> dict[ViewMode, int]:
    return {ViewMode.DAY: 40, ViewMode.WEEK: 20, ViewMode.MONTH: 8}


@dataclass(frozen=True)
class GanttSettings:
    """
    Geometry and policy knobs shared by the projector, the drag controller
    and the Qt canvas. Values can be overridden through PM_GANTT_* env vars.
    """

    day_widths: Mapping[ViewMode, int] = field(default_factory=_default_day_widths)
    handle_width: int = 8
    connector_radius: int = 8
    row_height: int = 40
    header_height: int = 60
    bar_height: int = 28
    baseline_bar_height: int = 8
    leading_padding_days: int = 7
    trailing_padding_days: int = 14
    empty_domain_days: int = 30
    week_start: int = calendar.SUNDAY
    overload_threshold: int = 2

    def day_width(self, view_mode: ViewMode) -> int:
        return int(self.day_widths[ViewMode(view_mode)])

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GanttSettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        widths = dict(defaults.day_widths)
        for mode in ViewMode:
            raw = env.get(f"PM_GANTT_{mode.name}_WIDTH")
            if raw:
                widths[mode] = _positive_int(f"PM_GANTT_{mode.name}_WIDTH", raw)

        week_start = defaults.week_start
        raw_week_start = (env.get("PM_GANTT_WEEK_START") or "").strip().lower()
        if raw_week_start:
            if raw_week_start not in _WEEKDAY_NAMES:
                raise ValidationError(
                    f"Unknown week start day: {raw_week_start!r}",
                    code="SETTINGS_INVALID_WEEK_START",
                )
            week_start = _WEEKDAY_NAMES[raw_week_start]

        overload = defaults.overload_threshold
        if env.get("PM_GANTT_OVERLOAD_THRESHOLD"):
            overload = _positive_int("PM_GANTT_OVERLOAD_THRESHOLD", env["PM_GANTT_OVERLOAD_THRESHOLD"])

        handle = defaults.handle_width
        if env.get("PM_GANTT_HANDLE_WIDTH"):
            handle = _positive_int("PM_GANTT_HANDLE_WIDTH", env["PM_GANTT_HANDLE_WIDTH"])

        return cls(
            day_widths=widths,
            handle_width=handle,
            week_start=week_start,
            overload_threshold=overload,
        )


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}.", code="SETTINGS_INVALID_VALUE") from None
    if value <= 0:
        raise ValidationError(f"{name} must be greater than zero.", code="SETTINGS_INVALID_VALUE")
    return value


DEFAULT_SETTINGS = GanttSettings()

__all__ = ["GanttSettings", "DEFAULT_SETTINGS"]
