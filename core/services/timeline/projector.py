from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Iterable, List, Optional

from core.models import Milestone, Task, ViewMode, day_span
from core.settings import DEFAULT_SETTINGS, GanttSettings
from core.services.timeline.models import HeaderCell


def start_of_week(value: date, week_start: int) -> date:
    """Most recent ``week_start`` weekday on or before ``value`` (calendar.MONDAY..SUNDAY)."""
    return value - timedelta(days=(value.weekday() - week_start) % 7)


def compute_domain(
    tasks: Iterable[Task],
    milestones: Iterable[Milestone] = (),
    *,
    today: Optional[date] = None,
    settings: GanttSettings = DEFAULT_SETTINGS,
) -> tuple[date, date]:
    dates: list[date] = []
    for task in tasks:
        dates.append(task.start_date)
        dates.append(task.end_date)
    dates.extend(m.date for m in milestones)

    if not dates:
        anchor = today or date.today()
        return (
            start_of_week(anchor, settings.week_start),
            anchor + timedelta(days=settings.empty_domain_days),
        )

    start = start_of_week(min(dates), settings.week_start) - timedelta(days=settings.leading_padding_days)
    end = max(dates) + timedelta(days=settings.trailing_padding_days)
    return start, end


class TimelineScale:
    """
    Linear calendar-to-pixel mapping over an inclusive date domain.
    Pure value object; the chart rebuilds it whenever tasks or view mode change.
    """

    def __init__(
        self,
        domain_start: date,
        domain_end: date,
        view_mode: ViewMode = ViewMode.DAY,
        *,
        settings: GanttSettings = DEFAULT_SETTINGS,
        today: Optional[date] = None,
    ):
        if domain_end < domain_start:
            domain_end = domain_start
        self.domain_start = domain_start
        self.domain_end = domain_end
        self.view_mode = ViewMode(view_mode)
        self.settings = settings
        self.today = today or date.today()

    @classmethod
    def for_schedule(
        cls,
        tasks: Iterable[Task],
        milestones: Iterable[Milestone] = (),
        view_mode: ViewMode = ViewMode.DAY,
        *,
        settings: GanttSettings = DEFAULT_SETTINGS,
        today: Optional[date] = None,
    ) -> "TimelineScale":
        start, end = compute_domain(tasks, milestones, today=today, settings=settings)
        return cls(start, end, view_mode, settings=settings, today=today)

    @property
    def day_width(self) -> int:
        return self.settings.day_width(self.view_mode)

    @property
    def total_days(self) -> int:
        return day_span(self.domain_start, self.domain_end)

    @property
    def total_width(self) -> int:
        return self.total_days * self.day_width

    def with_view_mode(self, view_mode: ViewMode) -> "TimelineScale":
        return TimelineScale(
            self.domain_start,
            self.domain_end,
            view_mode,
            settings=self.settings,
            today=self.today,
        )

    # ---------- conversions ----------

    def position(self, value: date) -> int:
        return (value - self.domain_start).days * self.day_width

    def date_at(self, x: float) -> date:
        return self.domain_start + timedelta(days=math.floor(x / self.day_width))

    def span_width(self, start: date, end: date) -> int:
        return day_span(start, end) * self.day_width

    def delta_days(self, delta_px: float) -> int:
        # exact halves round up
        return math.floor(delta_px / self.day_width + 0.5)

    def today_offset(self) -> Optional[int]:
        if self.domain_start <= self.today <= self.domain_end:
            return self.position(self.today)
        return None

    # ---------- header ----------

    def header_cells(self) -> List[HeaderCell]:
        if self.view_mode == ViewMode.DAY:
            return self._day_cells()
        if self.view_mode == ViewMode.WEEK:
            return self._week_cells()
        return self._month_cells()

    def _day_cells(self) -> List[HeaderCell]:
        cells: List[HeaderCell] = []
        current = self.domain_start
        while current <= self.domain_end:
            cells.append(
                HeaderCell(
                    label=str(current.day),
                    sub_label=current.strftime("%a"),
                    start=current,
                    width=self.day_width,
                    is_weekend=current.weekday() >= 5,
                    is_today=current == self.today,
                )
            )
            current += timedelta(days=1)
        return cells

    def _week_cells(self) -> List[HeaderCell]:
        cells: List[HeaderCell] = []
        week = start_of_week(self.domain_start, self.settings.week_start)
        while week <= self.domain_end:
            week_end = week + timedelta(days=6)
            cells.append(self._clipped_cell(
                week,
                week_end,
                label=f"{week.strftime('%b')} {week.day}",
                sub_label=f"Week {(week + timedelta(days=3)).isocalendar()[1]}",
            ))
            week = week_end + timedelta(days=1)
        return cells

    def _month_cells(self) -> List[HeaderCell]:
        cells: List[HeaderCell] = []
        month = self.domain_start.replace(day=1)
        while month <= self.domain_end:
            following = (month.replace(day=28) + timedelta(days=4)).replace(day=1)
            cells.append(self._clipped_cell(
                month,
                following - timedelta(days=1),
                label=month.strftime("%B %Y"),
                sub_label="",
            ))
            month = following
        return cells

    def _clipped_cell(self, start: date, end: date, *, label: str, sub_label: str) -> HeaderCell:
        visible_start = max(start, self.domain_start)
        visible_end = min(end, self.domain_end)
        return HeaderCell(
            label=label,
            sub_label=sub_label,
            start=visible_start,
            width=self.span_width(visible_start, visible_end),
        )


__all__ = ["TimelineScale", "compute_domain", "start_of_week"]
