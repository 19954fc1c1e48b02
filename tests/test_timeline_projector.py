import calendar
from datetime import date, timedelta

from core.models import Milestone, ViewMode
from core.settings import GanttSettings
from core.services.timeline.projector import TimelineScale, compute_domain, start_of_week
from tests.builders import make_task

TODAY = date(2024, 1, 10)


def _scale(view_mode=ViewMode.DAY, today=TODAY):
    tasks = [make_task("a", date(2024, 1, 10), date(2024, 1, 12))]
    return TimelineScale.for_schedule(tasks, view_mode=view_mode, settings=GanttSettings(), today=today)


def test_start_of_week_respects_configured_weekday():
    wednesday = date(2024, 1, 10)
    assert start_of_week(wednesday, calendar.SUNDAY) == date(2024, 1, 7)
    assert start_of_week(wednesday, calendar.MONDAY) == date(2024, 1, 8)
    assert start_of_week(date(2024, 1, 7), calendar.SUNDAY) == date(2024, 1, 7)


def test_domain_pads_tasks_and_milestones():
    tasks = [make_task("a", date(2024, 1, 10), date(2024, 1, 12))]
    milestones = [Milestone.create("p1", "Launch", date(2024, 2, 1))]

    start, end = compute_domain(tasks, milestones, settings=GanttSettings())

    assert start == date(2023, 12, 31)
    assert end == date(2024, 2, 15)


def test_empty_domain_starts_at_current_week():
    start, end = compute_domain([], today=TODAY, settings=GanttSettings())

    assert start == date(2024, 1, 7)
    assert end == date(2024, 2, 9)


def test_day_widths_per_view_mode():
    scale = _scale()
    assert scale.day_width == 40
    assert scale.with_view_mode(ViewMode.WEEK).day_width == 20
    assert scale.with_view_mode(ViewMode.MONTH).day_width == 8
    assert scale.total_days == 27
    assert scale.total_width == 27 * 40


def test_position_and_date_round_trip():
    scale = _scale()

    assert scale.position(date(2024, 1, 10)) == 400
    assert scale.date_at(400) == date(2024, 1, 10)
    assert scale.date_at(399) == date(2024, 1, 9)
    assert scale.span_width(date(2024, 1, 10), date(2024, 1, 12)) == 120


def test_delta_days_rounds_to_nearest_day():
    scale = _scale()

    assert scale.delta_days(59) == 1
    assert scale.delta_days(61) == 2
    assert scale.delta_days(-61) == -2
    assert scale.delta_days(10) == 0


def test_delta_days_rounds_exact_halves_up():
    scale = _scale()

    assert [scale.delta_days(px) for px in (20, 60, 100, 140)] == [1, 2, 3, 4]
    assert scale.delta_days(-20) == 0
    assert scale.delta_days(-60) == -1


def test_position_is_zero_at_domain_start_and_strictly_increasing():
    for view_mode in ViewMode:
        scale = _scale(view_mode)
        assert scale.position(scale.domain_start) == 0

        days = [scale.domain_start + timedelta(days=i) for i in range((scale.domain_end - scale.domain_start).days + 1)]
        positions = [scale.position(day) for day in days]
        assert all(left < right for left, right in zip(positions, positions[1:]))


def test_today_offset_only_inside_domain():
    assert _scale().today_offset() == 400
    assert _scale(today=date(2025, 6, 1)).today_offset() is None


def test_day_header_cells():
    cells = _scale().header_cells()

    assert len(cells) == 27
    first = cells[0]
    assert first.label == "31"
    assert first.sub_label == "Sun"
    assert first.is_weekend
    assert [cell for cell in cells if cell.is_today][0].start == TODAY


def test_week_header_cells_are_clipped_to_domain():
    scale = _scale(ViewMode.WEEK)
    cells = scale.header_cells()

    assert [cell.label for cell in cells] == ["Dec 31", "Jan 7", "Jan 14", "Jan 21"]
    assert cells[0].sub_label == "Week 1"
    assert cells[0].width == 140
    assert cells[-1].width == 120
    assert sum(cell.width for cell in cells) == scale.total_width
    assert not any(cell.is_today for cell in cells)


def test_month_header_cells_are_clipped_to_domain():
    scale = _scale(ViewMode.MONTH)
    cells = scale.header_cells()

    assert [cell.label for cell in cells] == ["December 2023", "January 2024"]
    assert cells[0].width == 8
    assert cells[1].start == date(2024, 1, 1)
    assert cells[1].width == 26 * 8
    assert not any(cell.is_today for cell in cells)
