from datetime import date

import pytest

from core.models import DependencyType, ViewMode
from core.settings import GanttSettings
from core.services.filtering import GanttFilters
from core.services.interaction import Anchor, DragState
from core.services.interaction.editor import ScheduleEditor

TODAY = date(2024, 1, 10)


@pytest.fixture
def schedule(services):
    ts = services["task_service"]
    alpha = ts.create_task("p1", "Alpha", date(2024, 1, 10), date(2024, 1, 14))
    beta = ts.create_task("p1", "Beta", date(2024, 1, 20), date(2024, 1, 20))
    return ts, alpha, beta


def _editor(ts, **kwargs):
    return ScheduleEditor(ts, "p1", settings=GanttSettings(), today=TODAY, **kwargs)


def test_editor_loads_graph_analysis_and_scale(schedule):
    ts, alpha, beta = schedule

    editor = _editor(ts)

    assert [t.id for t in editor.graph.ordered_tasks()] == [alpha.id, beta.id]
    assert editor.analysis.stats.total_tasks == 2
    assert editor.scale.domain_start == date(2023, 12, 31)
    layout = editor.layout()
    assert layout.bar_for(alpha.id).left == 400
    assert layout.bar_for(beta.id).left == 800


def test_committed_drag_is_persisted(schedule):
    ts, alpha, _beta = schedule
    editor = _editor(ts)

    editor.controller.pointer_down_on_task(alpha.id, 500)
    editor.controller.pointer_move(540)
    assert editor.layout().bar_for(alpha.id).left == 440
    editor.controller.pointer_up(540)

    stored = ts.get_task(alpha.id)
    assert (stored.start_date, stored.end_date) == (date(2024, 1, 11), date(2024, 1, 15))
    assert editor.graph.get_task(alpha.id).start_date == date(2024, 1, 11)


def test_cancelled_drag_leaves_storage_untouched(schedule):
    ts, alpha, _beta = schedule
    editor = _editor(ts)

    editor.controller.pointer_down_on_task(alpha.id, 500)
    editor.controller.pointer_move(700)
    editor.controller.key_press("Escape")

    assert ts.get_task(alpha.id).start_date == date(2024, 1, 10)
    assert editor.layout().bar_for(alpha.id).left == 400


def test_link_gesture_creates_dependency(schedule):
    ts, alpha, beta = schedule
    editor = _editor(ts)

    editor.controller.pointer_down_on_task(alpha.id, 604, 20)
    editor.controller.pointer_up(810, 60, target_task_id=beta.id, target_anchor=Anchor.END)

    deps = ts.list_dependencies("p1")
    assert [(d.predecessor_id, d.successor_id, d.dependency_type) for d in deps] == [
        (alpha.id, beta.id, DependencyType.FINISH_TO_FINISH)
    ]
    assert len(editor.graph.dependencies) == 1
    assert len(editor.layout().connectors) == 1


def test_type_chooser_can_override_or_drop_link(schedule):
    ts, alpha, beta = schedule
    editor = _editor(ts, type_chooser=lambda request: None)

    editor.controller.pointer_down_on_task(alpha.id, 604)
    editor.controller.pointer_up(810, target_task_id=beta.id, target_anchor=Anchor.START)
    assert ts.list_dependencies("p1") == []

    editor = _editor(ts, type_chooser=lambda request: DependencyType.START_TO_START)
    editor.controller.pointer_down_on_task(alpha.id, 604)
    editor.controller.pointer_up(810, target_task_id=beta.id, target_anchor=Anchor.START)
    assert ts.list_dependencies("p1")[0].dependency_type == DependencyType.START_TO_START


def test_service_refusal_surfaces_as_rejection(schedule):
    ts, alpha, beta = schedule
    editor = _editor(ts)
    rejections = []
    editor.controller.dependency_rejected.connect(rejections.append)

    # stored graph moves on behind the editor's back
    ts.add_dependency(beta.id, alpha.id)
    editor.controller.pointer_down_on_task(alpha.id, 604)
    editor.controller.pointer_up(810, target_task_id=beta.id, target_anchor=Anchor.START)

    assert editor.controller.last_outcome == DragState.COMMITTED
    assert [r.code for r in rejections] == ["DEPENDENCY_CYCLE"]
    assert len(ts.list_dependencies("p1")) == 1


def test_filters_restrict_visible_graph(schedule):
    ts, alpha, _beta = schedule
    editor = _editor(ts)

    editor.set_filters(GanttFilters(search="alp"))

    assert [t.id for t in editor.visible_graph.ordered_tasks()] == [alpha.id]
    assert len(editor.graph) == 2
    assert editor.analysis.stats.total_tasks == 1
    assert [bar.task_id for bar in editor.layout().bars] == [alpha.id]


def test_view_mode_and_baseline(services, schedule):
    ts, alpha, _beta = schedule
    bs = services["baseline_service"]
    baseline = bs.create_baseline("p1", "Plan")
    ts.update_task_dates(alpha.id, date(2024, 1, 12), date(2024, 1, 16))
    editor = _editor(ts)

    editor.set_view_mode(ViewMode.WEEK)
    editor.set_baseline(bs.get_differ(baseline.id))

    assert editor.view_mode == ViewMode.WEEK
    assert editor.scale.day_width == 20
    bar = editor.layout().bar_for(alpha.id)
    assert bar.left == 12 * 20
    assert bar.baseline.left == 10 * 20

    editor.set_baseline(None)
    assert editor.layout().bar_for(alpha.id).baseline is None


def test_workload_and_baseline_variances_follow_visible_tasks(services, schedule):
    ts, alpha, beta = schedule
    bs = services["baseline_service"]
    ts.bulk_update_tasks([alpha.id, beta.id], owner="Ana")
    ts.create_task("p1", "Gamma", date(2024, 1, 12), date(2024, 1, 13), owner="Ana")
    ts.create_task("p1", "Delta", date(2024, 1, 13), date(2024, 1, 13), owner="Ana")
    baseline = bs.create_baseline("p1")
    ts.update_task_dates(beta.id, date(2024, 1, 22), date(2024, 1, 22))
    editor = _editor(ts)

    report = editor.workload()
    assert [w.owner for w in report.owners] == ["Ana"]
    assert report.owners[0].overloaded_days == 1
    assert editor.baseline_variances() == []

    editor.set_baseline(bs.get_differ(baseline.id))
    assert [v.task_id for v in editor.baseline_variances()] == [beta.id]

    editor.set_filters(GanttFilters(search="alpha"))
    assert editor.workload().owners[0].total_tasks == 1
    assert editor.baseline_variances() == []
    editor.set_filters(None)
    assert editor.filters.is_active is False
