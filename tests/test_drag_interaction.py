from datetime import date

import pytest

from core.models import DependencyType
from core.settings import GanttSettings
from core.services.interaction import DragInteractionController, DragState, HitZone, hit_test
from core.services.interaction.state import Anchor
from core.services.scheduling import ScheduleGraph
from core.services.timeline import TimelineScale, build_chart_layout
from tests.builders import make_dep, make_task

SETTINGS = GanttSettings()

# a: Jan 10..14 -> x 400..600 ; b: Jan 20 -> x 800..840 (day view, domain starts Dec 31)
A_BODY = 500
A_START_HANDLE = 402
A_END_HANDLE = 598
A_START_CONNECTOR = 396
A_END_CONNECTOR = 604
B_END_CONNECTOR = 844


class FakeListenerHost:
    def __init__(self):
        self.calls = []

    def attach(self, controller):
        self.calls.append("attach")

    def detach(self):
        self.calls.append("detach")


def _graph(dependencies=()):
    tasks = [
        make_task("a", date(2024, 1, 10), date(2024, 1, 14), sort_order=0),
        make_task("b", date(2024, 1, 20), date(2024, 1, 20), sort_order=1),
    ]
    return ScheduleGraph(tasks=tasks, dependencies=dependencies)


@pytest.fixture
def host():
    return FakeListenerHost()


@pytest.fixture
def controller(host):
    graph = _graph()
    scale = TimelineScale.for_schedule(graph.ordered_tasks(), settings=SETTINGS, today=date(2024, 1, 10))
    return DragInteractionController(graph, scale, settings=SETTINGS, listener_host=host)


def _record(signal):
    seen = []
    signal.connect(seen.append)
    return seen


def test_hit_zones_around_a_bar():
    assert hit_test(-8, 100, SETTINGS) == HitZone.START_CONNECTOR
    assert hit_test(-9, 100, SETTINGS) is None
    assert hit_test(0, 100, SETTINGS) == HitZone.START_HANDLE
    assert hit_test(7.5, 100, SETTINGS) == HitZone.START_HANDLE
    assert hit_test(8, 100, SETTINGS) == HitZone.BODY
    assert hit_test(92, 100, SETTINGS) == HitZone.BODY
    assert hit_test(92.5, 100, SETTINGS) == HitZone.END_HANDLE
    assert hit_test(100, 100, SETTINGS) == HitZone.END_HANDLE
    assert hit_test(100.5, 100, SETTINGS) == HitZone.END_CONNECTOR
    assert hit_test(108, 100, SETTINGS) == HitZone.END_CONNECTOR
    assert hit_test(108.5, 100, SETTINGS) is None


def test_controller_hit_test_uses_bar_position(controller):
    assert controller.hit_test("a", A_BODY) == HitZone.BODY
    assert controller.hit_test("a", A_START_HANDLE) == HitZone.START_HANDLE
    assert controller.hit_test("a", A_END_HANDLE) == HitZone.END_HANDLE
    assert controller.hit_test("a", A_END_CONNECTOR) == HitZone.END_CONNECTOR
    assert controller.hit_test("missing", A_BODY) is None


def test_move_previews_then_commits(controller, host):
    previews = _record(controller.dates_previewed)
    commits = _record(controller.dates_committed)

    assert controller.pointer_down_on_task("a", A_BODY)
    assert controller.state == DragState.MOVING_TASK
    controller.pointer_move(A_BODY + 85)

    assert controller.preview_overrides() == {"a": (date(2024, 1, 12), date(2024, 1, 16))}
    assert previews[-1].start_date == date(2024, 1, 12)
    # the graph is not touched while dragging
    assert controller.graph.get_task("a").start_date == date(2024, 1, 10)

    controller.pointer_up(A_BODY + 85)

    assert controller.state == DragState.IDLE
    assert controller.last_outcome == DragState.COMMITTED
    assert [(c.start_date, c.end_date) for c in commits] == [(date(2024, 1, 12), date(2024, 1, 16))]
    assert commits[0].original_start == date(2024, 1, 10)
    assert host.calls == ["attach", "detach"]


def test_resize_start_past_end_pins_to_one_day(controller):
    commits = _record(controller.dates_committed)

    controller.pointer_down_on_task("a", A_START_HANDLE)
    assert controller.state == DragState.RESIZING_START
    controller.pointer_up(A_START_HANDLE + 10 * 40)

    assert commits[0].start_date == date(2024, 1, 14)
    assert commits[0].end_date == date(2024, 1, 14)


def test_resize_end_past_start_pins_to_one_day(controller):
    commits = _record(controller.dates_committed)

    controller.pointer_down_on_task("a", A_END_HANDLE)
    assert controller.state == DragState.RESIZING_END
    controller.pointer_up(A_END_HANDLE - 20 * 40)

    assert (commits[0].start_date, commits[0].end_date) == (date(2024, 1, 10), date(2024, 1, 10))


def test_resize_end_extends_task(controller):
    commits = _record(controller.dates_committed)

    controller.pointer_down_on_task("a", A_END_HANDLE)
    controller.pointer_up(A_END_HANDLE + 3 * 40)

    assert (commits[0].start_date, commits[0].end_date) == (date(2024, 1, 10), date(2024, 1, 17))


def test_release_without_change_is_cancelled_silently(controller):
    commits = _record(controller.dates_committed)
    cancels = _record(controller.cancelled)

    controller.pointer_down_on_task("a", A_BODY)
    controller.pointer_move(A_BODY + 10)
    controller.pointer_up(A_BODY + 10)

    assert controller.last_outcome == DragState.CANCELLED
    assert commits == []
    assert cancels == []


def test_escape_cancels_and_restores_preview(controller, host):
    commits = _record(controller.dates_committed)
    cancels = _record(controller.cancelled)

    controller.pointer_down_on_task("a", A_BODY)
    controller.pointer_move(A_BODY + 200)
    assert controller.key_press("Escape")

    assert cancels == ["a"]
    assert controller.preview_overrides() == {}
    assert controller.last_outcome == DragState.CANCELLED
    assert host.calls == ["attach", "detach"]

    controller.pointer_up(A_BODY + 200)
    assert commits == []
    assert not controller.key_press("Escape")


def test_new_pointer_down_cancels_previous_gesture(controller):
    cancels = _record(controller.cancelled)

    controller.pointer_down_on_task("a", A_BODY)
    controller.pointer_down("b", HitZone.BODY, 820)

    assert cancels == ["a"]
    assert controller.active.task_id == "b"


def test_pointer_down_outside_any_zone_is_ignored(controller, host):
    assert not controller.pointer_down_on_task("a", 100)
    assert controller.state == DragState.IDLE
    assert host.calls == []


@pytest.mark.parametrize(
    "source_x, target_anchor, expected",
    [
        (A_END_CONNECTOR, Anchor.START, DependencyType.FINISH_TO_START),
        (A_START_CONNECTOR, Anchor.START, DependencyType.START_TO_START),
        (A_END_CONNECTOR, Anchor.END, DependencyType.FINISH_TO_FINISH),
        (A_START_CONNECTOR, Anchor.END, DependencyType.START_TO_FINISH),
    ],
)
def test_link_release_suggests_type_from_anchors(controller, source_x, target_anchor, expected):
    previews = _record(controller.link_previewed)
    requests = _record(controller.link_requested)

    assert controller.pointer_down_on_task("a", source_x, 20)
    assert controller.state == DragState.LINKING_DEPENDENCY
    controller.pointer_move(830, 60, hover_task_id="b")
    controller.pointer_up(830, 60, target_task_id="b", target_anchor=target_anchor)

    assert previews[0].origin[1] == 20
    assert previews[-1].target_task_id == "b"
    assert previews[-1].pointer == (830, 60)
    assert controller.last_outcome == DragState.COMMITTED
    assert len(requests) == 1
    assert (requests[0].predecessor_id, requests[0].successor_id) == ("a", "b")
    assert requests[0].suggested_type == expected


def test_link_origin_sits_on_the_bar_edge(controller):
    controller.pointer_down_on_task("a", A_END_CONNECTOR, 20)
    assert controller.link_preview().origin == (600.0, 20)
    controller.cancel()

    controller.pointer_down_on_task("a", A_START_CONNECTOR, 20)
    assert controller.link_preview().origin == (400.0, 20)


def test_link_released_on_empty_space_or_itself_is_cancelled(controller):
    requests = _record(controller.link_requested)
    cancels = _record(controller.cancelled)

    controller.pointer_down_on_task("a", A_END_CONNECTOR)
    controller.pointer_up(1000)
    controller.pointer_down_on_task("a", A_END_CONNECTOR)
    controller.pointer_up(A_START_CONNECTOR, target_task_id="a", target_anchor=Anchor.START)

    assert requests == []
    assert cancels == ["a", "a"]


def test_link_closing_a_cycle_is_rejected(host):
    graph = _graph([make_dep("a", "b")])
    scale = TimelineScale.for_schedule(graph.ordered_tasks(), settings=SETTINGS, today=date(2024, 1, 10))
    controller = DragInteractionController(graph, scale, settings=SETTINGS, listener_host=host)
    requests = _record(controller.link_requested)
    rejections = _record(controller.dependency_rejected)

    controller.pointer_down_on_task("b", B_END_CONNECTOR)
    controller.pointer_up(A_START_CONNECTOR, target_task_id="a", target_anchor=Anchor.START)

    assert requests == []
    assert controller.last_outcome == DragState.CANCELLED
    assert rejections[0].code == "DEPENDENCY_CYCLE"
    assert (rejections[0].predecessor_id, rejections[0].successor_id) == ("b", "a")
    assert host.calls == ["attach", "detach"]


def test_request_dependency_validates_against_graph():
    graph = _graph([make_dep("a", "b")])
    scale = TimelineScale.for_schedule(graph.ordered_tasks(), settings=SETTINGS)
    controller = DragInteractionController(graph, scale)
    requested = _record(controller.dependency_requested)
    rejections = _record(controller.dependency_rejected)

    assert not controller.request_dependency("a", "b")
    assert not controller.request_dependency("b", "a", DependencyType.START_TO_START)
    assert not controller.request_dependency("a", "a")

    assert [r.code for r in rejections] == ["DEPENDENCY_DUPLICATE", "DEPENDENCY_CYCLE", "DEPENDENCY_SELF"]
    assert rejections[1].dependency_type == DependencyType.START_TO_START
    assert requested == []


def test_request_dependency_emits_request_when_valid(controller):
    requested = _record(controller.dependency_requested)

    assert controller.request_dependency("a", "b", DependencyType.FINISH_TO_FINISH)

    assert requested[0].dependency_type == DependencyType.FINISH_TO_FINISH


def test_swapping_graph_mid_drag_cancels(controller):
    cancels = _record(controller.cancelled)

    controller.pointer_down_on_task("a", A_BODY)
    controller.set_graph(_graph())

    assert cancels == ["a"]
    assert not controller.is_active


def test_layout_follows_live_preview(controller):
    controller.pointer_down_on_task("a", A_BODY)
    controller.pointer_move(A_BODY + 40)

    layout = build_chart_layout(controller.graph, controller.scale, overrides=controller.preview_overrides())

    assert layout.bar_for("a").left == 440
