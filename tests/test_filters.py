from datetime import date

from core.models import TaskStatus
from core.services.filtering import NO_FILTERS, GanttFilters, apply_filters, distinct_owners, filter_graph
from core.services.scheduling import ScheduleGraph
from tests.builders import make_dep, make_task


def _tasks():
    return [
        make_task("a", date(2024, 1, 1), date(2024, 1, 5), name="Design API", owner="Ana", color="#FF0000"),
        make_task(
            "b",
            date(2024, 1, 6),
            date(2024, 1, 10),
            name="Build",
            description="api server",
            owner="ben",
            status=TaskStatus.IN_PROGRESS,
        ),
        make_task("c", date(2024, 2, 1), date(2024, 2, 3), name="Launch", status=TaskStatus.COMPLETED),
    ]


def _ids(tasks):
    return [t.id for t in tasks]


def test_empty_filters_show_everything():
    assert not NO_FILTERS.is_active
    assert _ids(apply_filters(_tasks())) == ["a", "b", "c"]


def test_search_matches_name_or_description_case_insensitively():
    assert _ids(apply_filters(_tasks(), GanttFilters(search=" API "))) == ["a", "b"]


def test_status_owner_and_color_filters():
    tasks = _tasks()
    assert _ids(apply_filters(tasks, GanttFilters(statuses=frozenset({TaskStatus.COMPLETED})))) == ["c"]
    assert _ids(apply_filters(tasks, GanttFilters(owners=frozenset({"Ana"})))) == ["a"]
    assert _ids(apply_filters(tasks, GanttFilters(colors=frozenset({"#FF0000"})))) == ["a"]


def test_date_range_uses_overlap_and_needs_both_ends():
    tasks = _tasks()
    window = GanttFilters(date_from=date(2024, 1, 5), date_to=date(2024, 1, 6))
    assert _ids(apply_filters(tasks, window)) == ["a", "b"]

    half_open = GanttFilters(date_from=date(2024, 1, 20))
    assert not half_open.is_active
    assert _ids(apply_filters(tasks, half_open)) == ["a", "b", "c"]


def test_filter_graph_keeps_identity_when_inactive():
    graph = ScheduleGraph(tasks=_tasks(), dependencies=[make_dep("a", "b")])

    assert filter_graph(graph) is graph
    narrowed = filter_graph(graph, GanttFilters(search="build"))
    assert _ids(narrowed.ordered_tasks()) == ["b"]
    assert narrowed.predecessors_of("b") == []


def test_distinct_owners_sorted():
    assert distinct_owners(_tasks()) == ["Ana", "ben"]
