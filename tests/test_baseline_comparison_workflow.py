from datetime import date

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.services.baseline import NO_BASELINE


def test_baseline_freezes_dates_and_reports_variance(services):
    ts = services["task_service"]
    bs = services["baseline_service"]
    design = ts.create_task("p1", "Design", date(2024, 1, 1), date(2024, 1, 5))
    build = ts.create_task("p1", "Build", date(2024, 1, 6), date(2024, 1, 10))

    baseline = bs.create_baseline("p1", "  Kickoff  ", "first plan")
    ts.update_task_dates(build.id, date(2024, 1, 8), date(2024, 1, 14))

    assert baseline.name == "Kickoff"
    assert len(bs.list_baseline_tasks(baseline.id)) == 2

    differ = bs.get_differ(baseline.id)
    assert differ.is_active
    assert differ.get(build.id) == (date(2024, 1, 6), date(2024, 1, 10))

    rows = differ.variances(ts.list_tasks("p1"))
    assert [(r.task_id, r.start_shift_days, r.finish_shift_days) for r in rows] == [(build.id, 2, 4)]
    assert rows[0].change_type == "CHANGED"

    everything = differ.variances(ts.list_tasks("p1"), include_unchanged=True)
    assert {r.task_id: r.change_type for r in everything} == {design.id: "UNCHANGED", build.id: "CHANGED"}


def test_baseline_records_outlive_deleted_tasks(services):
    ts = services["task_service"]
    bs = services["baseline_service"]
    task = ts.create_task("p1", "Temp", date(2024, 1, 1), date(2024, 1, 2))
    baseline = bs.create_baseline("p1")

    ts.delete_task(task.id)

    assert bs.get_differ(baseline.id).get(task.id) == (date(2024, 1, 1), date(2024, 1, 2))


def test_baseline_requires_tasks(services):
    with pytest.raises(ValidationError) as exc:
        services["baseline_service"].create_baseline("empty")
    assert exc.value.code == "BASELINE_NO_TASKS"


def test_list_latest_and_delete(services):
    ts = services["task_service"]
    bs = services["baseline_service"]
    ts.create_task("p1", "A", date(2024, 1, 1), date(2024, 1, 2))

    assert bs.get_latest_baseline("p1") is None
    baseline = bs.create_baseline("p1", "Only")
    assert bs.get_latest_baseline("p1").id == baseline.id
    assert [b.name for b in bs.list_baselines("p1")] == ["Only"]

    bs.delete_baseline(baseline.id)

    assert bs.list_baselines("p1") == []
    assert bs.list_baseline_tasks(baseline.id) == []
    with pytest.raises(NotFoundError) as exc:
        bs.delete_baseline(baseline.id)
    assert exc.value.code == "BASELINE_NOT_FOUND"


def test_no_baseline_selected(services):
    bs = services["baseline_service"]

    assert bs.get_differ(None) is NO_BASELINE
    assert not NO_BASELINE.is_active
    assert len(NO_BASELINE) == 0
    with pytest.raises(NotFoundError):
        bs.get_differ("missing")
