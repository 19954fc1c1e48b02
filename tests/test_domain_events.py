from datetime import date

import pytest

from core.events.domain_events import domain_events
from core.events.signal import Signal


@pytest.fixture
def captured():
    seen: list[tuple[str, str]] = []
    handlers = {}
    for name in ("tasks_changed", "dependencies_changed", "milestones_changed", "baselines_changed"):
        handlers[name] = lambda project_id, name=name: seen.append((name, project_id))
        getattr(domain_events, name).connect(handlers[name])
    yield seen
    for name, handler in handlers.items():
        getattr(domain_events, name).disconnect(handler)


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.tasks_changed.connect(_handler)
    domain_events.tasks_changed.emit("p-1")
    domain_events.tasks_changed.disconnect(_handler)
    domain_events.tasks_changed.emit("p-2")

    assert seen == ["p-1"]


def test_services_announce_changes_per_project(services, captured):
    ts = services["task_service"]
    a = ts.create_task("p1", "A", date(2024, 1, 1), date(2024, 1, 2))
    b = ts.create_task("p1", "B", date(2024, 1, 3), date(2024, 1, 4))
    ts.add_dependency(a.id, b.id)
    services["milestone_service"].create_milestone("p1", "Gate", date(2024, 1, 5))
    services["baseline_service"].create_baseline("p1")
    captured.clear()

    ts.delete_task(b.id)

    assert captured == [("tasks_changed", "p1"), ("dependencies_changed", "p1")]


def test_failed_operation_emits_nothing(services, captured):
    ts = services["task_service"]
    a = ts.create_task("p1", "A", date(2024, 1, 1), date(2024, 1, 2))
    captured.clear()

    with pytest.raises(Exception):
        ts.add_dependency(a.id, a.id)

    assert captured == []


def test_signal_delivers_payload_in_connection_order():
    signal: Signal[int] = Signal("numbers")
    seen: list[str] = []

    signal.connect(lambda value: seen.append(f"first:{value}"))
    signal.connect(lambda value: seen.append(f"second:{value}"))
    signal.emit(7)

    assert seen == ["first:7", "second:7"]
    assert len(signal) == 2
    signal.disconnect_all()
    assert len(signal) == 0


def test_signal_emit_prunes_deleted_qt_like_callbacks():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _DeletedQtObjectCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise RuntimeError("Internal C++ object (PySide6.QtWidgets.QWidget) already deleted.")

    deleted = _DeletedQtObjectCallback()

    signal.connect(deleted)
    signal.connect(seen.append)

    signal.emit("p-1")
    signal.emit("p-2")

    assert deleted.calls == 1
    assert seen == ["p-1", "p-2"]


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("Signal source has been deleted"),
        ReferenceError("weakly-referenced object no longer exists"),
    ],
)
def test_signal_emit_prunes_dead_owner_callbacks(error):
    signal: Signal[str] = Signal()
    seen: list[str] = []
    calls: list[str] = []

    def _dead(payload: str) -> None:
        calls.append(payload)
        raise error

    signal.connect(_dead)
    signal.connect(seen.append)

    signal.emit("p-1")
    signal.emit("p-2")

    assert calls == ["p-1"]
    assert seen == ["p-1", "p-2"]
    assert len(signal) == 1


def test_signal_emit_keeps_other_runtime_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    with pytest.raises(RuntimeError, match="boom"):
        signal.emit("x")
