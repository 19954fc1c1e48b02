from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from core.models import DependencyType
from core.services.timeline.models import Point


class DragState(str, Enum):
    IDLE = "idle"
    MOVING_TASK = "moving_task"
    RESIZING_START = "resizing_start"
    RESIZING_END = "resizing_end"
    LINKING_DEPENDENCY = "linking_dependency"
    COMMITTED = "committed"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        return self in _ACTIVE_STATES

    @property
    def is_date_drag(self) -> bool:
        return self in (DragState.MOVING_TASK, DragState.RESIZING_START, DragState.RESIZING_END)


_ACTIVE_STATES = frozenset(
    {
        DragState.MOVING_TASK,
        DragState.RESIZING_START,
        DragState.RESIZING_END,
        DragState.LINKING_DEPENDENCY,
    }
)


class HitZone(str, Enum):
    START_CONNECTOR = "start_connector"
    START_HANDLE = "start_handle"
    BODY = "body"
    END_HANDLE = "end_handle"
    END_CONNECTOR = "end_connector"

    @property
    def drag_state(self) -> DragState:
        return _ZONE_STATES[self]

    @property
    def anchor(self) -> Optional["Anchor"]:
        if self == HitZone.START_CONNECTOR:
            return Anchor.START
        if self == HitZone.END_CONNECTOR:
            return Anchor.END
        return None


class Anchor(str, Enum):
    START = "start"
    END = "end"


_ZONE_STATES = {
    HitZone.START_CONNECTOR: DragState.LINKING_DEPENDENCY,
    HitZone.START_HANDLE: DragState.RESIZING_START,
    HitZone.BODY: DragState.MOVING_TASK,
    HitZone.END_HANDLE: DragState.RESIZING_END,
    HitZone.END_CONNECTOR: DragState.LINKING_DEPENDENCY,
}

_SUGGESTED_TYPES = {
    (Anchor.END, Anchor.START): DependencyType.FINISH_TO_START,
    (Anchor.START, Anchor.START): DependencyType.START_TO_START,
    (Anchor.END, Anchor.END): DependencyType.FINISH_TO_FINISH,
    (Anchor.START, Anchor.END): DependencyType.START_TO_FINISH,
}


def suggest_dependency_type(source: Anchor, target: Anchor) -> DependencyType:
    return _SUGGESTED_TYPES[(Anchor(source), Anchor(target))]


@dataclass(frozen=True)
class TaskDatesChange:
    task_id: str
    start_date: date
    end_date: date
    original_start: date
    original_end: date

    @property
    def is_change(self) -> bool:
        return (self.start_date, self.end_date) != (self.original_start, self.original_end)


@dataclass(frozen=True)
class LinkPreview:
    source_task_id: str
    source_anchor: Anchor
    origin: Point
    pointer: Point
    target_task_id: Optional[str] = None


@dataclass(frozen=True)
class LinkRequest:
    predecessor_id: str
    successor_id: str
    suggested_type: DependencyType


@dataclass(frozen=True)
class DependencyRequest:
    predecessor_id: str
    successor_id: str
    dependency_type: DependencyType


@dataclass(frozen=True)
class DependencyRejection:
    predecessor_id: str
    successor_id: str
    dependency_type: Optional[DependencyType]
    code: str
    reason: str


@dataclass
class ActiveInteraction:
    """Transient record of one pointer gesture, discarded on commit or cancel."""

    state: DragState
    task_id: str
    original_start: date
    original_end: date
    pointer_start_x: float
    preview_start: date
    preview_end: date
    anchor: Optional[Anchor] = None
    origin: Point = (0.0, 0.0)
    pointer: Point = (0.0, 0.0)
    hover_task_id: Optional[str] = None

    def dates_change(self) -> TaskDatesChange:
        return TaskDatesChange(
            task_id=self.task_id,
            start_date=self.preview_start,
            end_date=self.preview_end,
            original_start=self.original_start,
            original_end=self.original_end,
        )


__all__ = [
    "DragState",
    "HitZone",
    "Anchor",
    "suggest_dependency_type",
    "TaskDatesChange",
    "LinkPreview",
    "LinkRequest",
    "DependencyRequest",
    "DependencyRejection",
    "ActiveInteraction",
]
