# core/models.py
from core.domain import (
    Baseline,
    BaselineTask,
    DependencyType,
    Milestone,
    Task,
    TaskDependency,
    TaskSegment,
    TaskStatus,
    ViewMode,
    capture_baseline,
    day_span,
    generate_id,
)

__all__ = [
    "generate_id",
    "day_span",
    "TaskStatus",
    "DependencyType",
    "ViewMode",
    "Task",
    "TaskDependency",
    "TaskSegment",
    "Milestone",
    "Baseline",
    "BaselineTask",
    "capture_baseline",
]
