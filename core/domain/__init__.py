from core.domain.baseline import Baseline, BaselineTask, capture_baseline
from core.domain.enums import DependencyType, TaskStatus, ViewMode
from core.domain.identifiers import generate_id
from core.domain.milestone import Milestone
from core.domain.task import Task, TaskDependency, TaskSegment, day_span

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
