from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import DependencyType, TaskStatus
from core.domain.identifiers import generate_id


def day_span(start: date, end: date) -> int:
    """Inclusive number of calendar days covered by ``start``..``end``."""
    return (end - start).days + 1


@dataclass
class Task:
    id: str
    project_id: str
    name: str
    start_date: date
    end_date: date
    description: str = ""
    status: TaskStatus = TaskStatus.NOT_STARTED
    progress: int = 0
    owner: Optional[str] = None
    color: Optional[str] = None
    sort_order: int = 0

    @property
    def duration_days(self) -> int:
        return day_span(self.start_date, self.end_date)

    @staticmethod
    def create(
        project_id: str,
        name: str,
        start_date: date,
        end_date: date,
        description: str = "",
        **extra,
    ) -> "Task":
        return Task(
            id=generate_id(),
            project_id=project_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            description=description,
            **extra,
        )


@dataclass
class TaskDependency:
    id: str
    predecessor_id: str
    successor_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START

    @staticmethod
    def create(
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    ) -> "TaskDependency":
        return TaskDependency(
            id=generate_id(),
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            dependency_type=dependency_type,
        )


@dataclass
class TaskSegment:
    """A split piece of a task's work; a task with segments renders as disjoint bars."""

    id: str
    task_id: str
    start_date: date
    end_date: date

    @staticmethod
    def create(task_id: str, start_date: date, end_date: date) -> "TaskSegment":
        return TaskSegment(
            id=generate_id(),
            task_id=task_id,
            start_date=start_date,
            end_date=end_date,
        )


__all__ = ["Task", "TaskDependency", "TaskSegment", "day_span"]
