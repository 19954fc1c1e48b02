# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import (
    Baseline,
    BaselineTask,
    Milestone,
    Task,
    TaskDependency,
    TaskSegment,
)


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> None: ...

    @abstractmethod
    def update(self, task: Task) -> None: ...

    @abstractmethod
    def delete(self, task_id: str) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Task]: ...

    @abstractmethod
    def set_sort_orders(self, ordered_ids: List[str]) -> None: ...


class DependencyRepository(ABC):
    @abstractmethod
    def add(self, dep: TaskDependency) -> None: ...

    @abstractmethod
    def get(self, dependency_id: str) -> Optional[TaskDependency]: ...

    @abstractmethod
    def delete(self, dependency_id: str) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def delete_for_task(self, task_id: str) -> None: ...


class MilestoneRepository(ABC):
    @abstractmethod
    def add(self, milestone: Milestone) -> None: ...

    @abstractmethod
    def update(self, milestone: Milestone) -> None: ...

    @abstractmethod
    def delete(self, milestone_id: str) -> None: ...

    @abstractmethod
    def get(self, milestone_id: str) -> Optional[Milestone]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Milestone]: ...


class SegmentRepository(ABC):
    @abstractmethod
    def replace_for_task(self, task_id: str, segments: List[TaskSegment]) -> None: ...

    @abstractmethod
    def list_for_task(self, task_id: str) -> List[TaskSegment]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[TaskSegment]: ...

    @abstractmethod
    def delete_for_task(self, task_id: str) -> None: ...


class BaselineRepository(ABC):
    @abstractmethod
    def add_baseline(self, baseline: Baseline) -> None: ...

    @abstractmethod
    def get_baseline(self, baseline_id: str) -> Optional[Baseline]: ...

    @abstractmethod
    def list_for_project(self, project_id: str) -> List[Baseline]: ...

    @abstractmethod
    def delete_baseline(self, baseline_id: str) -> None: ...

    @abstractmethod
    def add_baseline_tasks(self, tasks: List[BaselineTask]) -> None: ...

    @abstractmethod
    def list_tasks(self, baseline_id: str) -> List[BaselineTask]: ...


__all__ = [
    "TaskRepository",
    "DependencyRepository",
    "MilestoneRepository",
    "SegmentRepository",
    "BaselineRepository",
]
