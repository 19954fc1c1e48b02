from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.models import DependencyType, Task


@dataclass
class CPMTaskInfo:
    task: Task
    earliest_start: date
    earliest_finish: date
    latest_start: date
    latest_finish: date
    total_float_days: int
    is_critical: bool


@dataclass
class ScheduleStats:
    total_tasks: int = 0
    not_started_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
    average_progress: int = 0
    project_duration_days: int = 0
    critical_task_count: int = 0

    @property
    def completion_percent(self) -> int:
        if self.total_tasks <= 0:
            return 0
        return round(self.completed_tasks * 100 / self.total_tasks)


@dataclass
class CriticalPathResult:
    infos: dict[str, CPMTaskInfo] = field(default_factory=dict)
    critical_ids: frozenset[str] = frozenset()
    stats: ScheduleStats = field(default_factory=ScheduleStats)
    project_start: Optional[date] = None
    project_finish: Optional[date] = None

    def is_critical(self, task_id: str) -> bool:
        return task_id in self.critical_ids

    def float_of(self, task_id: str) -> Optional[int]:
        info = self.infos.get(task_id)
        return info.total_float_days if info else None


@dataclass
class DependencyDiagnostic:
    is_valid: bool
    code: str
    summary: str
    detail: str
    predecessor_id: str
    successor_id: str
    cycle_path: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    dependency_type: Optional[DependencyType] = None

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.summary}\n{self.detail}"
        return self.summary


__all__ = ["CPMTaskInfo", "ScheduleStats", "CriticalPathResult", "DependencyDiagnostic"]
