from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from core.models import Task


@dataclass
class OwnerWorkload:
    owner: str
    total_tasks: int = 0
    completed_tasks: int = 0
    total_days: int = 0
    overloaded_days: int = 0
    tasks: list[Task] = field(default_factory=list)
    daily_load: dict[date, int] = field(default_factory=dict)

    @property
    def peak_load(self) -> int:
        return max(self.daily_load.values(), default=0)


@dataclass
class WorkloadReport:
    owners: list[OwnerWorkload]
    unassigned: list[Task]
    threshold: int

    @property
    def has_overload(self) -> bool:
        return any(w.overloaded_days > 0 for w in self.owners)


__all__ = ["OwnerWorkload", "WorkloadReport"]
