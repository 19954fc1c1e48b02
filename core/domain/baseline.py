from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from core.domain.identifiers import generate_id
from core.domain.task import Task


@dataclass(frozen=True)
class Baseline:
    id: str
    project_id: str
    name: str
    created_at: datetime
    description: Optional[str] = None

    @staticmethod
    def create(project_id: str, name: str, description: str = "") -> "Baseline":
        return Baseline(
            id=generate_id(),
            project_id=project_id,
            name=name.strip() or "Baseline",
            created_at=datetime.now(),
            description=description.strip() or None,
        )


@dataclass(frozen=True)
class BaselineTask:
    id: str
    baseline_id: str
    task_id: str
    name: str
    start_date: date
    end_date: date

    @staticmethod
    def snapshot(baseline_id: str, task: Task) -> "BaselineTask":
        return BaselineTask(
            id=generate_id(),
            baseline_id=baseline_id,
            task_id=task.id,
            name=task.name,
            start_date=task.start_date,
            end_date=task.end_date,
        )


def capture_baseline(
    project_id: str,
    name: str,
    tasks: Iterable[Task],
    description: str = "",
) -> tuple[Baseline, list[BaselineTask]]:
    """Freeze the current dates of ``tasks`` into a new baseline."""
    baseline = Baseline.create(project_id, name, description)
    return baseline, [BaselineTask.snapshot(baseline.id, task) for task in tasks]


__all__ = ["Baseline", "BaselineTask", "capture_baseline"]
