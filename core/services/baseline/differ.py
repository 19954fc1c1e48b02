from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from core.models import Baseline, BaselineTask, Task


@dataclass(frozen=True)
class TaskVariance:
    task_id: str
    name: str
    baseline_start: date
    baseline_end: date
    current_start: date
    current_end: date

    @property
    def start_shift_days(self) -> int:
        return (self.current_start - self.baseline_start).days

    @property
    def finish_shift_days(self) -> int:
        return (self.current_end - self.baseline_end).days

    @property
    def change_type(self) -> str:
        if self.start_shift_days == 0 and self.finish_shift_days == 0:
            return "UNCHANGED"
        return "CHANGED"


class BaselineDiffer:
    """
    Frozen lookup over one baseline's task records. Snapshot rows are copied
    at construction, so later live edits never show up in ``get``.
    """

    def __init__(self, baseline: Optional[Baseline] = None, records: Iterable[BaselineTask] = ()):
        self.baseline = baseline
        self._by_task: Dict[str, BaselineTask] = {}
        if baseline is not None:
            for record in records:
                self._by_task[record.task_id] = record

    @property
    def is_active(self) -> bool:
        return self.baseline is not None

    def __len__(self) -> int:
        return len(self._by_task)

    def get(self, task_id: str) -> Optional[tuple[date, date]]:
        record = self._by_task.get(task_id)
        if record is None:
            return None
        return record.start_date, record.end_date

    def variance(self, task: Task) -> Optional[TaskVariance]:
        record = self._by_task.get(task.id)
        if record is None:
            return None
        return TaskVariance(
            task_id=task.id,
            name=task.name,
            baseline_start=record.start_date,
            baseline_end=record.end_date,
            current_start=task.start_date,
            current_end=task.end_date,
        )

    def variances(self, tasks: Iterable[Task], include_unchanged: bool = False) -> List[TaskVariance]:
        rows: List[TaskVariance] = []
        for task in tasks:
            row = self.variance(task)
            if row is None:
                continue
            if include_unchanged or row.change_type != "UNCHANGED":
                rows.append(row)
        return rows


NO_BASELINE = BaselineDiffer()

__all__ = ["BaselineDiffer", "TaskVariance", "NO_BASELINE"]
