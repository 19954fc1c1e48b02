from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Iterator

from core.exceptions import ValidationError
from core.models import Task, TaskStatus
from core.services.scheduling.workload_models import OwnerWorkload, WorkloadReport


def _iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def build_owner_workloads(tasks: Iterable[Task], threshold: int = 2) -> WorkloadReport:
    """
    Per-owner load: a day counts as overloaded when more than ``threshold``
    tasks of the same owner overlap it. Detection only; nothing is rescheduled.
    """
    if threshold <= 0:
        raise ValidationError(
            "threshold must be greater than zero.",
            code="WORKLOAD_INVALID_THRESHOLD",
        )

    by_owner: dict[str, OwnerWorkload] = {}
    unassigned: list[Task] = []

    for task in tasks:
        owner = (task.owner or "").strip()
        if not owner:
            unassigned.append(task)
            continue
        workload = by_owner.setdefault(owner, OwnerWorkload(owner=owner))
        workload.total_tasks += 1
        workload.tasks.append(task)
        if task.status == TaskStatus.COMPLETED:
            workload.completed_tasks += 1
        workload.total_days += task.duration_days

        load: dict[date, int] = defaultdict(int, workload.daily_load)
        for day in _iter_days(task.start_date, task.end_date):
            load[day] += 1
        workload.daily_load = dict(load)

    for workload in by_owner.values():
        workload.overloaded_days = sum(1 for count in workload.daily_load.values() if count > threshold)

    owners = sorted(by_owner.values(), key=lambda w: (-w.total_tasks, w.owner.lower()))
    return WorkloadReport(owners=owners, unassigned=unassigned, threshold=threshold)


__all__ = ["build_owner_workloads"]
