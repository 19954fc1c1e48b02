from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List

from core.models import Task, TaskStatus, day_span
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.models import CPMTaskInfo, ScheduleStats

_ONE_DAY = timedelta(days=1)


def build_schedule_result(
    graph: ScheduleGraph,
    es: Dict[str, date],
    ef: Dict[str, date],
    ls: Dict[str, date],
    lf: Dict[str, date],
) -> Dict[str, CPMTaskInfo]:
    result: Dict[str, CPMTaskInfo] = {}

    for task in graph.ordered_tasks():
        est = es[task.id]
        lst = ls[task.id]
        total_float = max(0, (lst - est).days)

        result[task.id] = CPMTaskInfo(
            task=task,
            earliest_start=est,
            earliest_finish=ef[task.id] - _ONE_DAY,
            latest_start=lst,
            latest_finish=lf[task.id] - _ONE_DAY,
            total_float_days=total_float,
            is_critical=total_float == 0,
        )

    return result


def build_schedule_stats(tasks: List[Task], critical_count: int = 0) -> ScheduleStats:
    if not tasks:
        return ScheduleStats()

    earliest = min(task.start_date for task in tasks)
    latest = max(max(task.start_date, task.end_date) for task in tasks)
    average = sum(task.progress for task in tasks) / len(tasks)

    return ScheduleStats(
        total_tasks=len(tasks),
        not_started_tasks=sum(1 for t in tasks if t.status == TaskStatus.NOT_STARTED),
        in_progress_tasks=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        average_progress=round(average),
        project_duration_days=day_span(earliest, latest),
        critical_task_count=critical_count,
    )
