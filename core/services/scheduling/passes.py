from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List

from core.exceptions import ValidationError
from core.models import DependencyType, TaskDependency
from core.services.scheduling.graph import ScheduleGraph

# Finish instants are exclusive (the day after end_date), so a successor that
# starts the day after its predecessor ends satisfies finish_to_start exactly.


def _span(graph: ScheduleGraph, task_id: str) -> timedelta:
    return timedelta(days=graph.require_task(task_id).duration_days)


def _is_isolated(graph: ScheduleGraph, task_id: str) -> bool:
    return not graph.incoming(task_id) and not graph.outgoing(task_id)


def _forward_candidate(
    dep: TaskDependency,
    es: Dict[str, date],
    ef: Dict[str, date],
    span: timedelta,
) -> date:
    pred = dep.predecessor_id
    if dep.dependency_type == DependencyType.FINISH_TO_START:
        return ef[pred]
    if dep.dependency_type == DependencyType.START_TO_START:
        return es[pred]
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        # EF_s >= EF_p  =>  ES_s >= EF_p - duration_s
        return ef[pred] - span
    # START_TO_FINISH: EF_s >= ES_p  =>  ES_s >= ES_p - duration_s
    return es[pred] - span


def _backward_candidate(
    dep: TaskDependency,
    ls: Dict[str, date],
    lf: Dict[str, date],
    span: timedelta,
) -> date:
    succ = dep.successor_id
    if dep.dependency_type == DependencyType.FINISH_TO_START:
        return ls[succ]
    if dep.dependency_type == DependencyType.START_TO_START:
        # LS_p <= LS_s  =>  LF_p <= LS_s + duration_p
        return ls[succ] + span
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        return lf[succ]
    # START_TO_FINISH: LS_p <= LF_s  =>  LF_p <= LF_s + duration_p
    return lf[succ] + span


def run_forward_pass(
    graph: ScheduleGraph,
    topo_order: List[str],
) -> tuple[Dict[str, date], Dict[str, date], date]:
    """Earliest start / exclusive earliest finish per task, plus the project finish."""
    es: Dict[str, date] = {}
    ef: Dict[str, date] = {}

    for task_id in topo_order:
        task = graph.require_task(task_id)
        span = _span(graph, task_id)
        candidates = [task.start_date]
        for dep in graph.incoming(task_id):
            candidates.append(_forward_candidate(dep, es, ef, span))
        es[task_id] = max(candidates)
        ef[task_id] = es[task_id] + span

    if not ef:
        raise ValidationError("No tasks to analyze.", code="SCHEDULE_EMPTY")
    return es, ef, max(ef.values())


def run_backward_pass(
    graph: ScheduleGraph,
    topo_order: List[str],
    es: Dict[str, date],
    ef: Dict[str, date],
    project_finish: date,
) -> tuple[Dict[str, date], Dict[str, date]]:
    """Latest start / exclusive latest finish per task, walking back from the project finish."""
    ls: Dict[str, date] = {}
    lf: Dict[str, date] = {}

    for task_id in reversed(topo_order):
        if _is_isolated(graph, task_id):
            ls[task_id] = es[task_id]
            lf[task_id] = ef[task_id]
            continue

        span = _span(graph, task_id)
        candidates = [project_finish]
        for dep in graph.outgoing(task_id):
            candidates.append(_backward_candidate(dep, ls, lf, span))
        lf[task_id] = min(candidates)
        ls[task_id] = lf[task_id] - span

    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
