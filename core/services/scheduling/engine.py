# core/services/scheduling/engine.py
from __future__ import annotations

import logging
from typing import Iterable

from core.exceptions import BusinessRuleError
from core.models import Task, TaskDependency
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.models import CriticalPathResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import build_schedule_result, build_schedule_stats

logger = logging.getLogger(__name__)


class CriticalPathAnalyzer:
    """
    CPM pass over a ScheduleGraph:
    - Forward pass: ES/EF, never earlier than the recorded start
    - Backward pass: LS/LF from the overall project finish
    - FS, SS, FF, SF constraints on calendar days
    - Tasks without any edge keep their recorded dates as both bounds

    Pure function of its input: tasks are read, never updated.
    """

    def analyze(self, graph: ScheduleGraph) -> CriticalPathResult:
        tasks = graph.ordered_tasks()
        if not tasks:
            return CriticalPathResult()

        try:
            topo_order = graph.topological_order()
        except BusinessRuleError as exc:
            # Stale external data can briefly contain a loop; report stats only.
            logger.warning("Critical path skipped: %s", exc)
            return CriticalPathResult(stats=build_schedule_stats(tasks))

        es, ef, project_finish = run_forward_pass(graph, topo_order)
        ls, lf = run_backward_pass(graph, topo_order, es, ef, project_finish)
        infos = build_schedule_result(graph, es, ef, ls, lf)

        critical_ids = frozenset(task_id for task_id, info in infos.items() if info.is_critical)
        return CriticalPathResult(
            infos=infos,
            critical_ids=critical_ids,
            stats=build_schedule_stats(tasks, critical_count=len(critical_ids)),
            project_start=min(es.values()),
            project_finish=max(info.earliest_finish for info in infos.values()),
        )

    def analyze_tasks(
        self,
        tasks: Iterable[Task],
        dependencies: Iterable[TaskDependency],
    ) -> CriticalPathResult:
        return self.analyze(ScheduleGraph(tasks=tasks, dependencies=dependencies))


def calculate_critical_path(
    tasks: Iterable[Task],
    dependencies: Iterable[TaskDependency],
) -> frozenset[str]:
    return CriticalPathAnalyzer().analyze_tasks(tasks, dependencies).critical_ids


__all__ = ["CriticalPathAnalyzer", "calculate_critical_path"]
