from __future__ import annotations

import heapq
import logging
from collections import deque
from dataclasses import replace
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from core.exceptions import BusinessRuleError, NotFoundError
from core.models import DependencyType, Milestone, Task, TaskDependency, TaskSegment
from core.services.scheduling.models import DependencyDiagnostic

logger = logging.getLogger(__name__)


class ScheduleGraph:
    """
    In-memory schedule: tasks kept in an arena ordered by sort_order, with
    dependency edges stored as index-based adjacency lists.

    Dependencies whose endpoints do not resolve are kept as records but never
    enter the adjacency lists, so they constrain nothing.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        dependencies: Iterable[TaskDependency] = (),
        milestones: Iterable[Milestone] = (),
        segments: Iterable[TaskSegment] = (),
    ):
        ordered = sorted(enumerate(tasks), key=lambda pair: (pair[1].sort_order, pair[0]))
        self._tasks: List[Task] = [task for _, task in ordered]
        self._index: Dict[str, int] = {task.id: i for i, task in enumerate(self._tasks)}
        self._outgoing: List[List[TaskDependency]] = [[] for _ in self._tasks]
        self._incoming: List[List[TaskDependency]] = [[] for _ in self._tasks]
        self._dependencies: List[TaskDependency] = []
        for dep in dependencies:
            self._link(dep)

        self._milestones: List[Milestone] = sorted(milestones, key=lambda m: m.date)
        self._segments: Dict[str, List[TaskSegment]] = {}
        for seg in segments:
            self._segments.setdefault(seg.task_id, []).append(seg)
        for segs in self._segments.values():
            segs.sort(key=lambda s: (s.start_date, s.end_date))

    # ---------- lookup ----------

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._index

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        idx = self._index.get(task_id)
        return self._tasks[idx] if idx is not None else None

    def require_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task id '{task_id}' does not exist.", code="TASK_NOT_FOUND")
        return task

    def ordered_tasks(self) -> List[Task]:
        return list(self._tasks)

    def row_index(self, task_id: str) -> Optional[int]:
        return self._index.get(task_id)

    @property
    def dependencies(self) -> List[TaskDependency]:
        return list(self._dependencies)

    @property
    def milestones(self) -> List[Milestone]:
        return list(self._milestones)

    def segments_for(self, task_id: str) -> List[TaskSegment]:
        return list(self._segments.get(task_id, []))

    def all_segments(self) -> List[TaskSegment]:
        return [seg for segs in self._segments.values() for seg in segs]

    def is_resolved(self, dep: TaskDependency) -> bool:
        return dep.predecessor_id in self._index and dep.successor_id in self._index

    def outgoing(self, task_id: str) -> List[TaskDependency]:
        idx = self._index.get(task_id)
        return list(self._outgoing[idx]) if idx is not None else []

    def incoming(self, task_id: str) -> List[TaskDependency]:
        idx = self._index.get(task_id)
        return list(self._incoming[idx]) if idx is not None else []

    def successors_of(self, task_id: str) -> List[str]:
        return [dep.successor_id for dep in self.outgoing(task_id)]

    def predecessors_of(self, task_id: str) -> List[str]:
        return [dep.predecessor_id for dep in self.incoming(task_id)]

    # ---------- edge insertion ----------

    def find_path(self, start_id: str, target_id: str) -> Optional[List[str]]:
        """Breadth-first search along existing edges; returns the id path or None."""
        start = self._index.get(start_id)
        target = self._index.get(target_id)
        if start is None or target is None:
            return None

        queue = deque([(start, [start])])
        visited: set[int] = set()
        while queue:
            node, path = queue.popleft()
            if node == target:
                return [self._tasks[i].id for i in path]
            if node in visited:
                continue
            visited.add(node)
            for dep in self._outgoing[node]:
                nxt = self._index[dep.successor_id]
                if nxt not in visited:
                    queue.append((nxt, [*path, nxt]))
        return None

    def check_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType | None = None,
    ) -> DependencyDiagnostic:
        if predecessor_id == successor_id:
            return self._invalid(
                code="DEPENDENCY_SELF",
                summary="A task cannot depend on itself.",
                detail="Select two different tasks for predecessor and successor.",
                predecessor_id=predecessor_id,
                successor_id=successor_id,
                dependency_type=dependency_type,
            )
        for role, task_id in (("Predecessor", predecessor_id), ("Successor", successor_id)):
            if task_id not in self._index:
                return self._invalid(
                    code="TASK_NOT_FOUND",
                    summary=f"{role} task not found.",
                    detail=f"Task id '{task_id}' does not exist.",
                    predecessor_id=predecessor_id,
                    successor_id=successor_id,
                    dependency_type=dependency_type,
                )

        if any(dep.successor_id == successor_id for dep in self.outgoing(predecessor_id)):
            return self._invalid(
                code="DEPENDENCY_DUPLICATE",
                summary="Dependency already exists.",
                detail="The selected predecessor->successor relationship already exists.",
                predecessor_id=predecessor_id,
                successor_id=successor_id,
                dependency_type=dependency_type,
            )

        path = self.find_path(successor_id, predecessor_id)
        if path:
            cycle = [predecessor_id, *path]
            names = " -> ".join(self._tasks[self._index[task_id]].name for task_id in cycle)
            return self._invalid(
                code="DEPENDENCY_CYCLE",
                summary="This link would create a circular dependency.",
                detail=f"Cycle path: {names}",
                predecessor_id=predecessor_id,
                successor_id=successor_id,
                dependency_type=dependency_type,
                cycle_path=cycle,
                suggestions=[
                    "Reverse the dependency direction if the work flow allows it.",
                    "Insert an intermediate task or milestone to break the loop.",
                ],
            )

        return DependencyDiagnostic(
            is_valid=True,
            code="DEPENDENCY_VALID",
            summary="Dependency is valid.",
            detail="No cycle, no duplicate, both tasks exist.",
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            dependency_type=dependency_type,
        )

    def add_dependency(self, dep: TaskDependency) -> TaskDependency:
        diagnostic = self.check_dependency(dep.predecessor_id, dep.successor_id, dep.dependency_type)
        if not diagnostic.is_valid:
            if diagnostic.code == "TASK_NOT_FOUND":
                raise NotFoundError(diagnostic.message, code=diagnostic.code)
            raise BusinessRuleError(diagnostic.message, code=diagnostic.code)
        self._link(dep)
        return dep

    def remove_dependency(self, dependency_id: str) -> Optional[TaskDependency]:
        for pos, dep in enumerate(self._dependencies):
            if dep.id != dependency_id:
                continue
            del self._dependencies[pos]
            if self.is_resolved(dep):
                self._outgoing[self._index[dep.predecessor_id]].remove(dep)
                self._incoming[self._index[dep.successor_id]].remove(dep)
            return dep
        return None

    def _link(self, dep: TaskDependency) -> None:
        self._dependencies.append(dep)
        if not self.is_resolved(dep):
            logger.debug(
                "Dependency %s references an unknown task; treated as non-constraining.", dep.id
            )
            return
        self._outgoing[self._index[dep.predecessor_id]].append(dep)
        self._incoming[self._index[dep.successor_id]].append(dep)

    @staticmethod
    def _invalid(
        *,
        code: str,
        summary: str,
        detail: str,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType | None,
        cycle_path: list[str] | None = None,
        suggestions: list[str] | None = None,
    ) -> DependencyDiagnostic:
        return DependencyDiagnostic(
            is_valid=False,
            code=code,
            summary=summary,
            detail=detail,
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            cycle_path=list(cycle_path or []),
            suggestions=list(suggestions or []),
            dependency_type=dependency_type,
        )

    # ---------- ordering ----------

    def topological_order(self) -> List[str]:
        """Kahn's algorithm; ties are released in display order."""
        indegree = [len(edges) for edges in self._incoming]
        heap = [i for i, degree in enumerate(indegree) if degree == 0]
        heapq.heapify(heap)

        order: List[str] = []
        while heap:
            idx = heapq.heappop(heap)
            order.append(self._tasks[idx].id)
            for dep in self._outgoing[idx]:
                succ = self._index[dep.successor_id]
                indegree[succ] -= 1
                if indegree[succ] == 0:
                    heapq.heappush(heap, succ)

        if len(order) != len(self._tasks):
            raise BusinessRuleError(
                "Cannot analyze schedule: circular dependency detected.",
                code="SCHEDULE_CYCLE",
            )
        return order

    def reordered_ids(self, task_id: str, new_index: int) -> List[str]:
        """Ordered ids after moving ``task_id`` to ``new_index`` (clamped)."""
        ids = [task.id for task in self._tasks]
        if task_id not in self._index:
            raise NotFoundError(f"Task id '{task_id}' does not exist.", code="TASK_NOT_FOUND")
        ids.remove(task_id)
        target = max(0, min(new_index, len(ids)))
        ids.insert(target, task_id)
        return ids

    # ---------- derived graphs ----------

    def filtered(self, predicate: Callable[[Task], bool]) -> "ScheduleGraph":
        """Read-only view over the tasks matching ``predicate``."""
        visible = [task for task in self._tasks if predicate(task)]
        visible_ids = {task.id for task in visible}
        return ScheduleGraph(
            tasks=visible,
            dependencies=self._dependencies,
            milestones=self._milestones,
            segments=[seg for seg in self.all_segments() if seg.task_id in visible_ids],
        )

    def with_task_dates(self, task_id: str, start_date: date, end_date: date) -> "ScheduleGraph":
        """Copy of the graph with one task's dates replaced; the original is untouched."""
        self.require_task(task_id)
        tasks = [
            replace(task, start_date=start_date, end_date=end_date) if task.id == task_id else task
            for task in self._tasks
        ]
        return ScheduleGraph(
            tasks=tasks,
            dependencies=self._dependencies,
            milestones=self._milestones,
            segments=self.all_segments(),
        )


__all__ = ["ScheduleGraph"]
