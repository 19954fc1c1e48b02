from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from core.models import Task, TaskStatus
from core.services.scheduling.graph import ScheduleGraph


@dataclass(frozen=True)
class GanttFilters:
    """Read-only view state applied before analysis and projection. Empty means 'show all'."""

    search: str = ""
    statuses: frozenset[TaskStatus] = field(default_factory=frozenset)
    owners: frozenset[str] = field(default_factory=frozenset)
    colors: frozenset[str] = field(default_factory=frozenset)
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return bool(
            self.search.strip()
            or self.statuses
            or self.owners
            or self.colors
            or (self.date_from and self.date_to)
        )

    def matches(self, task: Task) -> bool:
        query = self.search.strip().lower()
        if query and query not in task.name.lower() and query not in (task.description or "").lower():
            return False
        if self.statuses and task.status not in self.statuses:
            return False
        if self.owners and (not task.owner or task.owner not in self.owners):
            return False
        if self.colors and (not task.color or task.color not in self.colors):
            return False
        # date range only applies once both ends are set; overlap, not containment
        if self.date_from and self.date_to:
            if task.end_date < self.date_from or task.start_date > self.date_to:
                return False
        return True


NO_FILTERS = GanttFilters()


def apply_filters(tasks: Iterable[Task], filters: GanttFilters = NO_FILTERS) -> List[Task]:
    return [task for task in tasks if filters.matches(task)]


def filter_graph(graph: ScheduleGraph, filters: GanttFilters = NO_FILTERS) -> ScheduleGraph:
    if not filters.is_active:
        return graph
    return graph.filtered(filters.matches)


def distinct_owners(tasks: Iterable[Task]) -> List[str]:
    return sorted({task.owner for task in tasks if task.owner}, key=str.lower)


__all__ = ["GanttFilters", "NO_FILTERS", "apply_filters", "filter_graph", "distinct_owners"]
