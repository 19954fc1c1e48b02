from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.interfaces import (
    DependencyRepository,
    MilestoneRepository,
    SegmentRepository,
    TaskRepository,
)
from core.models import Task, TaskSegment
from core.services.scheduling.graph import ScheduleGraph

logger = logging.getLogger(__name__)


class TaskQueryMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _segment_repo: SegmentRepository
    _milestone_repo: MilestoneRepository | None

    def get_task(self, task_id: str) -> Task | None:
        return self._task_repo.get(task_id)

    def list_tasks(self, project_id: str) -> List[Task]:
        return self._task_repo.list_by_project(project_id)

    def load_graph(self, project_id: str) -> ScheduleGraph:
        """Fresh snapshot of a project's schedule for analysis and rendering."""
        milestones = self._milestone_repo.list_by_project(project_id) if self._milestone_repo else []
        return ScheduleGraph(
            tasks=self._task_repo.list_by_project(project_id),
            dependencies=self._dependency_repo.list_by_project(project_id),
            milestones=milestones,
            segments=self._segment_repo.list_by_project(project_id),
        )

    def _empty_graph(self) -> ScheduleGraph:
        return ScheduleGraph()

    # ---------- segments ----------

    def list_segments(self, task_id: str) -> List[TaskSegment]:
        return self._segment_repo.list_for_task(task_id)

    def replace_segments(self, task_id: str, ranges: Iterable[tuple[date, date]]) -> List[TaskSegment]:
        """Swap a task's split pieces for ``ranges``; an empty iterable un-splits it."""
        task = self._require_task(task_id)
        segments: List[TaskSegment] = []
        for start, end in ranges:
            self._validate_segment(start, end)
            segments.append(TaskSegment.create(task_id, start, end))
        segments.sort(key=lambda seg: seg.start_date)

        try:
            self._segment_repo.replace_for_task(task_id, segments)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error replacing segments for task {task_id}: {exc}")
            raise
        logger.info("Task %s now has %d segment(s)", task_id, len(segments))
        domain_events.tasks_changed.emit(task.project_id)
        return segments

    def delete_segments(self, task_id: str) -> None:
        self.replace_segments(task_id, [])
