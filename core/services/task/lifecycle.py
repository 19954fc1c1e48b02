from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import DependencyRepository, SegmentRepository, TaskRepository
from core.models import Task, TaskStatus

logger = logging.getLogger(__name__)

# fields a partial update may touch
_UPDATABLE_FIELDS = (
    "name",
    "description",
    "start_date",
    "end_date",
    "status",
    "progress",
    "owner",
    "color",
    "sort_order",
)


class TaskLifecycleMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _segment_repo: SegmentRepository

    def create_task(
        self,
        project_id: str,
        name: str,
        start_date: date,
        end_date: date,
        description: str = "",
        status: TaskStatus = TaskStatus.NOT_STARTED,
        progress: int = 0,
        owner: Optional[str] = None,
        color: Optional[str] = None,
        sort_order: Optional[int] = None,
    ) -> Task:
        self._validate_task_name(name)
        self._validate_dates(start_date, end_date)
        self._validate_progress(progress)

        if sort_order is None:
            sort_order = len(self._task_repo.list_by_project(project_id))

        task = Task.create(
            project_id=project_id,
            name=name.strip(),
            start_date=start_date,
            end_date=end_date,
            description=(description or "").strip(),
            status=TaskStatus(status),
            progress=progress,
            owner=(owner or "").strip() or None,
            color=color,
            sort_order=sort_order,
        )

        try:
            self._task_repo.add(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error creating task: {exc}")
            raise
        logger.info(f"Created task {task.id} - {task.name} for project {project_id}")
        domain_events.tasks_changed.emit(project_id)
        return task

    def update_task(self, task_id: str, **changes) -> Task:
        """Partial update; only the keyword arguments given are touched."""
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown task field(s): {', '.join(sorted(unknown))}",
                code="TASK_UNKNOWN_FIELD",
            )

        task = self._require_task(task_id)
        self._apply_changes(task, changes)

        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error updating task {task_id}: {exc}")
            raise
        logger.info("Updated task %s (%s)", task.id, ", ".join(sorted(changes)) or "no changes")
        domain_events.tasks_changed.emit(task.project_id)
        return task

    def update_task_dates(self, task_id: str, start_date: date, end_date: date) -> Task:
        return self.update_task(task_id, start_date=start_date, end_date=end_date)

    def delete_task(self, task_id: str) -> None:
        task = self._require_task(task_id)
        try:
            self._delete_task_rows(task_id)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error deleting task {task_id}: {exc}")
            raise
        logger.info(f"Deleted task {task_id} - {task.name}")
        domain_events.tasks_changed.emit(task.project_id)
        domain_events.dependencies_changed.emit(task.project_id)

    def bulk_update_tasks(self, task_ids: Iterable[str], **changes) -> List[Task]:
        """Apply the same partial update to several tasks in one transaction."""
        if "start_date" in changes or "end_date" in changes:
            raise ValidationError(
                "Dates cannot be bulk-updated; move tasks individually.",
                code="TASK_BULK_DATES",
            )
        tasks = [self._require_task(task_id) for task_id in task_ids]
        for task in tasks:
            self._apply_changes(task, changes)

        try:
            for task in tasks:
                self._task_repo.update(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error bulk-updating tasks: {exc}")
            raise
        logger.info("Bulk-updated %d task(s)", len(tasks))
        for project_id in {task.project_id for task in tasks}:
            domain_events.tasks_changed.emit(project_id)
        return tasks

    def bulk_delete_tasks(self, task_ids: Iterable[str]) -> int:
        tasks = [self._require_task(task_id) for task_id in task_ids]
        try:
            for task in tasks:
                self._delete_task_rows(task.id)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error bulk-deleting tasks: {exc}")
            raise
        logger.info("Bulk-deleted %d task(s)", len(tasks))
        for project_id in {task.project_id for task in tasks}:
            domain_events.tasks_changed.emit(project_id)
            domain_events.dependencies_changed.emit(project_id)
        return len(tasks)

    def reorder_tasks(self, project_id: str, ordered_ids: List[str]) -> None:
        known = {task.id for task in self._task_repo.list_by_project(project_id)}
        stray = [task_id for task_id in ordered_ids if task_id not in known]
        if stray:
            raise NotFoundError(
                f"Task id '{stray[0]}' does not belong to project {project_id}.",
                code="TASK_NOT_FOUND",
            )
        try:
            self._task_repo.set_sort_orders(list(ordered_ids))
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Reordered %d task(s) in project %s", len(ordered_ids), project_id)
        domain_events.tasks_changed.emit(project_id)

    def move_task(self, project_id: str, task_id: str, new_index: int) -> List[str]:
        ordered = self.load_graph(project_id).reordered_ids(task_id, new_index)
        self.reorder_tasks(project_id, ordered)
        return ordered

    # ---------- helpers ----------

    def _require_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def _apply_changes(self, task: Task, changes: dict) -> None:
        if "name" in changes:
            self._validate_task_name(changes["name"])
            task.name = changes["name"].strip()
        if "description" in changes:
            task.description = (changes["description"] or "").strip()
        if "status" in changes:
            task.status = TaskStatus(changes["status"])
        if "progress" in changes:
            self._validate_progress(changes["progress"])
            task.progress = changes["progress"]
        if "owner" in changes:
            task.owner = (changes["owner"] or "").strip() or None
        if "color" in changes:
            task.color = changes["color"] or None
        if "sort_order" in changes:
            task.sort_order = int(changes["sort_order"])

        start = changes.get("start_date", task.start_date)
        end = changes.get("end_date", task.end_date)
        if "start_date" in changes or "end_date" in changes:
            self._validate_dates(start, end)
            task.start_date = start
            task.end_date = end

    def _delete_task_rows(self, task_id: str) -> None:
        self._dependency_repo.delete_for_task(task_id)
        self._segment_repo.delete_for_task(task_id)
        self._task_repo.delete(task_id)
