# core/services/baseline/service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import BaselineRepository, TaskRepository
from core.models import Baseline, BaselineTask, capture_baseline
from core.services.baseline.differ import NO_BASELINE, BaselineDiffer

logger = logging.getLogger(__name__)


class BaselineService:
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        baseline_repo: BaselineRepository,
    ):
        self._session: Session = session
        self._tasks: TaskRepository = task_repo
        self._baselines: BaselineRepository = baseline_repo

    def create_baseline(
        self,
        project_id: str,
        name: str = "Baseline",
        description: str = "",
    ) -> Baseline:
        """Snapshot the current dates of every task in the project."""
        tasks = self._tasks.list_by_project(project_id)
        if not tasks:
            raise ValidationError("Cannot baseline: project has no tasks.", code="BASELINE_NO_TASKS")

        baseline, records = capture_baseline(project_id, name, tasks, description)
        try:
            self._baselines.add_baseline(baseline)
            self._baselines.add_baseline_tasks(records)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error creating baseline: {exc}")
            raise
        logger.info(
            "Created baseline %s (%s) with %d task(s) for project %s",
            baseline.id,
            baseline.name,
            len(records),
            project_id,
        )
        domain_events.baselines_changed.emit(project_id)
        return baseline

    def list_baselines(self, project_id: str) -> List[Baseline]:
        return self._baselines.list_for_project(project_id)

    def get_latest_baseline(self, project_id: str) -> Optional[Baseline]:
        baselines = self._baselines.list_for_project(project_id)
        return baselines[0] if baselines else None

    def list_baseline_tasks(self, baseline_id: str) -> List[BaselineTask]:
        return self._baselines.list_tasks(baseline_id)

    def delete_baseline(self, baseline_id: str) -> None:
        baseline = self._baselines.get_baseline(baseline_id)
        if not baseline:
            raise NotFoundError("Baseline not found.", code="BASELINE_NOT_FOUND")
        try:
            self._baselines.delete_baseline(baseline_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(f"Deleted baseline {baseline_id}")
        domain_events.baselines_changed.emit(baseline.project_id)

    def get_differ(self, baseline_id: Optional[str]) -> BaselineDiffer:
        """Lookup for ghost bars; ``None`` means no baseline is selected."""
        if not baseline_id:
            return NO_BASELINE
        baseline = self._baselines.get_baseline(baseline_id)
        if not baseline:
            raise NotFoundError("Baseline not found.", code="BASELINE_NOT_FOUND")
        return BaselineDiffer(baseline, self._baselines.list_tasks(baseline_id))
