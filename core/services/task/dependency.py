from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency
from core.services.scheduling.models import DependencyDiagnostic

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def get_dependency_diagnostics(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    ) -> DependencyDiagnostic:
        project_id = self._project_of(predecessor_id) or self._project_of(successor_id)
        graph = self.load_graph(project_id) if project_id else self._empty_graph()
        return graph.check_dependency(predecessor_id, successor_id, DependencyType(dependency_type))

    def add_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    ) -> TaskDependency:
        dependency_type = DependencyType(dependency_type)
        diagnostic = self.get_dependency_diagnostics(predecessor_id, successor_id, dependency_type)
        if not diagnostic.is_valid:
            logger.warning(
                "Refused dependency %s -> %s: %s", predecessor_id, successor_id, diagnostic.code
            )
            if diagnostic.code == "TASK_NOT_FOUND":
                raise NotFoundError(diagnostic.message, code=diagnostic.code)
            raise BusinessRuleError(diagnostic.message, code=diagnostic.code)

        pred = self._task_repo.get(predecessor_id)
        dep = TaskDependency.create(predecessor_id, successor_id, dependency_type)
        try:
            self._dependency_repo.add(dep)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error adding dependency: {exc}")
            raise
        logger.info(
            "Added %s dependency %s -> %s", dependency_type.short_label, predecessor_id, successor_id
        )
        domain_events.dependencies_changed.emit(pred.project_id)
        return dep

    def delete_dependency(self, dependency_id: str) -> None:
        dep = self._dependency_repo.get(dependency_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        project_id = self._project_of(dep.predecessor_id) or self._project_of(dep.successor_id)
        try:
            self._dependency_repo.delete(dependency_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(f"Deleted dependency {dependency_id}")
        if project_id:
            domain_events.dependencies_changed.emit(project_id)

    def list_dependencies(self, project_id: str) -> list[TaskDependency]:
        return self._dependency_repo.list_by_project(project_id)

    def _project_of(self, task_id: str) -> str | None:
        task = self._task_repo.get(task_id)
        return task.project_id if task else None
