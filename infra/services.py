from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.settings import GanttSettings
from core.services.baseline import BaselineService
from core.services.milestone import MilestoneService
from core.services.scheduling import CriticalPathAnalyzer
from core.services.task import TaskService
from infra.db.repositories import (
    SqlAlchemyBaselineRepository,
    SqlAlchemyDependencyRepository,
    SqlAlchemyMilestoneRepository,
    SqlAlchemySegmentRepository,
    SqlAlchemyTaskRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    settings: GanttSettings
    task_service: TaskService
    milestone_service: MilestoneService
    baseline_service: BaselineService
    critical_path_analyzer: CriticalPathAnalyzer

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "settings": self.settings,
            "task_service": self.task_service,
            "milestone_service": self.milestone_service,
            "baseline_service": self.baseline_service,
            "critical_path_analyzer": self.critical_path_analyzer,
        }


def build_service_graph(session: Session, settings: Optional[GanttSettings] = None) -> ServiceGraph:
    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)
    segment_repo = SqlAlchemySegmentRepository(session)
    milestone_repo = SqlAlchemyMilestoneRepository(session)
    baseline_repo = SqlAlchemyBaselineRepository(session)

    task_service = TaskService(
        session,
        task_repo,
        dependency_repo,
        segment_repo,
        milestone_repo,
    )
    milestone_service = MilestoneService(session, milestone_repo)
    baseline_service = BaselineService(
        session=session,
        task_repo=task_repo,
        baseline_repo=baseline_repo,
    )

    return ServiceGraph(
        session=session,
        settings=settings or GanttSettings.from_env(),
        task_service=task_service,
        milestone_service=milestone_service,
        baseline_service=baseline_service,
        critical_path_analyzer=CriticalPathAnalyzer(),
    )


def build_services(session: Session, settings: Optional[GanttSettings] = None) -> dict[str, Any]:
    return build_service_graph(session, settings).as_dict()
