from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    DependencyRepository,
    MilestoneRepository,
    SegmentRepository,
    TaskRepository,
)
from core.services.task.dependency import TaskDependencyMixin
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


class TaskService(
    TaskLifecycleMixin,
    TaskDependencyMixin,
    TaskQueryMixin,
    TaskValidationMixin,
):
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        segment_repo: SegmentRepository,
        milestone_repo: MilestoneRepository | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._segment_repo: SegmentRepository = segment_repo
        self._milestone_repo: MilestoneRepository | None = milestone_repo
