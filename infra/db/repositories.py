# infra/db/repositories.py
from infra.db.baseline.repository import SqlAlchemyBaselineRepository
from infra.db.milestone.repository import SqlAlchemyMilestoneRepository
from infra.db.task.repository import (
    SqlAlchemyDependencyRepository,
    SqlAlchemySegmentRepository,
    SqlAlchemyTaskRepository,
)

__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
    "SqlAlchemySegmentRepository",
    "SqlAlchemyMilestoneRepository",
    "SqlAlchemyBaselineRepository",
]
