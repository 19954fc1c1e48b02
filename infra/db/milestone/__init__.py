from infra.db.milestone.mapper import milestone_from_orm, milestone_to_orm
from infra.db.milestone.repository import SqlAlchemyMilestoneRepository

__all__ = [
    "milestone_to_orm",
    "milestone_from_orm",
    "SqlAlchemyMilestoneRepository",
]
