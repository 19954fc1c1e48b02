from __future__ import annotations

from core.models import Milestone
from infra.db.models import MilestoneORM


def milestone_to_orm(milestone: Milestone) -> MilestoneORM:
    return MilestoneORM(
        id=milestone.id,
        project_id=milestone.project_id,
        name=milestone.name,
        date=milestone.date,
        description=milestone.description,
        color=milestone.color,
    )


def milestone_from_orm(obj: MilestoneORM) -> Milestone:
    return Milestone(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        date=obj.date,
        description=obj.description,
        color=obj.color,
    )
