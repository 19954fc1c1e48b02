from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import MilestoneRepository
from core.models import Milestone

logger = logging.getLogger(__name__)


class MilestoneService:
    def __init__(self, session: Session, milestone_repo: MilestoneRepository):
        self._session: Session = session
        self._milestones: MilestoneRepository = milestone_repo

    def create_milestone(
        self,
        project_id: str,
        name: str,
        milestone_date: date,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Milestone:
        self._validate(name, milestone_date)
        milestone = Milestone.create(
            project_id,
            name.strip(),
            milestone_date,
            description=(description or "").strip() or None,
            color=color,
        )
        try:
            self._milestones.add(milestone)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error creating milestone: {exc}")
            raise
        logger.info(f"Created milestone {milestone.id} - {milestone.name} on {milestone.date}")
        domain_events.milestones_changed.emit(project_id)
        return milestone

    def update_milestone(
        self,
        milestone_id: str,
        name: Optional[str] = None,
        milestone_date: Optional[date] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Milestone:
        milestone = self._require(milestone_id)
        if name is not None:
            self._validate(name, milestone_date or milestone.date)
            milestone.name = name.strip()
        if milestone_date is not None:
            milestone.date = milestone_date
        if description is not None:
            milestone.description = description.strip() or None
        if color is not None:
            milestone.color = color or None

        try:
            self._milestones.update(milestone)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(f"Updated milestone {milestone.id}")
        domain_events.milestones_changed.emit(milestone.project_id)
        return milestone

    def delete_milestone(self, milestone_id: str) -> None:
        milestone = self._require(milestone_id)
        try:
            self._milestones.delete(milestone_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(f"Deleted milestone {milestone_id}")
        domain_events.milestones_changed.emit(milestone.project_id)

    def list_milestones(self, project_id: str) -> List[Milestone]:
        return self._milestones.list_by_project(project_id)

    def _require(self, milestone_id: str) -> Milestone:
        milestone = self._milestones.get(milestone_id)
        if not milestone:
            raise NotFoundError("Milestone not found.", code="MILESTONE_NOT_FOUND")
        return milestone

    @staticmethod
    def _validate(name: str, milestone_date: Optional[date]) -> None:
        if not (name or "").strip():
            raise ValidationError("Milestone name cannot be empty.", code="MILESTONE_NAME_EMPTY")
        if milestone_date is None:
            raise ValidationError("Milestone date is required.", code="MILESTONE_DATE_REQUIRED")
