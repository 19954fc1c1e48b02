from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Milestone:
    id: str
    project_id: str
    name: str
    date: date
    description: Optional[str] = None
    color: Optional[str] = None

    @staticmethod
    def create(project_id: str, name: str, date: date, **extra) -> "Milestone":
        return Milestone(id=generate_id(), project_id=project_id, name=name, date=date, **extra)


__all__ = ["Milestone"]
