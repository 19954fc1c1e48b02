from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.models import DependencyType

Point = tuple[float, float]


@dataclass(frozen=True)
class HeaderCell:
    label: str
    sub_label: str
    start: date
    width: float
    is_weekend: bool = False
    is_today: bool = False


@dataclass(frozen=True)
class BarPiece:
    left: float
    width: float
    start_date: date
    end_date: date

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class TaskBarGeometry:
    task_id: str
    row: int
    top: float
    left: float
    width: float
    height: float
    pieces: tuple[BarPiece, ...] = ()
    is_critical: bool = False
    progress: int = 0
    color: Optional[str] = None
    baseline: Optional[BarPiece] = None

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @property
    def is_segmented(self) -> bool:
        return bool(self.pieces)


@dataclass(frozen=True)
class MilestoneMarker:
    milestone_id: str
    name: str
    date: date
    x: float
    row: int
    color: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class ConnectorPath:
    dependency_id: str
    predecessor_id: str
    successor_id: str
    dependency_type: DependencyType
    points: tuple[Point, Point, Point, Point]
    is_critical: bool = False


@dataclass
class ChartLayout:
    bars: list[TaskBarGeometry] = field(default_factory=list)
    milestones: list[MilestoneMarker] = field(default_factory=list)
    connectors: list[ConnectorPath] = field(default_factory=list)
    headers: list[HeaderCell] = field(default_factory=list)
    today_x: Optional[float] = None
    width: float = 0
    height: float = 0

    def bar_for(self, task_id: str) -> Optional[TaskBarGeometry]:
        for bar in self.bars:
            if bar.task_id == task_id:
                return bar
        return None


__all__ = [
    "Point",
    "HeaderCell",
    "BarPiece",
    "TaskBarGeometry",
    "MilestoneMarker",
    "ConnectorPath",
    "ChartLayout",
]
