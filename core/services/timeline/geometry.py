from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List, Mapping, Optional

from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.models import CriticalPathResult
from core.services.timeline.models import (
    BarPiece,
    ChartLayout,
    ConnectorPath,
    MilestoneMarker,
    Point,
    TaskBarGeometry,
)
from core.services.timeline.projector import TimelineScale

if TYPE_CHECKING:
    from core.services.baseline.differ import BaselineDiffer

DateOverrides = Mapping[str, tuple[date, date]]

# Which edge of each bar a connector leaves from / arrives at.
_PREDECESSOR_AT_END = {DependencyType.FINISH_TO_START, DependencyType.FINISH_TO_FINISH}
_SUCCESSOR_AT_END = {DependencyType.FINISH_TO_FINISH, DependencyType.START_TO_FINISH}


def _piece(scale: TimelineScale, start: date, end: date) -> BarPiece:
    return BarPiece(
        left=scale.position(start),
        width=scale.span_width(start, end),
        start_date=start,
        end_date=end,
    )


def row_center_y(scale: TimelineScale, row: int) -> float:
    return row * scale.settings.row_height + scale.settings.row_height / 2


def task_bar_geometry(
    graph: ScheduleGraph,
    scale: TimelineScale,
    task: Task,
    *,
    analysis: Optional[CriticalPathResult] = None,
    differ: Optional["BaselineDiffer"] = None,
    overrides: Optional[DateOverrides] = None,
) -> TaskBarGeometry:
    settings = scale.settings
    row = graph.row_index(task.id)
    if row is None:
        raise KeyError(task.id)

    start, end = (overrides or {}).get(task.id, (task.start_date, task.end_date))
    bar = _piece(scale, start, end)

    # segments follow the committed dates; a live preview draws the plain range
    pieces: tuple[BarPiece, ...] = ()
    if not overrides or task.id not in overrides:
        pieces = tuple(_piece(scale, seg.start_date, seg.end_date) for seg in graph.segments_for(task.id))

    ghost = None
    if differ is not None:
        frozen = differ.get(task.id)
        if frozen is not None:
            ghost = _piece(scale, *frozen)

    return TaskBarGeometry(
        task_id=task.id,
        row=row,
        top=row * settings.row_height + (settings.row_height - settings.bar_height) / 2,
        left=bar.left,
        width=bar.width,
        height=settings.bar_height,
        pieces=pieces,
        is_critical=bool(analysis and analysis.is_critical(task.id)),
        progress=task.progress,
        color=task.color,
        baseline=ghost,
    )


def connector_path(
    dep: TaskDependency,
    predecessor: TaskBarGeometry,
    successor: TaskBarGeometry,
    *,
    is_critical: bool = False,
) -> ConnectorPath:
    start_x = predecessor.right if dep.dependency_type in _PREDECESSOR_AT_END else predecessor.left
    end_x = successor.right if dep.dependency_type in _SUCCESSOR_AT_END else successor.left
    start_y = predecessor.center_y
    end_y = successor.center_y
    mid_x = (start_x + end_x) / 2
    points: tuple[Point, Point, Point, Point] = (
        (start_x, start_y),
        (mid_x, start_y),
        (mid_x, end_y),
        (end_x, end_y),
    )
    return ConnectorPath(
        dependency_id=dep.id,
        predecessor_id=dep.predecessor_id,
        successor_id=dep.successor_id,
        dependency_type=dep.dependency_type,
        points=points,
        is_critical=is_critical,
    )


def build_chart_layout(
    graph: ScheduleGraph,
    scale: TimelineScale,
    *,
    analysis: Optional[CriticalPathResult] = None,
    differ: Optional["BaselineDiffer"] = None,
    overrides: Optional[DateOverrides] = None,
) -> ChartLayout:
    """Everything the canvas paints, in chart-body coordinates (header excluded)."""
    bars: List[TaskBarGeometry] = [
        task_bar_geometry(graph, scale, task, analysis=analysis, differ=differ, overrides=overrides)
        for task in graph.ordered_tasks()
    ]
    by_id = {bar.task_id: bar for bar in bars}

    connectors: List[ConnectorPath] = []
    for dep in graph.dependencies:
        pred = by_id.get(dep.predecessor_id)
        succ = by_id.get(dep.successor_id)
        if pred is None or succ is None:
            continue
        connectors.append(connector_path(dep, pred, succ, is_critical=pred.is_critical and succ.is_critical))

    milestone_row = len(bars)
    markers = [
        MilestoneMarker(
            milestone_id=m.id,
            name=m.name,
            date=m.date,
            x=scale.position(m.date),
            row=milestone_row,
            color=m.color,
            description=m.description or "",
        )
        for m in graph.milestones
    ]

    rows = len(bars) + (1 if markers else 0)
    return ChartLayout(
        bars=bars,
        milestones=markers,
        connectors=connectors,
        headers=scale.header_cells(),
        today_x=scale.today_offset(),
        width=scale.total_width,
        height=rows * scale.settings.row_height,
    )


__all__ = ["task_bar_geometry", "connector_path", "build_chart_layout", "row_center_y"]
