from .geometry import build_chart_layout, connector_path, row_center_y, task_bar_geometry
from .models import (
    BarPiece,
    ChartLayout,
    ConnectorPath,
    HeaderCell,
    MilestoneMarker,
    TaskBarGeometry,
)
from .projector import TimelineScale, compute_domain, start_of_week

__all__ = [
    "TimelineScale",
    "compute_domain",
    "start_of_week",
    "build_chart_layout",
    "connector_path",
    "row_center_y",
    "task_bar_geometry",
    "BarPiece",
    "ChartLayout",
    "ConnectorPath",
    "HeaderCell",
    "MilestoneMarker",
    "TaskBarGeometry",
]
