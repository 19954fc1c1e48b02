from .baseline import BaselineDiffer, BaselineService
from .filtering import GanttFilters, apply_filters
from .milestone import MilestoneService
from .scheduling import CPMTaskInfo, CriticalPathAnalyzer, CriticalPathResult, ScheduleGraph
from .task import TaskService
from .timeline import TimelineScale

__all__ = [
    "TaskService",
    "MilestoneService",
    "BaselineService",
    "BaselineDiffer",
    "GanttFilters",
    "apply_filters",
    "ScheduleGraph",
    "CriticalPathAnalyzer",
    "CriticalPathResult",
    "CPMTaskInfo",
    "TimelineScale",
]
