from .engine import CriticalPathAnalyzer, calculate_critical_path
from .graph import ScheduleGraph
from .models import CPMTaskInfo, CriticalPathResult, DependencyDiagnostic, ScheduleStats
from .workload import build_owner_workloads
from .workload_models import OwnerWorkload, WorkloadReport

__all__ = [
    "CriticalPathAnalyzer",
    "calculate_critical_path",
    "ScheduleGraph",
    "CPMTaskInfo",
    "CriticalPathResult",
    "DependencyDiagnostic",
    "ScheduleStats",
    "build_owner_workloads",
    "OwnerWorkload",
    "WorkloadReport",
]
