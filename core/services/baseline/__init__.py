from core.services.baseline.differ import NO_BASELINE, BaselineDiffer, TaskVariance
from core.services.baseline.service import BaselineService

__all__ = ["BaselineService", "BaselineDiffer", "TaskVariance", "NO_BASELINE"]
