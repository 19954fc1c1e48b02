from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class DependencyType(str, Enum):
    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"

    @property
    def short_label(self) -> str:
        return {
            DependencyType.FINISH_TO_START: "FS",
            DependencyType.START_TO_START: "SS",
            DependencyType.FINISH_TO_FINISH: "FF",
            DependencyType.START_TO_FINISH: "SF",
        }[self]


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


__all__ = ["TaskStatus", "DependencyType", "ViewMode"]
