from __future__ import annotations

from datetime import date
from typing import Optional

from core.exceptions import ValidationError


class TaskValidationMixin:
    def _validate_dates(self, start_date: Optional[date], end_date: Optional[date]) -> None:
        if start_date is None or end_date is None:
            raise ValidationError("Task start and end dates are required.", code="TASK_INVALID_DATES")
        if end_date < start_date:
            raise ValidationError(
                f"Task end date ({end_date}) cannot be before start date ({start_date}).",
                code="TASK_INVALID_DATES",
            )

    def _validate_task_name(self, name: str) -> None:
        if not (name or "").strip():
            raise ValidationError("Task name cannot be empty.", code="TASK_NAME_EMPTY")

    def _validate_progress(self, progress: int) -> None:
        if not isinstance(progress, int) or isinstance(progress, bool):
            raise ValidationError("Progress must be a whole number.", code="TASK_INVALID_PROGRESS")
        if progress < 0 or progress > 100:
            raise ValidationError("Progress must be between 0 and 100.", code="TASK_INVALID_PROGRESS")

    def _validate_segment(self, start_date: date, end_date: date) -> None:
        if end_date < start_date:
            raise ValidationError(
                f"Segment end date ({end_date}) cannot be before start date ({start_date}).",
                code="SEGMENT_INVALID_DATES",
            )
