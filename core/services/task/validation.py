from __future__ import annotations

from datetime import date
from typing import Optional

from core.exceptions import ValidationError
from core.services.scheduling.dates import is_before


class TaskValidationMixin:
    def _validate_dates(self, start_date: Optional[date], due_date: Optional[date]) -> None:
        if start_date and due_date and is_before(due_date, start_date):
            raise ValidationError(
                f"Task due date ({due_date}) can not be before its start date ({start_date}).",
                code="TASK_INVALID_DATE",
            )

    def _validate_task_title(self, title: str) -> None:
        if not (title or "").strip():
            raise ValidationError("Task title cannot be empty.", code="TASK_TITLE_EMPTY")

    def _validate_lag(self, lag_days: int) -> None:
        if not isinstance(lag_days, int) or isinstance(lag_days, bool):
            raise ValidationError("Lag must be a whole number of days.", code="DEPENDENCY_INVALID_LAG")
