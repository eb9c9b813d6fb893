from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import DependencyType
from core.domain.identifiers import generate_id


@dataclass
class Task:
    """Scheduling snapshot of a task.

    ``start_date`` / ``due_date`` accept plain dates or datetimes; both are
    required before a task can take part in critical-path analysis.
    """

    id: str
    title: str
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completed: bool = False

    @property
    def has_dates(self) -> bool:
        return self.start_date is not None and self.due_date is not None

    @staticmethod
    def create(title: str, **extra) -> "Task":
        return Task(id=generate_id(), title=title, **extra)


@dataclass(frozen=True)
class TaskDependency:
    id: str
    dependent_task_id: str
    depends_on_task_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0  # negative for lead time
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None

    @staticmethod
    def create(
        dependent_task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        created_by: Optional[str] = None,
    ) -> "TaskDependency":
        return TaskDependency(
            id=generate_id(),
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            created_at=datetime.now(),
            created_by=created_by,
        )


__all__ = ["Task", "TaskDependency"]
