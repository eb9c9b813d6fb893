"""Snapshot builders shared by the pure scheduling and conflict tests."""
from __future__ import annotations

from datetime import date, datetime, timedelta

from core.models import DependencyType, Task, TaskDependency

BASE_DAY = date(2024, 1, 1)
FIXED_NOW = datetime(2024, 1, 20, 9, 0, 0)


def day(offset: int) -> date:
    return BASE_DAY + timedelta(days=offset)


def make_task(task_id, start=None, due=None, *, title=None, completed=False) -> Task:
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        start_date=day(start) if start is not None else None,
        due_date=day(due) if due is not None else None,
        completed=completed,
    )


def make_dep(depends_on, dependent, dep_type=DependencyType.FINISH_TO_START, lag=0, dep_id=None) -> TaskDependency:
    return TaskDependency(
        id=dep_id or f"{depends_on}->{dependent}",
        dependent_task_id=dependent,
        depends_on_task_id=depends_on,
        dependency_type=dep_type,
        lag_days=lag,
    )
