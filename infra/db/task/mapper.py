from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from core.models import Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM


def _as_date(value: Optional[date]) -> Optional[date]:
    # the tables are day-granular
    if isinstance(value, datetime):
        return value.date()
    return value


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        title=task.title,
        start_date=_as_date(task.start_date),
        due_date=_as_date(task.due_date),
        completed=bool(task.completed),
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        title=obj.title,
        start_date=obj.start_date,
        due_date=obj.due_date,
        completed=bool(obj.completed),
    )


def dependency_to_orm(dependency: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=dependency.id,
        dependent_task_id=dependency.dependent_task_id,
        depends_on_task_id=dependency.depends_on_task_id,
        dependency_type=dependency.dependency_type,
        lag_days=dependency.lag_days,
        created_at=dependency.created_at,
        created_by=dependency.created_by,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        id=obj.id,
        dependent_task_id=obj.dependent_task_id,
        depends_on_task_id=obj.depends_on_task_id,
        dependency_type=obj.dependency_type,
        lag_days=obj.lag_days,
        created_at=obj.created_at,
        created_by=obj.created_by,
    )


__all__ = [
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
