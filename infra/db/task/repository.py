from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, TaskRepository
from core.models import Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM
from infra.db.task.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    task_from_orm,
    task_to_orm,
)


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: Task) -> None:
        self.session.merge(task_to_orm(task))

    def delete(self, task_id: str) -> None:
        self.session.query(TaskORM).filter_by(id=task_id).delete()

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_all(self) -> List[Task]:
        stmt = select(TaskORM).order_by(TaskORM.start_date, TaskORM.title, TaskORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]


class SqlAlchemyDependencyRepository(DependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, dependency: TaskDependency) -> None:
        self.session.add(dependency_to_orm(dependency))

    def get(self, dependency_id: str) -> Optional[TaskDependency]:
        obj = self.session.get(TaskDependencyORM, dependency_id)
        return dependency_from_orm(obj) if obj else None

    def delete(self, dependency_id: str) -> None:
        self.session.query(TaskDependencyORM).filter_by(id=dependency_id).delete()

    def delete_for_task(self, task_id: str) -> None:
        self.session.query(TaskDependencyORM).filter(
            or_(
                TaskDependencyORM.dependent_task_id == task_id,
                TaskDependencyORM.depends_on_task_id == task_id,
            )
        ).delete(synchronize_session=False)

    def list_all(self) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).order_by(TaskDependencyORM.created_at, TaskDependencyORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_by_task(self, task_id: str) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).where(
            or_(
                TaskDependencyORM.dependent_task_id == task_id,
                TaskDependencyORM.depends_on_task_id == task_id,
            )
        ).order_by(TaskDependencyORM.created_at, TaskDependencyORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyTaskRepository", "SqlAlchemyDependencyRepository"]
