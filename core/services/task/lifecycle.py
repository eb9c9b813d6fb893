from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import Task


logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "start_date", "due_date", "completed")


class TaskLifecycleMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def create_task(
        self,
        title: str,
        start_date: Optional[date] = None,
        due_date: Optional[date] = None,
        completed: bool = False,
    ) -> Task:
        self._validate_task_title(title)
        self._validate_dates(start_date, due_date)

        task = Task.create(
            title=title.strip(),
            start_date=start_date,
            due_date=due_date,
            completed=completed,
        )
        try:
            self._task_repo.add(task)
            self._session.commit()
            logger.info("Created task %s - %s", task.id, task.title)
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating task: %s", exc)
            raise
        domain_events.tasks_changed.emit(task.id)
        return task

    def update_task(self, task_id: str, **changes) -> Task:
        unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Unsupported task field(s): {', '.join(unknown)}",
                code="TASK_UNKNOWN_FIELD",
            )
        task = self._require_task(task_id)
        for field_name, value in changes.items():
            setattr(task, field_name, value)

        self._validate_task_title(task.title)
        self._validate_dates(task.start_date, task.due_date)
        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error updating task %s: %s", task_id, exc)
            raise
        domain_events.tasks_changed.emit(task.id)
        return task

    def set_completed(self, task_id: str, completed: bool = True) -> Task:
        return self.update_task(task_id, completed=completed)

    def delete_task(self, task_id: str) -> None:
        task = self._require_task(task_id)
        try:
            self._dependency_repo.delete_for_task(task_id)
            self._task_repo.delete(task_id)
            self._session.commit()
            logger.info("Deleted task %s - %s and its dependencies", task.id, task.title)
        except Exception as exc:
            self._session.rollback()
            raise exc

        domain_events.tasks_changed.emit(task_id)
        domain_events.dependencies_changed.emit(task_id)

    def _require_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task
