from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def add_dependency(
        self,
        dependent_task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        created_by: Optional[str] = None,
    ) -> TaskDependency:
        self._validate_lag(lag_days)
        dependency_type = DependencyType(dependency_type)
        diagnostic = self.get_dependency_diagnostics(
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            include_impact=False,
        )
        if not diagnostic.is_valid:
            message = diagnostic.summary
            if diagnostic.detail:
                message = f"{diagnostic.summary}\n{diagnostic.detail}"
            if diagnostic.code == "TASK_NOT_FOUND":
                raise NotFoundError(message, code=diagnostic.code)
            if diagnostic.code == "DEPENDENCY_CYCLE":
                raise BusinessRuleError(message, code=diagnostic.code)
            raise ValidationError(message, code=diagnostic.code)

        dep = TaskDependency.create(
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            created_by=created_by,
        )
        try:
            self._dependency_repo.add(dep)
            self._session.commit()
            logger.info(
                "Added dependency %s: %s waits on %s (%s, lag %d)",
                dep.id,
                dep.dependent_task_id,
                dep.depends_on_task_id,
                dep.dependency_type.value,
                dep.lag_days,
            )
        except Exception as exc:
            self._session.rollback()
            logger.error("Error adding dependency: %s", exc)
            raise
        domain_events.dependencies_changed.emit(dep.dependent_task_id)
        return dep

    def remove_dependency(self, dependency_id: str) -> None:
        dep = self._dependency_repo.get(dependency_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        try:
            self._dependency_repo.delete(dependency_id)
            self._session.commit()
            logger.info("Removed dependency %s", dependency_id)
        except Exception as exc:
            self._session.rollback()
            raise exc
        domain_events.dependencies_changed.emit(dep.dependent_task_id)

    def replace_dependency(
        self,
        dependency_id: str,
        dependency_type: Optional[DependencyType] = None,
        lag_days: Optional[int] = None,
    ) -> TaskDependency:
        """Edges are never edited in place: the old edge is dropped and a new one committed."""
        old = self._dependency_repo.get(dependency_id)
        if not old:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")

        new_lag = old.lag_days if lag_days is None else lag_days
        self._validate_lag(new_lag)
        new = TaskDependency.create(
            dependent_task_id=old.dependent_task_id,
            depends_on_task_id=old.depends_on_task_id,
            dependency_type=DependencyType(dependency_type or old.dependency_type),
            lag_days=new_lag,
            created_by=old.created_by,
        )
        try:
            self._dependency_repo.delete(old.id)
            self._dependency_repo.add(new)
            self._session.commit()
            logger.info("Replaced dependency %s with %s", old.id, new.id)
        except Exception as exc:
            self._session.rollback()
            logger.error("Error replacing dependency %s: %s", dependency_id, exc)
            raise
        domain_events.dependencies_changed.emit(new.dependent_task_id)
        return new

    def list_dependencies_for_task(self, task_id: str) -> List[TaskDependency]:
        return self._dependency_repo.list_by_task(task_id)

    def list_dependencies(self) -> List[TaskDependency]:
        return self._dependency_repo.list_all()
