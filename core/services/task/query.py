from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyConflict, Task
from core.services.dependency import conflicts as conflict_rules
from core.services.dependency import queries as graph_queries
from core.services.scheduling.engine import CriticalPathAnalyzer
from core.services.scheduling.models import CriticalPathAnalysis, TaskSchedule


class TaskQueryMixin:
    """Read-side helpers: every call works on a fresh repository snapshot."""

    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _analyzer: CriticalPathAnalyzer
    _clock: Callable[[], datetime]

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._task_repo.get(task_id)

    def list_tasks(self) -> List[Task]:
        return self._task_repo.list_all()

    def get_blocking_tasks(self, task_id: str) -> List[str]:
        return graph_queries.get_blocking_tasks(task_id, self._dependency_repo.list_all())

    def get_blocked_tasks(self, task_id: str) -> List[str]:
        return graph_queries.get_blocked_tasks(task_id, self._dependency_repo.list_all())

    def get_available_prerequisites(self, task_id: str) -> List[Task]:
        return graph_queries.available_prerequisites(
            task_id,
            self._task_repo.list_all(),
            self._dependency_repo.list_all(),
        )

    def get_conflicts(self) -> List[DependencyConflict]:
        return conflict_rules.get_all_dependency_conflicts(
            self._task_repo.list_all(),
            self._dependency_repo.list_all(),
            now=self._clock(),
        )

    def get_conflicts_for_task(self, task_id: str) -> List[DependencyConflict]:
        return conflict_rules.conflicts_for_task(
            task_id,
            self._task_repo.list_all(),
            self._dependency_repo.list_all(),
            now=self._clock(),
        )

    def get_critical_path(self) -> CriticalPathAnalysis:
        return self._analyzer.calculate_critical_path(
            self._task_repo.list_all(),
            self._dependency_repo.list_all(),
        )

    def get_task_schedule(self, task_id: str) -> Optional[TaskSchedule]:
        return self._analyzer.calculate_task_schedule(
            task_id,
            self._task_repo.list_all(),
            self._dependency_repo.list_all(),
        )
