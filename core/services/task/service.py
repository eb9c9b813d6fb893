from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, TaskRepository
from core.services.scheduling.engine import CriticalPathAnalyzer
from core.services.task.dependency import TaskDependencyMixin
from core.services.task.dependency_diagnostics import TaskDependencyDiagnosticsMixin
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


class TaskService(
    TaskLifecycleMixin,
    TaskDependencyDiagnosticsMixin,
    TaskDependencyMixin,
    TaskQueryMixin,
    TaskValidationMixin,
):
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        analyzer: Optional[CriticalPathAnalyzer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._clock: Callable[[], datetime] = clock or datetime.now
        self._analyzer: CriticalPathAnalyzer = analyzer or CriticalPathAnalyzer(clock=self._clock)
