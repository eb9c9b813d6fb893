from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from core.models import DependencyType
from core.services.scheduling import BackwardPassPolicy, CriticalPathAnalyzer
from core.services.task import TaskService
from infra.db.task import SqlAlchemyDependencyRepository, SqlAlchemyTaskRepository


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        value = datetime.fromisoformat(raw)
    if isinstance(value, datetime):
        # stored day-granular; offset timestamps are read on the UTC calendar
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError(f"Unsupported date value: {value!r}")


def _as_dependency_type(value: Any) -> DependencyType:
    if isinstance(value, DependencyType):
        return value
    return DependencyType((value or DependencyType.FINISH_TO_START.value))


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    analyzer: CriticalPathAnalyzer
    task_service: TaskService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "analyzer": self.analyzer,
            "task_service": self.task_service,
        }


def build_service_graph(
    session: Session,
    backward_pass_policy: Optional[BackwardPassPolicy] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ServiceGraph:
    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)

    analyzer = CriticalPathAnalyzer(backward_pass_policy=backward_pass_policy, clock=clock)
    task_service = TaskService(
        session,
        task_repo,
        dependency_repo,
        analyzer=analyzer,
        clock=clock,
    )
    return ServiceGraph(session=session, analyzer=analyzer, task_service=task_service)


def seed_from_records(
    services: ServiceGraph,
    tasks: list[dict[str, Any]],
    dependencies: list[dict[str, Any]],
) -> dict[str, str]:
    """
    Load plain task/edge records (``startDate``/``dueDate`` ISO strings,
    ``dependentTaskId``/``dependsOnTaskId`` references to record ids).

    Returns the record id -> stored task id map.
    """
    ts = services.task_service
    id_map: dict[str, str] = {}
    for record in tasks:
        task = ts.create_task(
            record["title"],
            start_date=_parse_date(record.get("startDate")),
            due_date=_parse_date(record.get("dueDate")),
            completed=bool(record.get("completed", False)),
        )
        id_map[str(record["id"])] = task.id

    for record in dependencies:
        ts.add_dependency(
            id_map[str(record["dependentTaskId"])],
            id_map[str(record["dependsOnTaskId"])],
            dependency_type=_as_dependency_type(record.get("type")),
            lag_days=int(record.get("lag") or 0),
        )
    return id_map


__all__ = ["ServiceGraph", "build_service_graph", "seed_from_records"]
