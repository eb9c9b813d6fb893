from __future__ import annotations

from typing import List, Optional, Sequence

from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling.graph import build_successor_map, find_path, has_cycle_from

_TYPE_LABELS = {
    DependencyType.FINISH_TO_START: "Finish to Start",
    DependencyType.START_TO_START: "Start to Start",
    DependencyType.FINISH_TO_FINISH: "Finish to Finish",
    DependencyType.START_TO_FINISH: "Start to Finish",
}

_TYPE_DESCRIPTIONS = {
    DependencyType.FINISH_TO_START: "Task starts when predecessor finishes",
    DependencyType.START_TO_START: "Task starts when predecessor starts",
    DependencyType.FINISH_TO_FINISH: "Task finishes when predecessor finishes",
    DependencyType.START_TO_FINISH: "Task finishes when predecessor starts",
}


def would_create_cycle(
    dependent_task_id: str,
    depends_on_task_id: str,
    existing_dependencies: Sequence[TaskDependency],
) -> bool:
    """
    True when adding ``depends_on -> dependent`` closes a cycle.

    The proposed edge goes into a private copy of the graph and only
    ``depends_on_task_id`` is walked; any new cycle has to pass through it.
    """
    graph = build_successor_map(existing_dependencies)
    graph.setdefault(depends_on_task_id, []).append(dependent_task_id)
    return has_cycle_from(graph, depends_on_task_id)


def find_cycle_path(
    dependent_task_id: str,
    depends_on_task_id: str,
    existing_dependencies: Sequence[TaskDependency],
) -> Optional[List[str]]:
    """Task ids of the loop the proposed edge would close, starting at the prerequisite."""
    graph = build_successor_map(existing_dependencies)
    path = find_path(graph, dependent_task_id, depends_on_task_id)
    if not path:
        return None
    return [depends_on_task_id, *path]


def get_blocking_tasks(task_id: str, dependencies: Sequence[TaskDependency]) -> List[str]:
    return [dep.depends_on_task_id for dep in dependencies if dep.dependent_task_id == task_id]


def get_blocked_tasks(task_id: str, dependencies: Sequence[TaskDependency]) -> List[str]:
    return [dep.dependent_task_id for dep in dependencies if dep.depends_on_task_id == task_id]


def available_prerequisites(
    task_id: str,
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
) -> List[Task]:
    return [
        task
        for task in tasks
        if task.id != task_id and not would_create_cycle(task_id, task.id, dependencies)
    ]


def dependency_type_label(dependency_type: DependencyType) -> str:
    return _TYPE_LABELS[DependencyType(dependency_type)]


def dependency_type_description(dependency_type: DependencyType) -> str:
    return _TYPE_DESCRIPTIONS[DependencyType(dependency_type)]


__all__ = [
    "would_create_cycle",
    "find_cycle_path",
    "get_blocking_tasks",
    "get_blocked_tasks",
    "available_prerequisites",
    "dependency_type_label",
    "dependency_type_description",
]
