from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, NamedTuple, Optional, Sequence

from core.models import (
    ConflictSeverity,
    ConflictType,
    DependencyConflict,
    DependencyType,
    Task,
    TaskDependency,
)
from core.domain.identifiers import conflict_id
from core.services.scheduling.dates import is_before, shift_days
from core.services.scheduling.graph import build_successor_map, find_cycles


class _DatePair(NamedTuple):
    dependent_field: str
    prerequisite_field: str
    mismatch_text: str


# which endpoints each dependency type compares: dependent >= prerequisite + lag
_DATE_PAIRS: Dict[DependencyType, _DatePair] = {
    DependencyType.FINISH_TO_START: _DatePair("start_date", "due_date", "starts before {prereq} finishes"),
    DependencyType.START_TO_START: _DatePair("start_date", "start_date", "starts before {prereq} starts"),
    DependencyType.FINISH_TO_FINISH: _DatePair("due_date", "due_date", "finishes before {prereq} finishes"),
    DependencyType.START_TO_FINISH: _DatePair("due_date", "start_date", "finishes before {prereq} starts"),
}


def _date_pair_for(value) -> _DatePair:
    try:
        return _DATE_PAIRS[DependencyType(value)]
    except ValueError:
        return _DATE_PAIRS[DependencyType.FINISH_TO_START]


def detect_circular_dependencies(
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
) -> List[DependencyConflict]:
    graph = build_successor_map(dependencies)
    cycles = find_cycles(graph, [task.id for task in tasks])
    return [
        DependencyConflict(
            id=conflict_id(ConflictType.CIRCULAR.value, cycle),
            type=ConflictType.CIRCULAR,
            severity=ConflictSeverity.ERROR,
            affected_task_ids=list(cycle),
            message=f"Circular dependency detected: {len(cycle)} tasks in cycle",
            suggestion="Remove one of the dependencies to break the cycle",
        )
        for cycle in cycles
    ]


def _edge_conflict(
    kind: ConflictType,
    severity: ConflictSeverity,
    dep: TaskDependency,
    message: str,
    suggestion: str,
) -> DependencyConflict:
    return DependencyConflict(
        id=conflict_id(kind.value, [dep.id]),
        type=kind,
        severity=severity,
        affected_task_ids=[dep.dependent_task_id, dep.depends_on_task_id],
        message=message,
        suggestion=suggestion,
    )


def detect_date_mismatches(
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
    now: Optional[datetime] = None,
) -> List[DependencyConflict]:
    """
    Per edge: missing dates (warning, no further checks), the type's date
    ordering (warning) and an incomplete prerequisite past due (error).
    Edges naming an unknown task are skipped.
    """
    now = now or datetime.now()
    task_map = {task.id: task for task in tasks}
    conflicts: List[DependencyConflict] = []

    for dep in dependencies:
        dependent = task_map.get(dep.dependent_task_id)
        prerequisite = task_map.get(dep.depends_on_task_id)
        if dependent is None or prerequisite is None:
            continue

        pair = _date_pair_for(dep.dependency_type)
        dependent_point: Optional[date] = getattr(dependent, pair.dependent_field)
        prerequisite_point: Optional[date] = getattr(prerequisite, pair.prerequisite_field)

        if dependent_point is None or prerequisite_point is None:
            conflicts.append(
                _edge_conflict(
                    ConflictType.MISSING_DATES,
                    ConflictSeverity.WARNING,
                    dep,
                    "Tasks with dependencies must have start and due dates",
                    "Add dates to both tasks to enable dependency validation",
                )
            )
            continue

        if is_before(dependent_point, shift_days(prerequisite_point, dep.lag_days or 0)):
            text = pair.mismatch_text.format(prereq=f'"{prerequisite.title}"')
            conflicts.append(
                _edge_conflict(
                    ConflictType.DATE_MISMATCH,
                    ConflictSeverity.WARNING,
                    dep,
                    f'"{dependent.title}" {text}',
                    "Adjust start date or remove dependency",
                )
            )

        if not prerequisite.completed and prerequisite.due_date is not None:
            if is_before(prerequisite.due_date, now):
                conflicts.append(
                    _edge_conflict(
                        ConflictType.OVERDUE_BLOCKER,
                        ConflictSeverity.ERROR,
                        dep,
                        f'Blocking task "{prerequisite.title}" is overdue',
                        "Complete the blocking task or adjust dependency",
                    )
                )

    return conflicts


def get_all_dependency_conflicts(
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
    now: Optional[datetime] = None,
) -> List[DependencyConflict]:
    return [
        *detect_circular_dependencies(tasks, dependencies),
        *detect_date_mismatches(tasks, dependencies, now=now),
    ]


def conflicts_for_task(
    task_id: str,
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
    now: Optional[datetime] = None,
) -> List[DependencyConflict]:
    return [
        conflict
        for conflict in get_all_dependency_conflicts(tasks, dependencies, now=now)
        if conflict.involves(task_id)
    ]


__all__ = [
    "detect_circular_dependencies",
    "detect_date_mismatches",
    "get_all_dependency_conflicts",
    "conflicts_for_task",
]
