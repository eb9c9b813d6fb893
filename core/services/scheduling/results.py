from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List

from core.models import Task, TaskDependency
from core.services.scheduling.dates import days_between, sort_key
from core.services.scheduling.models import CriticalPathAnalysis, CriticalPathNode


def build_nodes(
    tasks: Iterable[Task],
    deps: Iterable[TaskDependency],
) -> Dict[str, CriticalPathNode]:
    """
    One node per task that has both dates, in task order. Edges touching a
    task without dates are dropped; repeated edges are linked once.
    """
    nodes: Dict[str, CriticalPathNode] = {}
    for task in tasks:
        if task.start_date is None or task.due_date is None:
            continue
        nodes[task.id] = CriticalPathNode(
            task_id=task.id,
            task_title=task.title,
            start_date=task.start_date,
            end_date=task.due_date,
            duration=days_between(task.start_date, task.due_date),
        )

    for dep in deps:
        dependent = nodes.get(dep.dependent_task_id)
        prerequisite = nodes.get(dep.depends_on_task_id)
        if dependent is None or prerequisite is None:
            continue
        if dep.depends_on_task_id not in dependent.predecessors:
            dependent.predecessors.append(dep.depends_on_task_id)
        if dep.dependent_task_id not in prerequisite.successors:
            prerequisite.successors.append(dep.dependent_task_id)

    return nodes


def apply_slack(
    nodes: Dict[str, CriticalPathNode],
    ef: Dict[str, int],
    lf: Dict[str, int],
) -> None:
    for task_id, node in nodes.items():
        node.earliest_finish = ef[task_id]
        node.latest_finish = lf[task_id]
        node.slack = lf[task_id] - ef[task_id]
        node.is_critical = node.slack == 0


def project_window(tasks: Iterable[Task], now: datetime) -> tuple[date, date]:
    dated = [t for t in tasks if t.start_date is not None and t.due_date is not None]
    if not dated:
        return now, now
    start = min((t.start_date for t in dated), key=sort_key)
    end = max((t.due_date for t in dated), key=sort_key)
    return start, end


def build_analysis(
    tasks: List[Task],
    nodes: Dict[str, CriticalPathNode],
    total_duration: int,
    now: datetime,
    has_cycle: bool = False,
) -> CriticalPathAnalysis:
    critical_path = sorted(
        (node for node in nodes.values() if node.is_critical),
        key=lambda node: sort_key(node.start_date),
    )
    project_start, project_end = project_window(tasks, now)
    return CriticalPathAnalysis(
        critical_path=critical_path,
        total_duration=total_duration,
        project_start_date=project_start,
        project_end_date=project_end,
        critical_tasks=[node.task_id for node in critical_path],
        generated_at=now,
        nodes=nodes,
        has_cycle=has_cycle,
    )


__all__ = ["build_nodes", "apply_slack", "project_window", "build_analysis"]
