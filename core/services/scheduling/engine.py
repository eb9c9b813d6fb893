from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from core.models import Task, TaskDependency
from core.services.scheduling.dates import shift_days
from core.services.scheduling.graph import topological_order
from core.services.scheduling.models import (
    BackwardPassPolicy,
    CriticalPathAnalysis,
    TaskSchedule,
)
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.policy import default_backward_pass_policy
from core.services.scheduling.results import apply_slack, build_analysis, build_nodes

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CriticalPathAnalyzer:
    """
    CPM over task snapshots:
    - tasks without both dates are left out
    - forward pass: earliest finish (day offsets)
    - backward pass: latest finish, policy-dependent
    - slack = LF - EF, critical when slack == 0

    The dependency graph must be acyclic. A cyclic graph yields a degenerate
    analysis (``has_cycle=True``, no nodes) instead of an exception.
    """

    def __init__(
        self,
        backward_pass_policy: Optional[BackwardPassPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        self._policy: BackwardPassPolicy = backward_pass_policy or default_backward_pass_policy()
        self._clock: Clock = clock or datetime.now

    @property
    def backward_pass_policy(self) -> BackwardPassPolicy:
        return self._policy

    def calculate_critical_path(
        self,
        tasks: Sequence[Task],
        dependencies: Sequence[TaskDependency],
    ) -> CriticalPathAnalysis:
        tasks = list(tasks)
        now = self._clock()
        nodes = build_nodes(tasks, dependencies)

        node_ids = list(nodes)
        predecessors: Dict[str, List[str]] = {k: n.predecessors for k, n in nodes.items()}
        successors: Dict[str, List[str]] = {k: n.successors for k, n in nodes.items()}
        topo_order = topological_order(node_ids, predecessors, successors)

        if len(topo_order) != len(node_ids):
            logger.warning(
                "Critical path skipped: circular dependency among %d task(s).",
                len(node_ids) - len(topo_order),
            )
            return build_analysis(tasks, {}, 0, now, has_cycle=True)

        ef, total_duration = run_forward_pass(nodes, topo_order)
        lf = run_backward_pass(nodes, topo_order, ef, self._policy)
        apply_slack(nodes, ef, lf)

        return build_analysis(tasks, nodes, total_duration, now)

    def calculate_task_schedule(
        self,
        task_id: str,
        tasks: Sequence[Task],
        dependencies: Sequence[TaskDependency],
    ) -> Optional[TaskSchedule]:
        """
        Earliest dates are the task's stored dates; latest dates shift them
        by the task's slack. ``None`` for a task that was not analysed.
        """
        analysis = self.calculate_critical_path(tasks, dependencies)
        node = analysis.nodes.get(task_id)
        if node is None:
            return None

        return TaskSchedule(
            task_id=task_id,
            earliest_start=node.start_date,
            latest_start=shift_days(node.start_date, node.slack),
            earliest_finish=node.end_date,
            latest_finish=shift_days(node.end_date, node.slack),
            total_slack=node.slack,
            free_slack=node.slack,
            is_critical=node.slack == 0,
        )


def calculate_critical_path(
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
    backward_pass_policy: Optional[BackwardPassPolicy] = None,
) -> CriticalPathAnalysis:
    return CriticalPathAnalyzer(backward_pass_policy).calculate_critical_path(tasks, dependencies)


def calculate_task_schedule(
    task_id: str,
    tasks: Sequence[Task],
    dependencies: Sequence[TaskDependency],
    backward_pass_policy: Optional[BackwardPassPolicy] = None,
) -> Optional[TaskSchedule]:
    return CriticalPathAnalyzer(backward_pass_policy).calculate_task_schedule(
        task_id, tasks, dependencies
    )


__all__ = ["CriticalPathAnalyzer", "calculate_critical_path", "calculate_task_schedule"]
