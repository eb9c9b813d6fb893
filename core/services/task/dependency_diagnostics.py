from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency
from core.services.dependency.queries import find_cycle_path, would_create_cycle
from core.services.scheduling.engine import CriticalPathAnalyzer
from core.services.scheduling.graph import build_successor_map
from core.services.scheduling.models import CriticalPathAnalysis


@dataclass
class DependencyImpactRow:
    task_id: str
    task_title: str
    before_slack: int | None
    after_slack: int | None
    before_critical: bool
    after_critical: bool
    trace_path: str


@dataclass
class DependencyDiagnostic:
    is_valid: bool
    code: str
    summary: str
    detail: str
    dependent_task_id: str
    depends_on_task_id: str
    dependency_type: DependencyType
    lag_days: int
    impact_rows: list[DependencyImpactRow]
    suggestions: list[str]


class TaskDependencyDiagnosticsMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _analyzer: CriticalPathAnalyzer

    def get_dependency_diagnostics(
        self,
        dependent_task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        include_impact: bool = True,
    ) -> DependencyDiagnostic:
        def invalid(code: str, summary: str, detail: str, suggestions: list[str] | None = None):
            return self._invalid_diagnostic(
                code=code,
                summary=summary,
                detail=detail,
                dependent_task_id=dependent_task_id,
                depends_on_task_id=depends_on_task_id,
                dependency_type=dependency_type,
                lag_days=lag_days,
                suggestions=suggestions,
            )

        if dependent_task_id == depends_on_task_id:
            return invalid(
                "DEPENDENCY_SELF",
                "A task cannot depend on itself.",
                "Select two different tasks for the waiting task and its prerequisite.",
            )

        if not self._task_repo.get(dependent_task_id):
            return invalid(
                "TASK_NOT_FOUND",
                "Dependent task not found.",
                f"Task id '{dependent_task_id}' does not exist.",
            )
        if not self._task_repo.get(depends_on_task_id):
            return invalid(
                "TASK_NOT_FOUND",
                "Prerequisite task not found.",
                f"Task id '{depends_on_task_id}' does not exist.",
            )

        deps = self._dependency_repo.list_all()
        if any(
            dep.dependent_task_id == dependent_task_id and dep.depends_on_task_id == depends_on_task_id
            for dep in deps
        ):
            return invalid(
                "DEPENDENCY_DUPLICATE",
                "This dependency already exists.",
                "The selected task already waits on this prerequisite.",
            )

        tasks = self._task_repo.list_all()
        title_by_id = {task.id: task.title for task in tasks}

        if would_create_cycle(dependent_task_id, depends_on_task_id, deps):
            cycle_ids = find_cycle_path(dependent_task_id, depends_on_task_id, deps) or [
                depends_on_task_id,
                dependent_task_id,
            ]
            cycle_text = " -> ".join(title_by_id.get(task_id, task_id) for task_id in cycle_ids)
            return invalid(
                "DEPENDENCY_CYCLE",
                "Cannot add dependency - would create a circular reference.",
                f"Cycle path: {cycle_text}",
                suggestions=[
                    "Reverse the dependency direction if the work allows it.",
                    "Split one of the tasks so the loop is broken.",
                ],
            )

        valid = DependencyDiagnostic(
            is_valid=True,
            code="DEPENDENCY_VALID",
            summary="Dependency is valid.",
            detail="Validation passed: no cycle and no duplicate.",
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            impact_rows=[],
            suggestions=[],
        )
        if not include_impact:
            return valid

        proposed = TaskDependency.create(
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )
        before = self._analyzer.calculate_critical_path(tasks, deps)
        after = self._analyzer.calculate_critical_path(tasks, [*deps, proposed])
        impact_rows = self._build_impact_rows(before, after, [*deps, proposed], depends_on_task_id)

        if not impact_rows:
            valid.summary = "Dependency is valid. The critical path does not change."
            valid.suggestions = ["You can apply this dependency with low scheduling risk."]
            return valid

        newly_critical = [row.task_title for row in impact_rows if row.after_critical and not row.before_critical]
        valid.summary = f"Dependency is valid. {len(impact_rows)} task(s) change slack."
        valid.detail = (
            f"Project duration: {before.total_duration}d -> {after.total_duration}d."
            + (f" Newly critical: {', '.join(newly_critical[:3])}." if newly_critical else "")
        )
        valid.impact_rows = impact_rows
        valid.suggestions = [
            "Review the affected chain before saving.",
            "If the slack loss is too high, consider another dependency type or a lead time.",
        ]
        return valid

    def _invalid_diagnostic(
        self,
        code: str,
        summary: str,
        detail: str,
        dependent_task_id: str,
        depends_on_task_id: str,
        dependency_type: DependencyType,
        lag_days: int,
        suggestions: list[str] | None = None,
    ) -> DependencyDiagnostic:
        return DependencyDiagnostic(
            is_valid=False,
            code=code,
            summary=summary,
            detail=detail,
            dependent_task_id=dependent_task_id,
            depends_on_task_id=depends_on_task_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            impact_rows=[],
            suggestions=suggestions or [],
        )

    def _build_impact_rows(
        self,
        before: CriticalPathAnalysis,
        after: CriticalPathAnalysis,
        deps: list[TaskDependency],
        source_id: str,
    ) -> list[DependencyImpactRow]:
        trace_map = self._trace_paths_from_source(build_successor_map(deps), source_id)

        rows: list[DependencyImpactRow] = []
        for task_id, after_node in after.nodes.items():
            before_node = before.nodes.get(task_id)
            before_slack = before_node.slack if before_node else None
            before_critical = before_node.is_critical if before_node else False
            if before_slack == after_node.slack and before_critical == after_node.is_critical:
                continue

            trace_ids = trace_map.get(task_id) or [task_id]
            trace_path = " -> ".join(
                after.nodes[tid].task_title if tid in after.nodes else tid for tid in trace_ids
            )
            rows.append(
                DependencyImpactRow(
                    task_id=task_id,
                    task_title=after_node.task_title,
                    before_slack=before_slack,
                    after_slack=after_node.slack,
                    before_critical=before_critical,
                    after_critical=after_node.is_critical,
                    trace_path=trace_path,
                )
            )

        rows.sort(key=lambda row: (-abs((row.after_slack or 0) - (row.before_slack or 0)), row.task_title.lower()))
        return rows

    @staticmethod
    def _trace_paths_from_source(graph: dict[str, list[str]], source: str) -> dict[str, list[str]]:
        paths: dict[str, list[str]] = {source: [source]}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            current_path = paths[current]
            for nxt in graph.get(current, []):
                if nxt in paths:
                    continue
                paths[nxt] = [*current_path, nxt]
                queue.append(nxt)
        return paths


__all__ = ["DependencyImpactRow", "DependencyDiagnostic", "TaskDependencyDiagnosticsMixin"]
