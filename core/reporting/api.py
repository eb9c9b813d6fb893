"""Reporting API wrappers around renderer classes."""

from pathlib import Path

from core.reporting.contexts import ScheduleReportContext
from core.reporting.renderers.excel import ScheduleWorkbookRenderer
from core.reporting.renderers.gantt import CriticalPathGanttRenderer
from core.services.task import TaskService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def generate_critical_path_png(task_service: TaskService, output_path: str | Path) -> Path:
    analysis = task_service.get_critical_path()
    renderer = CriticalPathGanttRenderer()
    return renderer.render(analysis, _ensure_parent(Path(output_path)))


def generate_schedule_workbook(task_service: TaskService, output_path: str | Path) -> Path:
    ctx = ScheduleReportContext(
        analysis=task_service.get_critical_path(),
        conflicts=task_service.get_conflicts(),
    )
    return ScheduleWorkbookRenderer().render(ctx, _ensure_parent(Path(output_path)))
