from core.services.task.dependency_diagnostics import DependencyDiagnostic, DependencyImpactRow
from core.services.task.service import TaskService

__all__ = ["TaskService", "DependencyDiagnostic", "DependencyImpactRow"]
