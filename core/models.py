"""Re-exports of the domain model types."""
from core.domain import (
    ConflictSeverity,
    ConflictType,
    DependencyConflict,
    DependencyType,
    Task,
    TaskDependency,
    generate_id,
)

__all__ = [
    "generate_id",
    "DependencyType",
    "ConflictType",
    "ConflictSeverity",
    "Task",
    "TaskDependency",
    "DependencyConflict",
]
