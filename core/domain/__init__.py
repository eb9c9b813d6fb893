from core.domain.conflict import DependencyConflict
from core.domain.enums import ConflictSeverity, ConflictType, DependencyType
from core.domain.identifiers import conflict_id, generate_id
from core.domain.task import Task, TaskDependency

__all__ = [
    "generate_id",
    "conflict_id",
    "DependencyType",
    "ConflictType",
    "ConflictSeverity",
    "Task",
    "TaskDependency",
    "DependencyConflict",
]
