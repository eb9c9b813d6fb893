from .conflicts import (
    conflicts_for_task,
    detect_circular_dependencies,
    detect_date_mismatches,
    get_all_dependency_conflicts,
)
from .queries import (
    available_prerequisites,
    dependency_type_description,
    dependency_type_label,
    find_cycle_path,
    get_blocked_tasks,
    get_blocking_tasks,
    would_create_cycle,
)

__all__ = [
    "detect_circular_dependencies",
    "detect_date_mismatches",
    "get_all_dependency_conflicts",
    "conflicts_for_task",
    "would_create_cycle",
    "find_cycle_path",
    "get_blocking_tasks",
    "get_blocked_tasks",
    "available_prerequisites",
    "dependency_type_label",
    "dependency_type_description",
]
