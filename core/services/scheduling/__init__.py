from .engine import CriticalPathAnalyzer, calculate_critical_path, calculate_task_schedule
from .models import (
    BackwardPassPolicy,
    CriticalPathAnalysis,
    CriticalPathNode,
    TaskSchedule,
)

__all__ = [
    "CriticalPathAnalyzer",
    "calculate_critical_path",
    "calculate_task_schedule",
    "BackwardPassPolicy",
    "CriticalPathAnalysis",
    "CriticalPathNode",
    "TaskSchedule",
]
