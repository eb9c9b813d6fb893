from .scheduling import CriticalPathAnalyzer, CriticalPathAnalysis, TaskSchedule
from .task import TaskService

__all__ = [
    "CriticalPathAnalyzer",
    "CriticalPathAnalysis",
    "TaskSchedule",
    "TaskService",
]
