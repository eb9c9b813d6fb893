from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional


class BackwardPassPolicy(str, Enum):
    MINIMUM = "minimum"
    FIRST_VISIT = "first-visit"


@dataclass
class CriticalPathNode:
    task_id: str
    task_title: str
    start_date: date
    end_date: date
    duration: int
    slack: int = 0
    is_critical: bool = False
    predecessors: List[str] = field(default_factory=list)
    successors: List[str] = field(default_factory=list)
    earliest_finish: int = 0
    latest_finish: int = 0


@dataclass
class CriticalPathAnalysis:
    critical_path: List[CriticalPathNode]
    total_duration: int
    project_start_date: date
    project_end_date: date
    critical_tasks: List[str]
    generated_at: datetime
    nodes: Dict[str, CriticalPathNode] = field(default_factory=dict)
    has_cycle: bool = False


@dataclass
class TaskSchedule:
    task_id: str
    earliest_start: date
    latest_start: date
    earliest_finish: date
    latest_finish: date
    total_slack: int
    free_slack: int  # not distinguished from total slack
    is_critical: bool


__all__ = [
    "BackwardPassPolicy",
    "CriticalPathNode",
    "CriticalPathAnalysis",
    "TaskSchedule",
]
