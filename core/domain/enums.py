from __future__ import annotations

from enum import Enum


class DependencyType(str, Enum):
    FINISH_TO_START = "finish-to-start"
    START_TO_START = "start-to-start"
    FINISH_TO_FINISH = "finish-to-finish"
    START_TO_FINISH = "start-to-finish"


class ConflictType(str, Enum):
    CIRCULAR = "circular"
    MISSING_DATES = "missing-dates"
    DATE_MISMATCH = "date-mismatch"
    OVERDUE_BLOCKER = "overdue-blocker"


class ConflictSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


__all__ = ["DependencyType", "ConflictType", "ConflictSeverity"]
