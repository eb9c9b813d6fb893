from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from core.domain.enums import ConflictSeverity, ConflictType


@dataclass(frozen=True)
class DependencyConflict:
    id: str
    type: ConflictType
    severity: ConflictSeverity
    affected_task_ids: list[str] = field(default_factory=list)
    message: str = ""
    suggestion: Optional[str] = None

    def involves(self, task_id: str) -> bool:
        return task_id in self.affected_task_ids


__all__ = ["DependencyConflict"]
