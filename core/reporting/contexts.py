from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from core.models import DependencyConflict
from core.services.scheduling.models import CriticalPathAnalysis


@dataclass
class ScheduleReportContext:
    analysis: CriticalPathAnalysis
    conflicts: List[DependencyConflict] = field(default_factory=list)
    as_of: datetime = field(default_factory=datetime.now)
