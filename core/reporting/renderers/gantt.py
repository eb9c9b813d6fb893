from datetime import datetime
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import matplotlib.dates as mdates
from matplotlib.dates import date2num
from matplotlib import ticker

from core.services.scheduling.dates import as_datetime, sort_key
from core.services.scheduling.models import CriticalPathAnalysis

_MIN_BAR_WIDTH = 0.15  # keeps same-day tasks visible


class CriticalPathGanttRenderer:
    def render(
        self,
        analysis: CriticalPathAnalysis,
        output_path: Path,
        today: Optional[datetime] = None,
    ) -> Path:
        nodes = sorted(
            analysis.nodes.values(),
            key=lambda n: (sort_key(n.start_date), sort_key(n.end_date)),
        )
        if not nodes:
            raise ValueError("No tasks with dates available for Gantt chart")

        fig, ax = plt.subplots(figsize=(12, max(3, 0.45 * len(nodes) + 1.5)))

        for i, node in enumerate(nodes):
            start = date2num(as_datetime(node.start_date))
            width = max(date2num(as_datetime(node.end_date)) - start, _MIN_BAR_WIDTH)
            ax.barh(i, width, left=start, height=0.4,
                    color="#ff6666" if node.is_critical else "#d0d0ff",
                    edgecolor="black", linewidth=0.6)
            if not node.is_critical and node.slack > 0:
                ax.barh(i, node.slack, left=start + width, height=0.15,
                        color="#bbbbbb", edgecolor="none")

        ax.set_yticks(range(len(nodes)))
        ax.set_yticklabels([n.task_title for n in nodes], fontsize=9)
        ax.invert_yaxis()

        locator = mdates.AutoDateLocator(minticks=4, maxticks=10)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        today = today or datetime.now()
        ax.axvline(date2num(as_datetime(today)), color="red", linestyle="--", linewidth=1)

        ax.set_title(f"Critical Path ({analysis.total_duration} days)")
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
