from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.reporting.contexts import ScheduleReportContext
from core.services.scheduling.dates import sort_key


def _iso(value) -> str:
    return value.isoformat() if value is not None else ""


class ScheduleWorkbookRenderer:
    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        analysis = ctx.analysis

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        critical_fill = PatternFill("solid", fgColor="FFCCCC")

        def header_row(ws, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"
        ws["A1"] = "Critical Path Analysis"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Generated at", _iso(analysis.generated_at))
        kv("Project start", _iso(analysis.project_start_date))
        kv("Project end", _iso(analysis.project_end_date))
        kv("Total duration (days)", analysis.total_duration)
        kv("Scheduled tasks", len(analysis.nodes))
        kv("Critical tasks", len(analysis.critical_tasks))
        kv("Conflicts", len(ctx.conflicts))
        if analysis.has_cycle:
            kv("Note", "Circular dependency: schedule not computed")

        ws.column_dimensions["A"].width = 26
        ws.column_dimensions["B"].width = 28

        # ---------------- Schedule ----------------
        ws_s = wb.create_sheet("Schedule")
        header_row(ws_s, ["Task ID", "Title", "Start", "Due", "Duration (days)",
                          "Earliest finish", "Latest finish", "Slack", "Critical"])
        nodes = sorted(analysis.nodes.values(), key=lambda n: sort_key(n.start_date))
        for r, node in enumerate(nodes, start=2):
            values = [
                node.task_id,
                node.task_title,
                _iso(node.start_date),
                _iso(node.end_date),
                node.duration,
                node.earliest_finish,
                node.latest_finish,
                node.slack,
                "Yes" if node.is_critical else "No",
            ]
            for c, v in enumerate(values, start=1):
                cell = ws_s.cell(r, c, v)
                cell.border = thin_border
                if node.is_critical:
                    cell.fill = critical_fill

        ws_s.column_dimensions["A"].width = 36
        ws_s.column_dimensions["B"].width = 30
        for col_letter in ("C", "D", "E", "F", "G", "H", "I"):
            ws_s.column_dimensions[col_letter].width = 15

        # ---------------- Conflicts ----------------
        ws_c = wb.create_sheet("Conflicts")
        header_row(ws_c, ["Type", "Severity", "Tasks", "Message", "Suggestion"])
        for r, conflict in enumerate(ctx.conflicts, start=2):
            values = [
                conflict.type.value,
                conflict.severity.value,
                ", ".join(conflict.affected_task_ids),
                conflict.message,
                conflict.suggestion or "",
            ]
            for c, v in enumerate(values, start=1):
                ws_c.cell(r, c, v).border = thin_border

        ws_c.column_dimensions["A"].width = 18
        ws_c.column_dimensions["B"].width = 12
        ws_c.column_dimensions["C"].width = 40
        ws_c.column_dimensions["D"].width = 50
        ws_c.column_dimensions["E"].width = 50

        wb.save(output_path)
        return output_path
