from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Mapping

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from hrms.reports.context import ReportContext
from hrms.reports.layout import SECTION_TITLE, build_pdf, data_table, empty_note, key_values


ATTENDANCE_STATUSES = ("Present", "Late", "Absent")


def generate_attendance_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    """
    Summary (counts per status) followed by the detailed log,
    ordered by date and employee.
    """
    start, end = params["start_date"], params["end_date"]
    logs: List[Mapping[str, Any]] = sorted(
        data["attendance"],
        key=lambda r: (str(r.get("date") or ""), str(r.get("employeeName") or ""), str(r.get("empId") or "")),
    )
    counts = Counter(r.get("status") or "Absent" for r in logs)

    story: List[Any] = [
        key_values([
            ("Period", f"{start.isoformat()} to {end.isoformat()}"),
            ("Records", len(logs)),
        ] + [(status, counts.get(status, 0)) for status in ATTENDANCE_STATUSES]),
        Spacer(1, 4 * mm),
        Paragraph("Attendance Log", SECTION_TITLE),
    ]

    if logs:
        story.append(data_table(
            ["Date", "Employee ID", "Name", "Sign In", "Sign Out", "Status"],
            [
                [r.get("date"), r.get("empId"), r.get("employeeName"), r.get("signIn") or "---",
                 r.get("signOut") or "---", r.get("status") or "Absent"]
                for r in logs
            ],
            col_widths=[22 * mm, 22 * mm, 50 * mm, 25 * mm, 25 * mm, 36 * mm],
        ))
    else:
        story.append(empty_note("No attendance records for the selected period."))
    return build_pdf(ctx, "Daily Attendance Report", story)
