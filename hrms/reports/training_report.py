from __future__ import annotations

from typing import Any, Dict, List, Mapping

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from hrms.reports.context import ReportContext
from hrms.reports.layout import SECTION_TITLE, build_pdf, data_table, empty_note, key_values


def generate_training_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    program: Mapping[str, Any] = data["training_program"] or {}
    enrollments: List[Mapping[str, Any]] = sorted(
        data["enrollments"], key=lambda e: (str(e.get("employeeName") or ""), str(e.get("empId") or ""))
    )
    completed = sum(1 for e in enrollments if e.get("status") == "Completed")

    story: List[Any] = [
        key_values([
            ("Program", program.get("title")),
            ("Provider", program.get("provider")),
            ("Duration", f"{program.get('startDate') or ''} to {program.get('endDate') or ''}"),
            ("Participants", len(enrollments)),
            ("Completed", completed),
        ]),
        Spacer(1, 4 * mm),
        Paragraph("Participants", SECTION_TITLE),
    ]
    if enrollments:
        story.append(data_table(
            ["Employee ID", "Name", "Status", "Progress"],
            [[e.get("empId"), e.get("employeeName"), e.get("status"), f"{e.get('progress') or 0}%"] for e in enrollments],
            col_widths=[30 * mm, 80 * mm, 40 * mm, 30 * mm],
            right_align=(3,),
        ))
    else:
        story.append(empty_note("No employees are enrolled in this program."))
    return build_pdf(ctx, "Training Program Report", story)
