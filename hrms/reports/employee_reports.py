from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Mapping

from reportlab.lib.units import mm

from hrms.reports.context import ReportContext
from hrms.reports.layout import build_pdf, data_table, empty_note, money


def generate_employee_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    employees: List[Mapping[str, Any]] = data["employees"]
    position_titles = {str(p.get("id")): p.get("title") for p in data["positions"]}

    rows = [
        [
            emp.get("id"),
            emp.get("name"),
            position_titles.get(str(emp.get("positionId"))) or "Unassigned",
            emp.get("email"),
            emp.get("joiningDate"),
        ]
        for emp in employees
    ]

    story: List[Any] = []
    if rows:
        story.append(data_table(
            ["ID", "Name", "Position", "Email", "Joining Date"],
            rows,
            col_widths=[20 * mm, 45 * mm, 40 * mm, 55 * mm, 20 * mm],
        ))
    else:
        story.append(empty_note("No employees on record."))
    return build_pdf(ctx, "Employee Masterlist", story)


def generate_positions_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    counts = Counter(str(e.get("positionId")) for e in data["employees"])

    rows = [
        [
            p.get("id"),
            p.get("title"),
            money(p.get("monthlySalary")),
            counts.get(str(p.get("id")), 0),
        ]
        for p in data["positions"]
    ]

    story: List[Any] = []
    if rows:
        story.append(data_table(
            ["ID", "Position Title", "Monthly Salary", "Employees"],
            rows,
            col_widths=[20 * mm, 80 * mm, 40 * mm, 40 * mm],
            right_align=(2, 3),
        ))
    else:
        story.append(empty_note("No positions defined."))
    return build_pdf(ctx, "Company Positions Report", story)
