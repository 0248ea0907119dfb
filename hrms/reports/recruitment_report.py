from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Mapping

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from hrms.reports.context import ReportContext
from hrms.reports.layout import SECTION_TITLE, build_pdf, data_table, empty_note, key_values


def generate_recruitment_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    start, end = params["start_date"], params["end_date"]
    applicants = sorted(
        data["applicants"],
        key=lambda a: (str(a.get("applicationDate") or ""), str(a.get("name") or "")),
    )
    by_status = Counter(a.get("status") or "New Applicant" for a in applicants)
    hired = by_status.get("Hired", 0)

    summary = [("Period", f"{start.isoformat()} to {end.isoformat()}"),
               ("Total Applicants", len(applicants)),
               ("Hired", hired)]
    summary += [(status, count) for status, count in sorted(by_status.items()) if status != "Hired"]

    story: List[Any] = [key_values(summary), Spacer(1, 4 * mm), Paragraph("Applicants", SECTION_TITLE)]
    if applicants:
        story.append(data_table(
            ["Date Applied", "Name", "Position Applied", "Email", "Status"],
            [
                [a.get("applicationDate"), a.get("name"), a.get("jobTitle"), a.get("email"), a.get("status")]
                for a in applicants
            ],
            col_widths=[24 * mm, 45 * mm, 40 * mm, 46 * mm, 25 * mm],
        ))
    else:
        story.append(empty_note("No recruitment activity in the selected period."))
    return build_pdf(ctx, "Recruitment Activity Report", story)
