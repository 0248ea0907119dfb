from __future__ import annotations

from typing import Any, Dict, List, Mapping
from xml.sax.saxutils import escape

from reportlab.lib.units import mm
from reportlab.platypus import KeepTogether, Paragraph, Spacer

from hrms.reports.aggregators import KraWeightSummary, as_decimal
from hrms.reports.context import ReportContext
from hrms.reports.layout import BODY, SECTION_TITLE, WARNING, build_pdf, data_table, empty_note


def _weight(x: Any) -> str:
    return f"{as_decimal(x):g}%"


def generate_kra_summary_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    """
    One block per KRA: KPI table and weight total.
    KRAs whose weights do not add up to 100% are flagged, not dropped.
    """
    summaries: List[KraWeightSummary] = data["kra_summaries"]
    if not summaries:
        return build_pdf(ctx, "KRA & KPI Summary", [empty_note("No key result areas defined.")])

    unbalanced = [s for s in summaries if not s.balanced]
    story: List[Any] = [
        Paragraph(f"{len(summaries)} key result areas, {len(unbalanced)} with KPI weights not totalling 100%.", BODY),
        Spacer(1, 4 * mm),
    ]

    for s in summaries:
        block: List[Any] = [Paragraph(escape(str(s.kra.get("title") or s.kra.get("id"))), SECTION_TITLE)]
        if s.kra.get("description"):
            block.append(Paragraph(escape(str(s.kra["description"])), BODY))
        if s.kpis:
            block.append(data_table(
                ["KPI", "Weight"],
                [[k.get("title"), _weight(k.get("weight") or 0)] for k in s.kpis],
                col_widths=[140 * mm, 40 * mm],
                right_align=(1,),
            ))
        else:
            block.append(empty_note("No KPIs attached."))

        total = f"Total weight: {_weight(s.total_weight)}"
        block.append(Paragraph(total if s.balanced else f"{total} (should be 100%)", BODY if s.balanced else WARNING))
        block.append(Spacer(1, 4 * mm))
        story.append(KeepTogether(block))

    return build_pdf(ctx, "KRA & KPI Summary", story)
