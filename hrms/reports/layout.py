# hrms/reports/layout.py
from __future__ import annotations

import io
import os
from xml.sax.saxutils import escape
from typing import Any, List, Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config import Config
from hrms.logger import logger
from hrms.reports.context import ReportContext


# -------------------------
# Font (Unicode, e.g. peso sign)
# -------------------------

SYSTEM_FONT_DIRS = (
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/dejavu-sans-fonts",
)


def font_candidates(font_dir: Optional[str] = None) -> List[Tuple[str, str]]:
    """(regular, bold) DejaVu paths to try; a configured directory goes first."""
    dirs = ([font_dir] if font_dir else []) + list(SYSTEM_FONT_DIRS)
    return [(os.path.join(d, "DejaVuSans.ttf"), os.path.join(d, "DejaVuSans-Bold.ttf")) for d in dirs]


def _register_unicode_fonts() -> Tuple[str, str]:
    """
    Try to register DejaVu Sans (regular + bold). Falls back to Helvetica if not found.
    Returns (regular_font_name, bold_font_name).
    """
    for reg_path, bold_path in font_candidates(getattr(Config, "FONT_DIR", "")):
        if os.path.exists(reg_path) and os.path.exists(bold_path):
            try:
                pdfmetrics.registerFont(TTFont("DejaVuSans", reg_path))
                pdfmetrics.registerFont(TTFont("DejaVuSans-Bold", bold_path))
                return "DejaVuSans", "DejaVuSans-Bold"
            except Exception as e:
                logger.warning(f"Failed to register DejaVu fonts from {reg_path}: {e}")

    logger.warning("Unicode font not found/registered -> falling back to Helvetica.")
    return "Helvetica", "Helvetica-Bold"


FONT_REG, FONT_BOLD = _register_unicode_fonts()


# -------------------------
# Styles
# -------------------------

_styles = getSampleStyleSheet()

TITLE = ParagraphStyle(
    "HRTitle",
    parent=_styles["Normal"],
    fontName=FONT_BOLD,
    fontSize=16,
    leading=19,
    alignment=2,  # right
)

SECTION_TITLE = ParagraphStyle(
    "HRSectionTitle",
    parent=_styles["Normal"],
    fontName=FONT_BOLD,
    fontSize=12,
    leading=15,
    spaceBefore=6,
    spaceAfter=4,
)

BODY = ParagraphStyle(
    "HRBody",
    parent=_styles["Normal"],
    fontName=FONT_REG,
    fontSize=9,
    leading=12,
)

CELL = ParagraphStyle(
    "HRCell",
    parent=_styles["Normal"],
    fontName=FONT_REG,
    fontSize=8,
    leading=10,
)

WARNING = ParagraphStyle(
    "HRWarning",
    parent=BODY,
    textColor=colors.HexColor("#b02a37"),
)

HEAD_GREEN = colors.HexColor("#198754")
ROW_STRIPE = colors.HexColor("#f5f5f5")

CONTENT_WIDTH = A4[0] - 30 * mm


# -------------------------
# Helpers
# -------------------------

def v(x: Any) -> str:
    if x is None:
        return ""
    if isinstance(x, bool):
        return "Yes" if x else "No"
    return str(x)


def money(x: Any) -> str:
    try:
        return f"{float(x):,.2f}"
    except (TypeError, ValueError):
        return ""


def page_header(ctx: ReportContext, title: str) -> Table:
    left = Paragraph(escape(ctx.company_name), SECTION_TITLE)
    right = Paragraph(escape(title), TITLE)
    t = Table([[left, right]], colWidths=[CONTENT_WIDTH * 0.4, CONTENT_WIDTH * 0.6])
    t.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LINEBELOW", (0, 0), (-1, -1), 1, colors.black),
    ]))
    return t


def key_values(rows: Sequence[Tuple[str, Any]]) -> Table:
    data = [[Paragraph(f"<b>{label}:</b>", BODY), Paragraph(escape(v(value)), BODY)] for label, value in rows]
    t = Table(data, colWidths=[45 * mm, CONTENT_WIDTH - 45 * mm])
    t.setStyle(TableStyle([
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
    ]))
    return t


def data_table(head: Sequence[str], body: Sequence[Sequence[Any]],
               col_widths: Optional[Sequence[float]] = None,
               right_align: Sequence[int] = ()) -> Table:
    """Striped table with a green header row, repeated on every page."""
    rows: List[List[Any]] = [[Paragraph(f"<b>{escape(h)}</b>", CELL) for h in head]]
    for r in body:
        rows.append([Paragraph(escape(v(c)), CELL) for c in r])

    t = Table(rows, colWidths=col_widths, repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEAD_GREEN),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("TOPPADDING", (0, 0), (-1, -1), 2),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
    ]
    for i in range(2, len(rows), 2):
        style.append(("BACKGROUND", (0, i), (-1, i), ROW_STRIPE))
    for col in right_align:
        style.append(("ALIGN", (col, 1), (col, -1), "RIGHT"))
    t.setStyle(TableStyle(style))
    return t


def empty_note(text: str) -> Paragraph:
    return Paragraph(f"<i>{text}</i>", BODY)


def _footer(canv, doc, left_text: str) -> None:
    canv.saveState()
    canv.setFont(FONT_REG, 8)
    canv.setFillColor(colors.grey)
    canv.drawString(doc.leftMargin, 8 * mm, left_text)
    canv.drawRightString(A4[0] - doc.rightMargin, 8 * mm, f"Page {canv.getPageNumber()}")
    canv.restoreState()


def build_pdf(ctx: ReportContext, title: str, story: List[Any]) -> bytes:
    """
    A4 portrait, common header + footer.
    invariant=1 keeps ReportLab from stamping creation date / random IDs,
    so equal input gives byte-equal output.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=16 * mm,
        title=title,
        author=ctx.user_email or ctx.company_name,
        invariant=1,
    )

    footer_left = f"Generated on: {ctx.generated_on.isoformat()}"

    def _on_page(canv, d):
        _footer(canv, d, footer_left)

    doc.build([page_header(ctx, title), Spacer(1, 5 * mm)] + story,
              onFirstPage=_on_page, onLaterPages=_on_page)
    return buf.getvalue()
