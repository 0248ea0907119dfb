from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from hrms.reports.aggregators import ContributionsSummary, PayrollHistoryEntry, PayrollRunTotals, record_totals
from hrms.reports.context import ReportContext
from hrms.reports.layout import BODY, SECTION_TITLE, build_pdf, data_table, empty_note, key_values, money


def generate_payroll_run_summary_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    totals: Optional[PayrollRunTotals] = data["payroll_run"]
    if totals is None or not totals.rows:
        story: List[Any] = [empty_note("The selected payroll run could not be found or contains no records.")]
        return build_pdf(ctx, "Payroll Run Summary", story)

    run = totals.run
    story = [
        key_values([
            ("Pay Period", run.period.label),
            ("Total Employees", len(totals.rows)),
            ("Total Payout", money(totals.net)),
        ]),
        Spacer(1, 3 * mm),
        Paragraph(
            f"This report summarizes the payroll run for the period {run.period.label}. "
            f"The total gross pay for {len(totals.rows)} employees was {money(totals.gross)}, "
            f"with total deductions amounting to {money(totals.deductions)}. "
            f"This resulted in a total net payout of {money(totals.net)}.",
            BODY,
        ),
        Spacer(1, 4 * mm),
        Paragraph("Payout Details", SECTION_TITLE),
        data_table(
            ["ID", "Employee Name", "Gross Pay", "Deductions", "Net Pay", "Status"],
            [
                [r.employee_id, r.employee_name, money(r.gross), money(r.deductions), money(r.net), r.status]
                for r in totals.rows
            ],
            col_widths=[20 * mm, 52 * mm, 28 * mm, 28 * mm, 28 * mm, 24 * mm],
            right_align=(2, 3, 4),
        ),
    ]
    return build_pdf(ctx, "Payroll Run Summary", story)


def generate_payroll_history_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    entries: List[PayrollHistoryEntry] = data["payroll_history"]
    employee_id = params["employee_id"]
    name = next((e.record.get("employeeName") for e in entries if e.record.get("employeeName")), "")

    story: List[Any] = [
        key_values([("Employee ID", employee_id), ("Employee Name", name), ("Pay Periods", len(entries))]),
        Spacer(1, 4 * mm),
    ]
    if not entries:
        story.append(empty_note("No official payroll history. Finalized payslips appear here after HR processes them."))
        return build_pdf(ctx, "Employee Payroll History", story)

    rows = []
    for e in entries:
        t = record_totals(e.record)
        rows.append([e.run.period.label, e.run.run_id, money(t.gross), money(t.deductions), money(t.net), t.status])

    story.append(data_table(
        ["Pay Period", "Run", "Gross Pay", "Deductions", "Net Pay", "Status"],
        rows,
        col_widths=[50 * mm, 20 * mm, 28 * mm, 28 * mm, 28 * mm, 26 * mm],
        right_align=(2, 3, 4),
    ))
    return build_pdf(ctx, "Employee Payroll History", story)


def generate_contributions_pdf(ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
    summary: Optional[ContributionsSummary] = data["contributions"]
    if summary is None:
        story: List[Any] = [empty_note("The selected payroll run could not be found.")]
        return build_pdf(ctx, "Government Contributions Report", story)

    period = summary.run.period.label
    overview = [(a.agency, money(a.total)) for a in summary.agencies]
    overview.append(("Withholding Tax", money(summary.tax_total)))
    story = [
        key_values([("Pay Period", period), ("Run", summary.run.run_id)] + overview),
        Spacer(1, 3 * mm),
        Paragraph(
            f"For the pay period {period}, the total mandatory contribution amounts to "
            f"{money(summary.grand_total)}, and total withholding tax is {money(summary.tax_total)}. "
            f"Detailed breakdowns for each type are provided below.",
            BODY,
        ),
    ]

    for agency in summary.agencies:
        story += [
            Spacer(1, 4 * mm),
            Paragraph(f"{agency.agency} Contributions", SECTION_TITLE),
            data_table(
                ["No.", "ID", "Employee Name", "EE Share", "ER Share", "Total"],
                [
                    [i, r.employee_id, r.employee_name, money(r.employee_share), money(r.employer_share), money(r.total)]
                    for i, r in enumerate(agency.rows, start=1)
                ] + [["", "", "Total", money(agency.employee_share), money(agency.employer_share), money(agency.total)]],
                col_widths=[12 * mm, 20 * mm, 58 * mm, 30 * mm, 30 * mm, 30 * mm],
                right_align=(3, 4, 5),
            ),
        ]

    story += [
        Spacer(1, 4 * mm),
        Paragraph("Withholding Tax (TIN)", SECTION_TITLE),
        data_table(
            ["No.", "ID", "Employee Name", "Gross Compensation", "Tax Withheld"],
            [
                [i, r.employee_id, r.employee_name, money(r.gross), money(r.withheld)]
                for i, r in enumerate(summary.tax_rows, start=1)
            ] + [["", "", "Total", "", money(summary.tax_total)]],
            col_widths=[12 * mm, 20 * mm, 68 * mm, 40 * mm, 40 * mm],
            right_align=(3, 4),
        ),
    ]
    return build_pdf(ctx, "Government Contributions Report", story)
