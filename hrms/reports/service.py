from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from config import Config
from hrms.logger import logger
from hrms.reports.aggregators import resolve_dependencies
from hrms.reports.attachments import AttachmentTransport, LeaveAttachmentRetriever
from hrms.reports.attendance_report import generate_attendance_pdf
from hrms.reports.context import ReportContext
from hrms.reports.employee_reports import generate_employee_pdf, generate_positions_pdf
from hrms.reports.errors import UnknownHandler
from hrms.reports.handlers import BinaryResult, DocumentResult, Retriever, Synthesizer
from hrms.reports.params import validate_params
from hrms.reports.payroll_reports import (
    generate_contributions_pdf,
    generate_payroll_history_pdf,
    generate_payroll_run_summary_pdf,
)
from hrms.reports.performance_report import generate_kra_summary_pdf
from hrms.reports.recruitment_report import generate_recruitment_pdf
from hrms.reports.registry import REPORT_DEFINITIONS, REPORT_HANDLERS, lookup
from hrms.reports.training_report import generate_training_pdf


ReportResult = Union[DocumentResult, BinaryResult]


BUILTIN_SYNTHESIZERS = (
    Synthesizer("generateEmployeeReport", generate_employee_pdf, ("employees", "positions")),
    Synthesizer("generatePositionsReport", generate_positions_pdf, ("positions", "employees")),
    Synthesizer("generateAttendanceReport", generate_attendance_pdf, ("attendance",)),
    Synthesizer("generateRecruitmentReport", generate_recruitment_pdf, ("applicants",)),
    Synthesizer("generateTrainingReport", generate_training_pdf, ("training_program", "enrollments")),
    Synthesizer("generatePayrollRunSummaryReport", generate_payroll_run_summary_pdf, ("payroll_run",)),
    Synthesizer("generatePayrollHistoryReport", generate_payroll_history_pdf, ("payroll_history",)),
    Synthesizer("generateContributionsReport", generate_contributions_pdf, ("contributions",)),
    Synthesizer("generateKraSummaryReport", generate_kra_summary_pdf, ("kra_summaries",)),
)


def init_report_handlers(transport: Optional[AttachmentTransport] = None,
                         handlers: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Register built-in report handlers into `handlers` (global table by default).
    Call once during app init.
    """
    handlers = REPORT_HANDLERS if handlers is None else handlers
    for s in BUILTIN_SYNTHESIZERS:
        handlers.setdefault(s.key, s)
    handlers.setdefault(LeaveAttachmentRetriever.key, LeaveAttachmentRetriever(transport))
    return handlers


def build_report_context(user_email: Optional[str] = None, generated_on: Optional[date] = None) -> ReportContext:
    return ReportContext(
        generated_on=generated_on or date.today(),
        company_name=Config.COMPANY_NAME,
        user_email=user_email,
    )


async def generate_report(
    report_id: str,
    params: Optional[Mapping[str, Any]],
    ctx: ReportContext,
    source,
    handlers: Optional[Mapping[str, Any]] = None,
    definitions: Mapping[str, Any] = REPORT_DEFINITIONS,
) -> ReportResult:
    """
    Resolve `report_id`, validate `params` against its schema and run its handler.

    Steps run strictly in order: lookup -> validation -> aggregation -> handler.
    Every failure is raised as a ReportError subclass and never retried here.
    Parameterless reports ignore whatever was supplied and get {}.
    """
    definition = lookup(report_id, definitions)

    validated: Dict[str, Any] = {}
    if definition.requires_params:
        validated = validate_params(definition.params_component, params, source)

    handlers = REPORT_HANDLERS if handlers is None else handlers
    handler = handlers.get(definition.handler_key)
    if handler is None:
        logger.critical(f"[{report_id}] Registry/handler drift: no handler for key '{definition.handler_key}'")
        raise UnknownHandler(definition.handler_key, report_id)

    if isinstance(handler, Retriever):
        return await handler.retrieve(validated)

    if isinstance(handler, Synthesizer):
        data = resolve_dependencies(handler.dependencies, source, validated)
        pdf_bytes = handler.synthesize(ctx, data, validated)
        return DocumentResult(content=pdf_bytes, filename=f"{report_id}_{ctx.generated_on.isoformat()}.pdf")

    logger.critical(f"[{report_id}] Handler '{definition.handler_key}' is neither a Synthesizer nor a Retriever")
    raise UnknownHandler(definition.handler_key, report_id)
