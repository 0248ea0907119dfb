from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from hrms.reports.errors import UnknownHandler, UnknownReport


class ReportId(str, Enum):
    EMPLOYEE_MASTERLIST = "employee_masterlist"
    COMPANY_POSITIONS_LIST = "company_positions_list"
    DAILY_ATTENDANCE_SUMMARY = "daily_attendance_summary"
    RECRUITMENT_ACTIVITY = "recruitment_activity"
    TRAINING_PROGRAM_SUMMARY = "training_program_summary"
    PAYROLL_RUN_SUMMARY = "payroll_run_summary"
    PAYROLL_HISTORY = "payroll_history"
    CONTRIBUTIONS_REPORT = "contributions_report"
    KRA_KPI_SUMMARY = "kra_kpi_summary"
    LEAVE_ATTACHMENT = "leave_attachment"


class ReportCategory(str, Enum):
    EMPLOYEE_DATA = "Employee Data"
    ATTENDANCE = "Attendance & Schedules"
    PAYROLL = "Payroll & Compensation"
    PERFORMANCE = "Performance"
    RECRUITMENT = "Recruitment"
    TRAINING = "Training & Development"
    LEAVE = "Leave"


class ParamType(str, Enum):
    DATE_RANGE = "DATE_RANGE"
    PROGRAM_SELECTOR = "PROGRAM_SELECTOR"
    PAYROLL_RUN_SELECTOR = "PAYROLL_RUN_SELECTOR"
    EMPLOYEE_SELECTOR = "EMPLOYEE_SELECTOR"
    LEAVE_SELECTOR = "LEAVE_SELECTOR"


@dataclass(frozen=True)
class ReportDefinition:
    id: ReportId
    title: str
    description: str
    icon: str
    category: ReportCategory
    handler_key: str
    requires_params: bool = False
    params_component: Optional[ParamType] = None

    def __post_init__(self) -> None:
        if self.requires_params and self.params_component is None:
            raise ValueError(f"Report '{self.id.value}' requires params but declares no params_component")
        if not self.requires_params and self.params_component is not None:
            raise ValueError(f"Report '{self.id.value}' declares params_component without requiring params")

    def to_dict(self) -> Dict[str, Any]:
        """Registry entry in its external (camelCase) shape."""
        out: Dict[str, Any] = {
            "id": self.id.value,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
            "handlerKey": self.handler_key,
            "requiresParams": self.requires_params,
        }
        if self.params_component is not None:
            out["paramsComponent"] = self.params_component.value
        return out


_DEFINITIONS = (
    ReportDefinition(
        id=ReportId.EMPLOYEE_MASTERLIST,
        title="Employee Masterlist",
        description="A detailed list of all employees, including their personal and statutory information.",
        icon="bi-people-fill",
        category=ReportCategory.EMPLOYEE_DATA,
        handler_key="generateEmployeeReport",
    ),
    ReportDefinition(
        id=ReportId.COMPANY_POSITIONS_LIST,
        title="Company Positions Report",
        description="A list of all defined positions, including salary and employee counts.",
        icon="bi-diagram-3-fill",
        category=ReportCategory.EMPLOYEE_DATA,
        handler_key="generatePositionsReport",
    ),
    ReportDefinition(
        id=ReportId.DAILY_ATTENDANCE_SUMMARY,
        title="Daily Attendance Report",
        description="A summary and detailed log of employee attendance for a specific day or date range.",
        icon="bi-calendar-check-fill",
        category=ReportCategory.ATTENDANCE,
        handler_key="generateAttendanceReport",
        requires_params=True,
        params_component=ParamType.DATE_RANGE,
    ),
    ReportDefinition(
        id=ReportId.RECRUITMENT_ACTIVITY,
        title="Recruitment Activity Report",
        description="Summarizes recruitment activities for a given period.",
        icon="bi-person-plus-fill",
        category=ReportCategory.RECRUITMENT,
        handler_key="generateRecruitmentReport",
        requires_params=True,
        params_component=ParamType.DATE_RANGE,
    ),
    ReportDefinition(
        id=ReportId.TRAINING_PROGRAM_SUMMARY,
        title="Training Program Report",
        description="Generates a report on a specific training program and its participants.",
        icon="bi-mortarboard-fill",
        category=ReportCategory.TRAINING,
        handler_key="generateTrainingReport",
        requires_params=True,
        params_component=ParamType.PROGRAM_SELECTOR,
    ),
    ReportDefinition(
        id=ReportId.PAYROLL_RUN_SUMMARY,
        title="Payroll Run Summary",
        description="Totals and payout details for a single payroll run.",
        icon="bi-cash-stack",
        category=ReportCategory.PAYROLL,
        handler_key="generatePayrollRunSummaryReport",
        requires_params=True,
        params_component=ParamType.PAYROLL_RUN_SELECTOR,
    ),
    ReportDefinition(
        id=ReportId.PAYROLL_HISTORY,
        title="Employee Payroll History",
        description="All finalized payslips of one employee, most recent pay period first.",
        icon="bi-archive-fill",
        category=ReportCategory.PAYROLL,
        handler_key="generatePayrollHistoryReport",
        requires_params=True,
        params_component=ParamType.EMPLOYEE_SELECTOR,
    ),
    ReportDefinition(
        id=ReportId.CONTRIBUTIONS_REPORT,
        title="Government Contributions Report",
        description="SSS, PhilHealth and Pag-IBIG shares plus withholding tax for a single payroll run.",
        icon="bi-bank",
        category=ReportCategory.PAYROLL,
        handler_key="generateContributionsReport",
        requires_params=True,
        params_component=ParamType.PAYROLL_RUN_SELECTOR,
    ),
    ReportDefinition(
        id=ReportId.KRA_KPI_SUMMARY,
        title="KRA & KPI Summary",
        description="Key result areas with their KPIs and weight totals.",
        icon="bi-bullseye",
        category=ReportCategory.PERFORMANCE,
        handler_key="generateKraSummaryReport",
    ),
    ReportDefinition(
        id=ReportId.LEAVE_ATTACHMENT,
        title="Leave Attachment",
        description="The document attached to a leave request, as it was uploaded.",
        icon="bi-paperclip",
        category=ReportCategory.LEAVE,
        handler_key="viewAttachment",
        requires_params=True,
        params_component=ParamType.LEAVE_SELECTOR,
    ),
)


def build_registry(definitions: Iterable[ReportDefinition]) -> Mapping[str, ReportDefinition]:
    out: Dict[str, ReportDefinition] = {}
    for d in definitions:
        if d.id.value in out:
            raise ValueError(f"Duplicate report id '{d.id.value}'")
        out[d.id.value] = d
    return MappingProxyType(out)


REPORT_DEFINITIONS: Mapping[str, ReportDefinition] = build_registry(_DEFINITIONS)


# handler_key -> handler object, filled by service.init_report_handlers()
REPORT_HANDLERS: Dict[str, Any] = {}


def lookup(report_id: str, definitions: Mapping[str, ReportDefinition] = REPORT_DEFINITIONS) -> ReportDefinition:
    definition = definitions.get(report_id)
    if definition is None:
        raise UnknownReport(report_id)
    return definition


def list_definitions(category: Optional[str] = None) -> List[ReportDefinition]:
    order = {c: i for i, c in enumerate(ReportCategory)}
    items = [
        d for d in REPORT_DEFINITIONS.values()
        if category is None or d.category.value == category or d.category.name == category
    ]
    return sorted(items, key=lambda d: (order[d.category], d.title))


def validate_registry(
    definitions: Mapping[str, ReportDefinition] = REPORT_DEFINITIONS,
    handlers: Optional[Mapping[str, Any]] = None,
) -> None:
    """
    Startup check. Pairing of requires_params/params_component is enforced
    when a definition is built; here we only make sure every handler_key
    points to a registered handler.
    """
    handlers = REPORT_HANDLERS if handlers is None else handlers
    for rid, d in definitions.items():
        if d.handler_key not in handlers:
            raise UnknownHandler(d.handler_key, rid)
