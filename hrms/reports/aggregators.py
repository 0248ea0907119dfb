from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from hrms.reports.errors import InvalidRange, MissingField, UnknownHandler
from hrms.reports.params import parse_date


PAY_PERIOD_SEPARATOR = " to "


# -------------------------
# Payroll history
# -------------------------

@dataclass(frozen=True)
class PayPeriod:
    start: date
    end: date

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()}{PAY_PERIOD_SEPARATOR}{self.end.isoformat()}"


@dataclass(frozen=True)
class PayrollRun:
    run_id: Any
    period: PayPeriod
    records: Sequence[Mapping[str, Any]] = field(default_factory=tuple)
    status: Optional[str] = None


@dataclass(frozen=True)
class PayrollHistoryEntry:
    run: PayrollRun
    record: Mapping[str, Any]


def _record_employee_id(record: Mapping[str, Any]) -> Any:
    return record.get("empId", record.get("employee_id"))


def match_payroll_history(runs: Iterable[PayrollRun], employee_id: Any) -> List[PayrollHistoryEntry]:
    """
    Runs that contain a record for `employee_id`, each paired with that record,
    most recent pay period first. Runs without a record are dropped.
    """
    wanted = str(employee_id)
    entries: List[PayrollHistoryEntry] = []
    for run in runs:
        record = next((r for r in run.records if str(_record_employee_id(r)) == wanted), None)
        if record is not None:
            entries.append(PayrollHistoryEntry(run=run, record=record))
    entries.sort(key=lambda e: e.run.period.start, reverse=True)
    return entries


# -------------------------
# Payroll run totals
# -------------------------

def as_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except ArithmeticError:
        return Decimal("0")


@dataclass(frozen=True)
class PayrollRowTotals:
    employee_id: Any
    employee_name: str
    gross: Decimal
    deductions: Decimal
    net: Decimal
    status: Optional[str]


@dataclass(frozen=True)
class PayrollRunTotals:
    run: PayrollRun
    gross: Decimal
    deductions: Decimal
    net: Decimal
    rows: List[PayrollRowTotals]


def record_totals(record: Mapping[str, Any]) -> PayrollRowTotals:
    earnings = sum((as_decimal(i.get("amount")) for i in record.get("earnings") or []), Decimal("0"))
    deductions = sum((as_decimal(v) for v in (record.get("deductions") or {}).values()), Decimal("0"))
    deductions += sum((as_decimal(i.get("amount")) for i in record.get("otherDeductions") or []), Decimal("0"))

    gross = as_decimal(record["grossEarning"]) if record.get("grossEarning") is not None else earnings
    if record.get("totalDeductionsAmount") is not None:
        deductions = as_decimal(record["totalDeductionsAmount"])
    deductions = abs(deductions)
    net = as_decimal(record["netPay"]) if record.get("netPay") is not None else gross - deductions

    return PayrollRowTotals(
        employee_id=_record_employee_id(record),
        employee_name=str(record.get("employeeName") or ""),
        gross=gross,
        deductions=deductions,
        net=net,
        status=record.get("status"),
    )


def summarize_payroll_run(run: PayrollRun) -> PayrollRunTotals:
    rows = [record_totals(r) for r in run.records]
    return PayrollRunTotals(
        run=run,
        gross=sum((r.gross for r in rows), Decimal("0")),
        deductions=sum((r.deductions for r in rows), Decimal("0")),
        net=sum((r.net for r in rows), Decimal("0")),
        rows=rows,
    )


# -------------------------
# Government contributions
# -------------------------

CONTRIBUTION_AGENCIES = ("SSS", "PhilHealth", "Pag-IBIG")
WITHHOLDING_TAX = "Tax"

# older records only carry employee shares in `deductions`
_DEDUCTION_KEYS = {"SSS": "sss", "PhilHealth": "philhealth", "Pag-IBIG": "hdmf", WITHHOLDING_TAX: "tax"}


@dataclass(frozen=True)
class ContributionRow:
    employee_id: Any
    employee_name: str
    employee_share: Decimal
    employer_share: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_share + self.employer_share


@dataclass(frozen=True)
class AgencyContributions:
    agency: str
    rows: List[ContributionRow]
    employee_share: Decimal
    employer_share: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_share + self.employer_share


@dataclass(frozen=True)
class TaxWithholdingRow:
    employee_id: Any
    employee_name: str
    gross: Decimal
    withheld: Decimal


@dataclass(frozen=True)
class ContributionsSummary:
    run: PayrollRun
    agencies: List[AgencyContributions]
    tax_rows: List[TaxWithholdingRow]
    tax_total: Decimal

    @property
    def grand_total(self) -> Decimal:
        # mandatory contributions only, withholding tax is reported apart
        return sum((a.total for a in self.agencies), Decimal("0"))


def statutory_shares(record: Mapping[str, Any], agency: str) -> Tuple[Decimal, Decimal]:
    """
    (employee share, employer share) of one agency for a payroll record.
    Reads `statutory[agency]` = {"ee", "er"}; falls back to the employee
    share kept in `deductions` with no employer share.
    """
    entry = (record.get("statutory") or {}).get(agency)
    if entry is not None:
        return abs(as_decimal(entry.get("ee"))), abs(as_decimal(entry.get("er")))
    legacy = (record.get("deductions") or {}).get(_DEDUCTION_KEYS[agency])
    return abs(as_decimal(legacy)), Decimal("0")


def summarize_contributions(run: PayrollRun) -> ContributionsSummary:
    agencies: List[AgencyContributions] = []
    for agency in CONTRIBUTION_AGENCIES:
        rows = []
        for record in run.records:
            ee, er = statutory_shares(record, agency)
            rows.append(ContributionRow(
                employee_id=_record_employee_id(record),
                employee_name=str(record.get("employeeName") or ""),
                employee_share=ee,
                employer_share=er,
            ))
        agencies.append(AgencyContributions(
            agency=agency,
            rows=rows,
            employee_share=sum((r.employee_share for r in rows), Decimal("0")),
            employer_share=sum((r.employer_share for r in rows), Decimal("0")),
        ))

    tax_rows = [
        TaxWithholdingRow(
            employee_id=_record_employee_id(record),
            employee_name=str(record.get("employeeName") or ""),
            gross=record_totals(record).gross,
            withheld=statutory_shares(record, WITHHOLDING_TAX)[0],
        )
        for record in run.records
    ]
    return ContributionsSummary(
        run=run,
        agencies=agencies,
        tax_rows=tax_rows,
        tax_total=sum((r.withheld for r in tax_rows), Decimal("0")),
    )


# -------------------------
# KRA / KPI weights
# -------------------------

BALANCED_WEIGHT = 100


@dataclass(frozen=True)
class KraWeightSummary:
    kra: Mapping[str, Any]
    kpis: List[Mapping[str, Any]]
    total_weight: Decimal
    balanced: bool


def rollup_kra_weights(kra: Mapping[str, Any], kpis: Iterable[Mapping[str, Any]]) -> KraWeightSummary:
    kpis = list(kpis)
    total = sum((as_decimal(k.get("weight")) for k in kpis), Decimal("0"))
    return KraWeightSummary(kra=kra, kpis=kpis, total_weight=total, balanced=total == BALANCED_WEIGHT)


def rollup_kras(kras: Iterable[Mapping[str, Any]], kpis: Iterable[Mapping[str, Any]]) -> List[KraWeightSummary]:
    by_kra: Dict[str, List[Mapping[str, Any]]] = {}
    for kpi in kpis:
        by_kra.setdefault(str(kpi.get("kraId")), []).append(kpi)
    return [rollup_kra_weights(kra, by_kra.get(str(kra.get("id")), [])) for kra in kras]


# -------------------------
# Evaluation period
# -------------------------

@dataclass(frozen=True)
class EvaluationPeriod:
    period_start: date
    period_end: date

    def to_dict(self) -> Dict[str, str]:
        return {"periodStart": self.period_start.isoformat(), "periodEnd": self.period_end.isoformat()}


@dataclass(frozen=True)
class EvaluationPeriodView:
    period: Optional[EvaluationPeriod]
    is_active: bool

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"periodStart": None, "periodEnd": None}
        if self.period is not None:
            out.update(self.period.to_dict())
        out["isActive"] = self.is_active
        return out


def resolve_evaluation_period(value: Optional[EvaluationPeriod]) -> EvaluationPeriodView:
    active = value is not None and value.period_start is not None and value.period_end is not None
    return EvaluationPeriodView(period=value, is_active=active)


def build_evaluation_period(value: Mapping[str, Any]) -> EvaluationPeriod:
    for f in ("periodStart", "periodEnd"):
        v = value.get(f)
        if v is None or (isinstance(v, str) and not v.strip()):
            raise MissingField(f)
    start = parse_date("periodStart", value["periodStart"])
    end = parse_date("periodEnd", value["periodEnd"])
    if end < start:
        raise InvalidRange("periodEnd", "End date cannot be before start date.")
    return EvaluationPeriod(period_start=start, period_end=end)


class EvaluationPeriodStore:
    """
    Holds the single active evaluation period.
    A rejected update leaves the previous period untouched.
    """

    def __init__(self, initial: Optional[EvaluationPeriod] = None):
        self._lock = threading.Lock()
        self._period = initial

    @property
    def current(self) -> EvaluationPeriodView:
        with self._lock:
            return resolve_evaluation_period(self._period)

    def set_active_period(self, value: Optional[Mapping[str, Any]]) -> EvaluationPeriodView:
        if value is None:
            return self.clear_active_period()
        period = build_evaluation_period(value)
        with self._lock:
            self._period = period
            return resolve_evaluation_period(self._period)

    def clear_active_period(self) -> EvaluationPeriodView:
        with self._lock:
            self._period = None
            return resolve_evaluation_period(None)


# -------------------------
# Handler data dependencies
# -------------------------

def _training_program(source, params):
    return source.training_program(params["program_id"])


def _payroll_run(source, params):
    run = source.payroll_run(params["run_id"])
    return summarize_payroll_run(run) if run is not None else None


def _contributions(source, params):
    run = source.payroll_run(params["run_id"])
    return summarize_contributions(run) if run is not None else None


DATA_PROVIDERS: Dict[str, Callable[[Any, Mapping[str, Any]], Any]] = {
    "employees": lambda source, params: source.employees(),
    "positions": lambda source, params: source.positions(),
    "attendance": lambda source, params: source.attendance(params["start_date"], params["end_date"]),
    "applicants": lambda source, params: source.applicants(params["start_date"], params["end_date"]),
    "training_program": _training_program,
    "enrollments": lambda source, params: source.enrollments(params["program_id"]),
    "payroll_run": _payroll_run,
    "contributions": _contributions,
    "payroll_history": lambda source, params: match_payroll_history(source.payroll_runs(), params["employee_id"]),
    "kra_summaries": lambda source, params: rollup_kras(source.kras(), source.kpis()),
}


def resolve_dependencies(names: Iterable[str], source, params: Mapping[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for name in names:
        provider = DATA_PROVIDERS.get(name)
        if provider is None:
            raise UnknownHandler(f"data:{name}")
        data[name] = provider(source, params)
    return data
