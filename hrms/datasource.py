# hrms/datasource.py
# read-only access to HR records used by the report handlers
from __future__ import annotations

from contextlib import closing
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from hrms.database import get_hr_connection
from hrms.logger import logger
from hrms.queries import (
    report_applicants_sql,
    report_attendance_sql,
    report_employees_sql,
    report_enrollments_sql,
    report_kpis_sql,
    report_kras_sql,
    report_payroll_records_sql,
    report_payroll_run_sql,
    report_payroll_runs_sql,
    report_payroll_statutory_sql,
    report_positions_sql,
    report_training_program_sql,
)
from hrms.reports.aggregators import PayPeriod, PayrollRun


def _rows(cur) -> List[Dict[str, Any]]:
    cols = [d[0] for d in cur.description]
    return [dict(zip(cols, row)) for row in cur.fetchall()]


class PostgresHrSource:
    """
    HR data source backed by PostgreSQL (psycopg2).
    Every method opens its own connection and closes it; nothing is cached between calls.
    """

    def __init__(self, connect: Callable[[], Any] = get_hr_connection):
        self._connect = connect

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        # `with conn` only ends the transaction, closing() releases the connection
        with closing(self._connect()) as conn:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return _rows(cur)

    def employees(self) -> List[Dict[str, Any]]:
        return self._fetch_all(report_employees_sql())

    def positions(self) -> List[Dict[str, Any]]:
        return self._fetch_all(report_positions_sql())

    def attendance(self, start: date, end: date) -> List[Dict[str, Any]]:
        return self._fetch_all(report_attendance_sql(), (start, end))

    def applicants(self, start: date, end: date) -> List[Dict[str, Any]]:
        return self._fetch_all(report_applicants_sql(), (start, end))

    def training_program(self, program_id: Any) -> Optional[Dict[str, Any]]:
        rows = self._fetch_all(report_training_program_sql(), (program_id,))
        return rows[0] if rows else None

    def enrollments(self, program_id: Any) -> List[Dict[str, Any]]:
        return self._fetch_all(report_enrollments_sql(), (program_id,))

    def _runs_with_records(self, runs: List[Dict[str, Any]]) -> List[PayrollRun]:
        if not runs:
            return []
        run_ids = [r["id"] for r in runs]
        records = self._fetch_all(report_payroll_records_sql(), (run_ids,))
        statutory = self._fetch_all(report_payroll_statutory_sql(), (run_ids,))

        # (run, employee) -> {"SSS": {"ee", "er"}, ...}
        shares: Dict[tuple, Dict[str, Dict[str, Any]]] = {}
        for s in statutory:
            shares.setdefault((s["run_id"], s["empId"]), {})[s["agency"]] = {"ee": s["ee"], "er": s["er"]}

        by_run: Dict[Any, List[Dict[str, Any]]] = {}
        for rec in records:
            run_id = rec.pop("run_id")
            rec["statutory"] = shares.get((run_id, rec["empId"]), {})
            by_run.setdefault(run_id, []).append(rec)

        out: List[PayrollRun] = []
        for r in runs:
            out.append(PayrollRun(
                run_id=r["id"],
                period=PayPeriod(start=r["period_start"], end=r["period_end"]),
                records=tuple(by_run.get(r["id"], [])),
                status=r.get("status"),
            ))
        logger.debug(f"Loaded {len(out)} payroll runs with {len(records)} records")
        return out

    def payroll_runs(self) -> List[PayrollRun]:
        return self._runs_with_records(self._fetch_all(report_payroll_runs_sql()))

    def payroll_run(self, run_id: Any) -> Optional[PayrollRun]:
        runs = self._runs_with_records(self._fetch_all(report_payroll_run_sql(), (run_id,)))
        return runs[0] if runs else None

    def kras(self) -> List[Dict[str, Any]]:
        return self._fetch_all(report_kras_sql())

    def kpis(self) -> List[Dict[str, Any]]:
        return self._fetch_all(report_kpis_sql())
