# tests/conftest.py
# shared fixtures: in-memory HR data source, fixed report context, Flask app
# Run: pytest -q from the repository root.

from datetime import date

import httpx
import pytest

from hrms import create_app
from hrms.reports.aggregators import EvaluationPeriodStore, PayPeriod, PayrollRun
from hrms.reports.attachments import AttachmentTransport
from hrms.reports.context import ReportContext


def _run(run_id, start, end, records):
    return PayrollRun(run_id=run_id, period=PayPeriod(start, end), records=tuple(records), status="Paid")


def _shares(sss, philhealth, pagibig, tax):
    return {"SSS": sss, "PhilHealth": philhealth, "Pag-IBIG": pagibig, "Tax": tax}


class FakeHrSource:
    """Same read API as PostgresHrSource, backed by lists."""

    def __init__(self):
        self.calls = []
        self._employees = [
            {"id": "E1", "name": "Ana Cruz", "positionId": 1, "email": "ana@example.com", "joiningDate": "2021-03-01"},
            {"id": "E7", "name": "Ben Reyes", "positionId": 2, "email": "ben@example.com", "joiningDate": "2022-06-15"},
            {"id": "E9", "name": "Cara Lim", "positionId": 99, "email": "cara@example.com", "joiningDate": "2023-01-09"},
        ]
        self._positions = [
            {"id": 1, "title": "HR Officer", "monthlySalary": 30000},
            {"id": 2, "title": "Packer", "monthlySalary": 18000},
        ]
        self._attendance = [
            {"date": date(2024, 2, 1), "empId": "E1", "employeeName": "Ana Cruz", "signIn": "08:01", "signOut": "17:00", "status": "Present"},
            {"date": date(2024, 2, 1), "empId": "E7", "employeeName": "Ben Reyes", "signIn": "08:20", "signOut": "17:05", "status": "Late"},
            {"date": date(2024, 2, 20), "empId": "E7", "employeeName": "Ben Reyes", "signIn": None, "signOut": None, "status": "Absent"},
        ]
        self._applicants = [
            {"id": 1, "name": "Dan Uy", "email": "dan@example.com", "jobTitle": "Packer", "applicationDate": date(2024, 2, 3), "status": "Hired"},
            {"id": 2, "name": "Eve Go", "email": "eve@example.com", "jobTitle": "Packer", "applicationDate": date(2024, 2, 5), "status": "Interview"},
        ]
        self._programs = {
            "P1": {"id": "P1", "title": "Forklift Safety", "provider": "SafeCo", "startDate": "2024-03-01", "endDate": "2024-03-05"},
        }
        self._enrollments = {
            "P1": [
                {"enrollmentId": 1, "empId": "E7", "employeeName": "Ben Reyes", "status": "Completed", "progress": 100},
                {"enrollmentId": 2, "empId": "E1", "employeeName": "Ana Cruz", "status": "In Progress", "progress": 40},
            ],
        }
        self._runs = [
            _run("R1", date(2024, 1, 1), date(2024, 1, 15), [
                {"empId": "E7", "employeeName": "Ben Reyes", "grossEarning": 9000, "totalDeductionsAmount": -1000, "netPay": 8000, "status": "Paid",
                 "statutory": _shares({"ee": 450, "er": 950}, {"ee": 225, "er": 225}, {"ee": 100, "er": 100}, {"ee": 0, "er": 0})},
                {"empId": "E1", "employeeName": "Ana Cruz", "grossEarning": 15000, "totalDeductionsAmount": 2500, "netPay": 12500, "status": "Paid",
                 "statutory": _shares({"ee": 675, "er": 1425}, {"ee": 375, "er": 375}, {"ee": 100, "er": 100}, {"ee": 1200, "er": 0})},
            ]),
            _run("R2", date(2024, 1, 16), date(2024, 1, 31), [
                {"empId": "E1", "employeeName": "Ana Cruz", "grossEarning": 15000, "totalDeductionsAmount": 2500, "netPay": 12500, "status": "Paid"},
            ]),
            _run("R3", date(2024, 2, 1), date(2024, 2, 15), [
                {"empId": "E7", "employeeName": "Ben Reyes", "earnings": [{"amount": 9000}, {"amount": 500}],
                 "deductions": {"sss": 400, "philhealth": 225}, "otherDeductions": [{"amount": 375}], "status": "Pending"},
            ]),
        ]
        self._kras = [
            {"id": 1, "title": "Quality", "description": "Output quality"},
            {"id": 2, "title": "Delivery", "description": "On-time delivery"},
        ]
        self._kpis = [
            {"id": 10, "kraId": 1, "title": "Defect rate", "weight": 40},
            {"id": 11, "kraId": 1, "title": "Rework", "weight": 35},
            {"id": 12, "kraId": 1, "title": "Audits", "weight": 25},
            {"id": 20, "kraId": 2, "title": "On-time shipments", "weight": 40},
            {"id": 21, "kraId": 2, "title": "Lead time", "weight": 35},
        ]

    def employees(self):
        self.calls.append("employees")
        return list(self._employees)

    def positions(self):
        self.calls.append("positions")
        return list(self._positions)

    def attendance(self, start, end):
        self.calls.append("attendance")
        return [r for r in self._attendance if start <= r["date"] <= end]

    def applicants(self, start, end):
        self.calls.append("applicants")
        return [a for a in self._applicants if start <= a["applicationDate"] <= end]

    def training_program(self, program_id):
        self.calls.append("training_program")
        return self._programs.get(program_id)

    def enrollments(self, program_id):
        self.calls.append("enrollments")
        return list(self._enrollments.get(program_id, []))

    def payroll_runs(self):
        self.calls.append("payroll_runs")
        return list(self._runs)

    def payroll_run(self, run_id):
        self.calls.append("payroll_run")
        return next((r for r in self._runs if r.run_id == run_id), None)

    def kras(self):
        self.calls.append("kras")
        return list(self._kras)

    def kpis(self):
        self.calls.append("kpis")
        return list(self._kpis)


@pytest.fixture
def source():
    return FakeHrSource()


@pytest.fixture
def ctx():
    return ReportContext(generated_on=date(2024, 3, 1), company_name="Test Co", user_email="hr@example.com")


# backend used by the attachment retriever, keyed by leave id
def _backend(request: httpx.Request) -> httpx.Response:
    leave_id = request.url.path.split("/")[3]
    if leave_id == "1":
        return httpx.Response(200, content=b"%PDF-1.4 medical certificate",
                              headers={"content-type": "application/pdf",
                                       "content-disposition": 'attachment; filename="certificate.pdf"'})
    if leave_id == "2":
        return httpx.Response(200, content=b"<!doctype html><div id=root></div>",
                              headers={"content-type": "text/html; charset=utf-8"})
    if leave_id == "3":
        raise httpx.ConnectError("connection refused", request=request)
    if leave_id == "4":
        return httpx.Response(500, content=b"oops", headers={"content-type": "text/plain"})
    return httpx.Response(404, content=b"", headers={"content-type": "application/json"})


@pytest.fixture
def attachment_transport():
    return AttachmentTransport(base_url="http://backend.test", timeout=5, transport=httpx.MockTransport(_backend))


@pytest.fixture
def app(source, attachment_transport):
    app = create_app(source=source, attachment_transport=attachment_transport,
                     evaluation_period=EvaluationPeriodStore())
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
