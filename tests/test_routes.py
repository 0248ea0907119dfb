# tests/test_routes.py
# blueprint tests via the Flask test client

import pytest

from hrms import create_app
from hrms.reports.errors import UnknownHandler
from hrms.reports.registry import REPORT_DEFINITIONS


def test_list_reports(client):
    resp = client.get("/reports")
    assert resp.status_code == 200
    items = resp.get_json()
    assert {i["id"] for i in items} == set(REPORT_DEFINITIONS)
    for i in items:
        assert i["requiresParams"] == ("paramsComponent" in i)


def test_list_reports_by_category(client):
    items = client.get("/reports", query_string={"category": "Training & Development"}).get_json()
    assert [i["id"] for i in items] == ["training_program_summary"]


def test_generate_pdf(client):
    resp = client.post("/reports/daily_attendance_summary",
                       json={"startDate": "2024-02-01", "endDate": "2024-02-10"})
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")
    assert "attachment" in resp.headers["Content-Disposition"]


def test_generate_from_form_body(client):
    resp = client.post("/reports/training_program_summary", data={"programId": "P1"})
    assert resp.status_code == 200
    assert resp.data.startswith(b"%PDF")


def test_unknown_report(client):
    resp = client.post("/reports/nope", json={})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Unknown report type."


def test_invalid_range_names_field(client):
    resp = client.post("/reports/recruitment_activity",
                       json={"startDate": "2024-02-10", "endDate": "2024-02-01"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "endDate"


def test_missing_field(client):
    resp = client.post("/reports/payroll_history", json={})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "employeeId"


def test_attachment_passthrough(client):
    resp = client.post("/reports/leave_attachment", json={"leaveId": 1})
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data == b"%PDF-1.4 medical certificate"


@pytest.mark.parametrize("leave_id, status", [(2, 404), (404, 404), (3, 502), (4, 502)])
def test_attachment_failures(client, leave_id, status):
    resp = client.post("/reports/leave_attachment", json={"leaveId": leave_id})
    assert resp.status_code == status


def test_attachment_rejects_path_like_leave_id(client):
    resp = client.post("/reports/leave_attachment", json={"leaveId": "../../payroll/export?x="})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "leaveId"


def test_handler_drift_is_500(app, client):
    del app.extensions["hrms.report_handlers"]["generateKraSummaryReport"]
    resp = client.post("/reports/kra_kpi_summary", json={})
    assert resp.status_code == 500


def test_create_app_rejects_drift(source, monkeypatch):
    def broken(transport=None, handlers=None):
        return {}

    monkeypatch.setattr("hrms.reports.service.init_report_handlers", broken)
    with pytest.raises(UnknownHandler):
        create_app(source=source)


# --- evaluation period ---

def test_active_period_lifecycle(client):
    assert client.get("/performance/active-period").get_json() == {
        "periodStart": None, "periodEnd": None, "isActive": False,
    }

    resp = client.put("/performance/active-period", json={"periodStart": "2024-05-01", "periodEnd": "2024-05-31"})
    assert resp.status_code == 200
    assert resp.get_json()["isActive"] is True

    resp = client.put("/performance/active-period", json={"periodStart": "2024-06-10", "periodEnd": "2024-06-01"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "periodEnd"
    assert client.get("/performance/active-period").get_json()["periodStart"] == "2024-05-01"

    resp = client.put("/performance/active-period", data="null", content_type="application/json")
    assert resp.status_code == 200
    assert resp.get_json()["isActive"] is False


def test_delete_active_period(client):
    client.put("/performance/active-period", json={"periodStart": "2024-05-01", "periodEnd": "2024-05-31"})
    resp = client.delete("/performance/active-period")
    assert resp.get_json() == {"periodStart": None, "periodEnd": None, "isActive": False}


def test_put_active_period_requires_json(client):
    resp = client.put("/performance/active-period", data="periodStart=2024-05-01")
    assert resp.status_code == 400
