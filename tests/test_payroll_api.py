from datetime import date

import pytest

from src.hr_payroll.hr_payroll.container import PayrollOptions, wire_services
from src.hr_payroll.hr_payroll.main import create_app
from tests.fakes import InMemoryAttendance, InMemorySalaries, InMemorySettingsRepo, RecordingNotifier, workday


@pytest.fixture
def salaries():
    return InMemorySalaries()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(monkeypatch, salaries, notifier):
    monkeypatch.setenv("APP_ENV", "testing")
    attendance = InMemoryAttendance(
        workday("e1", date(2025, 3, 3), (8, 0), (17, 0), on_time=True)
        + workday("e1", date(2025, 3, 4), (8, 20), (19, 0), on_time=False, minutes_late=20)
        + workday("e2", date(2025, 3, 3), (8, 0), (16, 0), on_time=True)
    )
    container = wire_services(
        conn=None,
        attendance_repo=attendance,
        settings_repo=InMemorySettingsRepo(),
        salaries_repo=salaries,
        options=PayrollOptions(bulk_max_workers=2),
        notifier=notifier,
    )
    app = create_app(container=container)
    return app.test_client()


def test_settings_roundtrip(client):
    assert client.get("/api/payroll/settings").get_json()["default_shift_rate"] == 200000.0

    resp = client.put(
        "/api/payroll/settings",
        json={
            "default_shift_rate": 210000,
            "default_overtime_rate": 30000,
            "late_penalty_per_time": 50000,
            "absence_penalty_per_day": 200000,
        },
    )
    assert resp.status_code == 200
    assert client.get("/api/payroll/settings").get_json()["default_shift_rate"] == 210000.0


def test_negative_setting_is_a_bad_request(client):
    resp = client.put(
        "/api/payroll/settings",
        json={
            "default_shift_rate": -1,
            "default_overtime_rate": 0,
            "late_penalty_per_time": 0,
            "absence_penalty_per_day": 0,
        },
    )
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_working_data_for_employee(client):
    data = client.get("/api/payroll/working-data?employee_id=e1&month=2025-03").get_json()

    assert data["month"] == "2025-03"
    assert data["working_days"] == 2
    assert data["total_hours"] == 19.67
    assert data["overtime_hours"] == 3.67


def test_working_data_with_shift_counts_late_and_early(client):
    data = client.get(
        "/api/payroll/working-data?employee_id=e2&month=2025-03&shift_start=08:00&shift_end=17:00"
    ).get_json()

    assert data["late_count"] == 0
    assert data["early_leave_count"] == 1


def test_calculate_does_not_persist(client, salaries):
    resp = client.post("/api/payroll/calculate", json={"working_days": 20, "kpi_bonus": 100000, "late_count": 1})

    assert resp.status_code == 200
    assert resp.get_json()["net_salary"] == 4050000.0
    assert salaries.upsert_calls == 0


def test_save_then_pay(client, notifier):
    resp = client.post(
        "/api/payroll/salaries",
        json={"employee_id": "e1", "month": "2025-03", "working_days": 2, "notes": "tay"},
    )
    assert resp.status_code == 201
    record = resp.get_json()
    assert record["status"] == "draft"
    assert record["net_salary"] == 400000.0

    paid = client.patch(f"/api/payroll/salaries/{record['record_id']}/status", json={"status": "paid"})
    assert paid.get_json()["status"] == "paid"

    back = client.patch(f"/api/payroll/salaries/{record['record_id']}/status", json={"status": "draft"})
    assert back.status_code == 400

    resave = client.post("/api/payroll/salaries", json={"employee_id": "e1", "month": "2025-03", "working_days": 5})
    assert resave.status_code == 400
    assert client.get("/api/payroll/salaries?start=2025-03&employee_id=e1").get_json()[0]["net_salary"] == 400000.0
    assert [n.type.value for n in notifier.sent] == ["new_salary", "salary_paid"]


def test_save_requires_employee_and_month(client):
    assert client.post("/api/payroll/salaries", json={"month": "2025-03"}).status_code == 400
    assert client.post("/api/payroll/salaries", json={"employee_id": "e1", "month": "03/2025"}).status_code == 400


def test_unknown_record_is_not_found(client):
    assert client.patch("/api/payroll/salaries/42/status", json={"status": "paid"}).status_code == 404


def test_bulk_run_and_listing(client):
    result = client.post("/api/payroll/bulk-run", json={"month": "2025-03"}).get_json()

    assert result["succeeded_employee_ids"] == ["e1", "e2"]
    assert result["failed_count"] == 0

    listed = client.get("/api/payroll/salaries?start=2025-03&employee_id=e1").get_json()
    assert len(listed) == 1
    assert listed[0]["late_count"] == 1
    assert listed[0]["notes"] == "Tự động tính từ chấm công"


def test_statistics_and_csv_export(client):
    client.post("/api/payroll/bulk-run", json={"month": "2025-03"})

    stats = client.get("/api/payroll/statistics?start=2025-02&end=2025-03").get_json()
    assert [m["month"] for m in stats["monthly"]] == ["2025-02", "2025-03"]
    assert stats["monthly"][0]["record_count"] == 0
    assert stats["monthly"][1]["record_count"] == 2
    assert stats["components"]["penalties"]["late_penalty"] == 50000.0

    resp = client.get("/api/payroll/salaries.csv?start=2025-03")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "bang_luong_202503_202503.csv" in resp.headers["Content-Disposition"]
    assert resp.data.decode("utf-8-sig").count("\n") == 3
