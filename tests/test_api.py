"""
Tests for the HTTP endpoints.
"""

import json
import logging
from datetime import date

import pytest
from fastapi.testclient import TestClient

from patient_vault.main import app
from patient_vault.storage import (
    LocalRecordStore, init_record_store,
    MEDICAL_RECORDS, UPLOADED_PRESCRIPTIONS, CHECKUPS, MEDICATIONS,
)

from conftest import USER_ID, record_row, prescription_row, checkup_row, medication_row


@pytest.fixture
def client(tmp_path):
    today = date.today().isoformat()
    tables = {
        MEDICAL_RECORDS: [
            record_row(1, title="Cardiology follow-up", visit_date=today,
                       uploaded_at=f"{today}T09:00:00+00:00",
                       heart_rate=110, weight=70, height=175, blood_pressure="150/95"),
            record_row(2, title="Blood panel", visit_date="2000-01-10",
                       uploaded_at="2000-01-10T09:00:00+00:00", heart_rate=72, blood_sugar=90),
            record_row(3, user_id="user-2", title="Someone else's record"),
        ],
        UPLOADED_PRESCRIPTIONS: [prescription_row(1, uploaded_at="2000-02-01T08:00:00+00:00")],
        CHECKUPS: [checkup_row(1, date="2000-03-01", type="Urgent Care")],
        MEDICATIONS: [medication_row(1, prescribed_date="2000-04-01")],
    }
    for table, rows in tables.items():
        (tmp_path / f"{table}.json").write_text(json.dumps(rows), encoding="utf-8")

    init_record_store(LocalRecordStore(str(tmp_path)))
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_timeline(client):
    response = client.get(f"/users/{USER_ID}/timeline")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    assert [e["type"] for e in body["events"]] == [
        "record", "medication", "checkup", "prescription", "record",
    ]
    assert body["events"][0]["title"] == "Cardiology follow-up"
    assert len(body["days"]) == 5


def test_timeline_is_scoped_to_user(client):
    body = client.get("/users/user-2/timeline").json()
    assert body["total"] == 1
    assert body["events"][0]["title"] == "Someone else's record"


def test_timeline_search_and_category(client):
    body = client.get(
        f"/users/{USER_ID}/timeline", params={"search": "URGENT", "category": "checkup"}
    ).json()
    assert body["total"] == 1
    assert body["events"][0]["importance"] == "high"


def test_timeline_window(client):
    body = client.get(f"/users/{USER_ID}/timeline", params={"window": "1month"}).json()
    assert [e["title"] for e in body["events"]] == ["Cardiology follow-up"]


def test_timeline_rejects_unknown_window(client):
    response = client.get(f"/users/{USER_ID}/timeline", params={"window": "2weeks"})
    assert response.status_code == 422


def test_trends(client):
    response = client.get(f"/users/{USER_ID}/trends")

    assert response.status_code == 200
    series = {s["metric"]: s for s in response.json()}
    assert list(series) == ["weight", "blood_pressure", "heart_rate", "blood_sugar"]

    heart_rate = series["heart_rate"]
    assert [p["value"] for p in heart_rate["points"]] == [72, 110]
    assert heart_rate["latest"]["value"] == 110
    assert heart_rate["status"] == "Monitor"
    assert series["blood_sugar"]["status"] == "Normal"


def test_single_trend(client):
    response = client.get(f"/users/{USER_ID}/trends/blood_pressure")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Blood Pressure (Systolic)"
    assert [p["value"] for p in body["points"]] == [150]
    assert body["points"][0]["normal"] is False


def test_single_trend_unknown_metric(client):
    response = client.get(f"/users/{USER_ID}/trends/cholesterol")
    assert response.status_code == 422


def test_vitals(client):
    response = client.get(f"/users/{USER_ID}/vitals")

    assert response.status_code == 200
    body = response.json()
    assert body["record_id"] == "rec-1"
    statuses = {r["label"]: r["status"] for r in body["readings"]}
    assert statuses == {
        "Weight": "normal",
        "Blood Pressure": "high",
        "Heart Rate": "high",
    }
    assert body["heart_rate"]["heart_rate"] == 110
    assert body["bmi"]["bmi"] == 22.9
    assert body["bmi"]["category"] == "Normal"


def test_vitals_no_data(client):
    body = client.get("/users/nobody/vitals").json()
    assert body["readings"] == []
    assert body["heart_rate"] is None
    assert body["bmi"] is None


def test_request_logged_without_body(client, caplog):
    caplog.set_level(logging.INFO, logger="patient_vault.middleware.logging_middleware")

    client.get(f"/users/{USER_ID}/vitals")

    messages = [r.getMessage() for r in caplog.records if r.name == "patient_vault.middleware.logging_middleware"]
    assert any(m.startswith(f"GET /users/{USER_ID}/vitals - 200") for m in messages)
    assert not any("22.9" in m for m in messages)


def test_failed_request_logs_reason(client, caplog):
    caplog.set_level(logging.INFO, logger="patient_vault.middleware.logging_middleware")

    client.get(f"/users/{USER_ID}/trends/cholesterol")

    records = [r for r in caplog.records if r.name == "patient_vault.middleware.logging_middleware"]
    assert records[-1].levelno == logging.WARNING
    assert "error_reason=" in records[-1].getMessage()
