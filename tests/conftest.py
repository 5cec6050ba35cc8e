"""
Shared test fixtures and configuration.
"""

import itertools
import os

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("STORAGE_TYPE", "local")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/patient_vault_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from patient_vault.models import MedicalRecord, UploadedPrescription, Checkup, Medication

USER_ID = "user-1"


def record_row(n: int, **overrides) -> dict:
    row = {
        "id": f"rec-{n}",
        "user_id": USER_ID,
        "title": f"Visit {n}",
        "doctor_name": "Dr. Rivera",
        "visit_date": "2024-01-01",
        "category": "checkup",
        "file_type": "PDF",
        "file_size": "1.2 MB",
        "uploaded_at": "2024-01-01T09:30:00+00:00",
        "file_url": None,
        "weight": None,
        "height": None,
        "blood_pressure": None,
        "heart_rate": None,
        "blood_sugar": None,
    }
    row.update(overrides)
    return row


def prescription_row(n: int, **overrides) -> dict:
    row = {
        "id": f"rx-{n}",
        "user_id": USER_ID,
        "file_name": f"prescription-{n}.pdf",
        "file_url": f"https://files.example.com/rx-{n}.pdf",
        "uploaded_at": "2024-01-01T12:00:00+00:00",
        "file_type": "application/pdf",
        "file_size": "240 KB",
        "status": "new",
        "ai_summary": None,
    }
    row.update(overrides)
    return row


def checkup_row(n: int, **overrides) -> dict:
    row = {
        "id": f"chk-{n}",
        "user_id": USER_ID,
        "type": "Annual Physical",
        "doctor_name": "Dr. Chen",
        "facility": "City Clinic",
        "date": "2024-01-01",
        "time": "10:00",
        "duration": 30,
        "symptoms": [],
        "diagnosis": "Healthy",
        "treatment": "None",
        "follow_up_date": None,
        "vitals": {},
        "notes": "",
        "created_at": "2024-01-01T10:45:00+00:00",
    }
    row.update(overrides)
    return row


def medication_row(n: int, **overrides) -> dict:
    row = {
        "id": f"med-{n}",
        "user_id": USER_ID,
        "name": "Lisinopril",
        "dosage": "10mg",
        "frequency": "Once daily",
        "prescribed_by": "Dr. Chen",
        "prescribed_date": "2024-01-01",
        "start_date": "2024-01-02",
        "end_date": None,
        "status": "active",
        "notes": "",
        "side_effects": [],
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_record():
    counter = itertools.count(1)

    def _make(**overrides) -> MedicalRecord:
        return MedicalRecord.from_row(record_row(next(counter), **overrides))
    return _make


@pytest.fixture
def make_prescription():
    counter = itertools.count(1)

    def _make(**overrides) -> UploadedPrescription:
        return UploadedPrescription.from_row(prescription_row(next(counter), **overrides))
    return _make


@pytest.fixture
def make_checkup():
    counter = itertools.count(1)

    def _make(**overrides) -> Checkup:
        return Checkup.from_row(checkup_row(next(counter), **overrides))
    return _make


@pytest.fixture
def make_medication():
    counter = itertools.count(1)

    def _make(**overrides) -> Medication:
        return Medication.from_row(medication_row(next(counter), **overrides))
    return _make


@pytest.fixture
def anyio_backend():
    return "asyncio"
