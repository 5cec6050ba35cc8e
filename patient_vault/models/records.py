"""
Record Models - Typed views of the rows held in the record store.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from ..core.dates import to_calendar_date


class RecordCategory(str, Enum):
    """Closed set of medical record categories."""
    PRESCRIPTION = "prescription"
    LAB_RESULTS = "lab-results"
    IMAGING = "imaging"
    CHECKUP = "checkup"
    OTHER = "other"


class PrescriptionStatus(str, Enum):
    """Analysis workflow status of an uploaded prescription."""
    NEW = "new"
    PROCESSING = "processing"
    ANALYZED = "analyzed"
    ERROR = "error"


class MedicationStatus(str, Enum):
    """Medication course status."""
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCONTINUED = "discontinued"


def _with_string_id(row: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a row, normalizing the opaque id to a string."""
    data = dict(row)
    if data.get("id") is not None:
        data["id"] = str(data["id"])
    return data


class MedicalRecord(BaseModel):
    """A single clinical document or encounter."""
    id: str
    title: str
    doctor_name: str
    visit_date: date
    category: RecordCategory
    file_type: str = "PDF"
    file_size: str = "0 MB"
    upload_date: date
    uploaded_at: Optional[datetime] = None  # full upload timestamp, orders same-day uploads
    file_url: Optional[str] = None

    # Vitals, each independently optional
    weight: Optional[float] = None  # kg
    height: Optional[float] = None  # cm
    blood_pressure: Optional[str] = None  # "systolic/diastolic"
    heart_rate: Optional[int] = None  # bpm
    blood_sugar: Optional[float] = None  # mg/dL

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "MedicalRecord":
        """Build from a `medical_records` row; upload_date is the date part of uploaded_at."""
        data = _with_string_id(row)
        if "upload_date" not in data:
            data["upload_date"] = to_calendar_date(data.get("uploaded_at"))
        return cls.model_validate(data)

    @property
    def has_vitals(self) -> bool:
        return any(
            value is not None
            for value in (self.weight, self.height, self.blood_pressure, self.heart_rate, self.blood_sugar)
        )


class UploadedPrescription(BaseModel):
    """A prescription document with an analysis workflow."""
    id: str
    user_id: str
    file_name: str
    file_url: str
    uploaded_at: datetime
    file_type: str
    file_size: str
    status: PrescriptionStatus = PrescriptionStatus.NEW
    ai_summary: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "UploadedPrescription":
        data = _with_string_id(row)
        if data.get("user_id") is not None:
            data["user_id"] = str(data["user_id"])
        return cls.model_validate(data)

    @property
    def uploaded_date(self) -> date:
        return self.uploaded_at.date()


class CheckupVitals(BaseModel):
    """Vitals captured during a checkup, stored as a JSON column with camelCase keys."""
    heart_rate: Optional[int] = Field(None, alias="heartRate")
    blood_pressure: Optional[str] = Field(None, alias="bloodPressure")
    weight: Optional[float] = None
    height: Optional[float] = None
    blood_sugar: Optional[float] = Field(None, alias="bloodSugar")
    temperature: Optional[float] = None

    class Config:
        populate_by_name = True


class Checkup(BaseModel):
    """A scheduled or completed doctor visit."""
    id: str
    type: str
    doctor_name: str
    facility: str
    date: date
    time: Optional[str] = None
    duration: int = 30  # minutes
    symptoms: List[str] = Field(default_factory=list)
    diagnosis: str = ""
    treatment: str = ""
    follow_up_date: Optional[date] = None
    vitals: CheckupVitals = Field(default_factory=CheckupVitals)
    notes: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Checkup":
        data = _with_string_id(row)
        # Nullable array/json columns
        for key in ("symptoms", "vitals", "notes", "diagnosis", "treatment"):
            if data.get(key) is None:
                data.pop(key, None)
        return cls.model_validate(data)


class Medication(BaseModel):
    """A prescribed medication course."""
    id: str
    name: str
    dosage: str
    frequency: str
    prescribed_by: str
    prescribed_date: date
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: MedicationStatus = MedicationStatus.ACTIVE
    notes: str = ""
    side_effects: List[str] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Medication":
        data = _with_string_id(row)
        for key in ("side_effects", "notes"):
            if data.get(key) is None:
                data.pop(key, None)
        return cls.model_validate(data)
