"""
Timeline Models - The unified event projection over all record sources.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Optional, List, Dict, Any, Literal, Union
from pydantic import BaseModel, Field

from .records import MedicalRecord, UploadedPrescription, Checkup, Medication


class EventType(str, Enum):
    """Source kind of a timeline event."""
    RECORD = "record"
    PRESCRIPTION = "prescription"
    CHECKUP = "checkup"
    MEDICATION = "medication"
    EMERGENCY = "emergency"


class Importance(str, Enum):
    """Visual emphasis attached to a timeline event."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TimelineEventBase(BaseModel):
    """Fields shared by every timeline event variant."""
    id: str  # "<type>-<source id>"
    date: date
    time: Optional[str] = None
    title: str
    description: str
    importance: Importance


class RecordEvent(TimelineEventBase):
    type: Literal[EventType.RECORD] = EventType.RECORD
    data: MedicalRecord


class PrescriptionEvent(TimelineEventBase):
    type: Literal[EventType.PRESCRIPTION] = EventType.PRESCRIPTION
    data: UploadedPrescription


class CheckupEvent(TimelineEventBase):
    type: Literal[EventType.CHECKUP] = EventType.CHECKUP
    data: Checkup


class MedicationEvent(TimelineEventBase):
    type: Literal[EventType.MEDICATION] = EventType.MEDICATION
    data: Medication


class EmergencyEvent(TimelineEventBase):
    type: Literal[EventType.EMERGENCY] = EventType.EMERGENCY
    data: Dict[str, Any] = Field(default_factory=dict)


TimelineEvent = Annotated[
    Union[RecordEvent, PrescriptionEvent, CheckupEvent, MedicationEvent, EmergencyEvent],
    Field(discriminator="type"),
]


class TimelineDay(BaseModel):
    """All events that fall on one calendar day."""
    date: date
    events: List[TimelineEvent]


class TimelineView(BaseModel):
    """Filtered timeline, flat and grouped by day."""
    total: int
    events: List[TimelineEvent]
    days: List[TimelineDay]
