"""
Record Normalizer - Projects each source row type onto a TimelineEvent.
"""

from typing import Union

from ..models.records import (
    MedicalRecord, UploadedPrescription, Checkup, Medication,
    PrescriptionStatus, MedicationStatus,
)
from ..models.timeline import (
    Importance, RecordEvent, PrescriptionEvent, CheckupEvent, MedicationEvent,
)

SourceItem = Union[MedicalRecord, UploadedPrescription, Checkup, Medication]

DEFAULT_RECORD_IMPORTANCE = Importance.MEDIUM


def normalize_record(
    record: MedicalRecord,
    importance: Importance = DEFAULT_RECORD_IMPORTANCE,
) -> RecordEvent:
    return RecordEvent(
        id=f"record-{record.id}",
        date=record.upload_date,
        title=record.title,
        description=f"Medical record uploaded - {record.category.value}",
        importance=importance,
        data=record,
    )


def normalize_prescription(prescription: UploadedPrescription) -> PrescriptionEvent:
    analyzed = prescription.status == PrescriptionStatus.ANALYZED
    return PrescriptionEvent(
        id=f"prescription-{prescription.id}",
        date=prescription.uploaded_date,
        title=f"Prescription: {prescription.file_name}",
        description=f"Prescription uploaded - {prescription.status.value}",
        importance=Importance.HIGH if analyzed else Importance.MEDIUM,
        data=prescription,
    )


def normalize_checkup(checkup: Checkup) -> CheckupEvent:
    urgent = "urgent" in checkup.type.lower()
    return CheckupEvent(
        id=f"checkup-{checkup.id}",
        date=checkup.date,
        time=checkup.time,
        title=checkup.type,
        description=f"Visit with {checkup.doctor_name} at {checkup.facility}",
        importance=Importance.HIGH if urgent else Importance.MEDIUM,
        data=checkup,
    )


def normalize_medication(medication: Medication) -> MedicationEvent:
    active = medication.status == MedicationStatus.ACTIVE
    return MedicationEvent(
        id=f"medication-{medication.id}",
        date=medication.prescribed_date,
        title=f"{medication.name} Prescribed",
        description=f"{medication.dosage} - {medication.frequency}",
        importance=Importance.MEDIUM if active else Importance.LOW,
        data=medication,
    )


def normalize_event(item: SourceItem, record_importance: Importance = DEFAULT_RECORD_IMPORTANCE):
    """
    Normalize any supported source entity.

    Raises:
        TypeError: If the item is not one of the four source types
    """
    if isinstance(item, MedicalRecord):
        return normalize_record(item, record_importance)
    if isinstance(item, UploadedPrescription):
        return normalize_prescription(item)
    if isinstance(item, Checkup):
        return normalize_checkup(item)
    if isinstance(item, Medication):
        return normalize_medication(item)
    raise TypeError(f"Unsupported timeline source: {type(item).__name__}")
