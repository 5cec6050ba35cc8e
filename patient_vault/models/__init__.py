"""Models module."""

from .records import (
    RecordCategory, PrescriptionStatus, MedicationStatus,
    MedicalRecord, UploadedPrescription, CheckupVitals, Checkup, Medication,
)
from .timeline import (
    EventType, Importance, TimelineEvent, RecordEvent, PrescriptionEvent,
    CheckupEvent, MedicationEvent, EmergencyEvent, TimelineDay, TimelineView,
)
from .vitals import (
    VitalStatus, BMICategory, TrendMetric, VitalReading, HeartRateReading,
    BMIReading, TrendPoint, TrendSeries, VitalsSummary,
)

__all__ = [
    'RecordCategory', 'PrescriptionStatus', 'MedicationStatus',
    'MedicalRecord', 'UploadedPrescription', 'CheckupVitals', 'Checkup', 'Medication',
    'EventType', 'Importance', 'TimelineEvent', 'RecordEvent', 'PrescriptionEvent',
    'CheckupEvent', 'MedicationEvent', 'EmergencyEvent', 'TimelineDay', 'TimelineView',
    'VitalStatus', 'BMICategory', 'TrendMetric', 'VitalReading', 'HeartRateReading',
    'BMIReading', 'TrendPoint', 'TrendSeries', 'VitalsSummary',
]
