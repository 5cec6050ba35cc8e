"""
Timeline Aggregator - Merges normalized events from every source into one
chronological stream and groups it by calendar day.

The timeline is derived data: it is rebuilt from the source collections on
every call and never persisted.
"""

from datetime import date
from itertools import groupby
from typing import Iterable, List, Sequence

from ..models.records import MedicalRecord, UploadedPrescription, Checkup, Medication
from ..models.timeline import Importance, TimelineEvent, TimelineDay
from .dates import to_calendar_date
from .normalizer import (
    DEFAULT_RECORD_IMPORTANCE, normalize_record, normalize_prescription,
    normalize_checkup, normalize_medication,
)


def _event_day(event: TimelineEvent) -> date:
    # Undated events sink to the end
    return to_calendar_date(event.date) or date.min


def sort_events(events: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    """Most recent first; events on the same date keep their input order."""
    return sorted(events, key=_event_day, reverse=True)


def build_timeline(
    records: Sequence[MedicalRecord] = (),
    prescriptions: Sequence[UploadedPrescription] = (),
    checkups: Sequence[Checkup] = (),
    medications: Sequence[Medication] = (),
    record_importance: Importance = DEFAULT_RECORD_IMPORTANCE,
) -> List[TimelineEvent]:
    """
    Normalize and merge all source collections.

    Sources are concatenated in the order records, prescriptions, checkups,
    medications before the stable sort, which fixes the order of same-day
    events across sources.

    Args:
        records: Medical records
        prescriptions: Uploaded prescriptions
        checkups: Checkups
        medications: Medications
        record_importance: Importance assigned to medical record events

    Returns:
        List of events sorted by date, newest first
    """
    events: List[TimelineEvent] = []
    events.extend(normalize_record(record, record_importance) for record in records)
    events.extend(normalize_prescription(prescription) for prescription in prescriptions)
    events.extend(normalize_checkup(checkup) for checkup in checkups)
    events.extend(normalize_medication(medication) for medication in medications)
    return sort_events(events)


def group_by_day(events: Iterable[TimelineEvent]) -> List[TimelineDay]:
    """Partition events by calendar day, newest day first."""
    return [
        TimelineDay(date=day, events=list(day_events))
        for day, day_events in groupby(sort_events(events), key=_event_day)
    ]
