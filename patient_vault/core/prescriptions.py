"""
Prescription analysis workflow.

    new --analyze--> processing --success--> analyzed
                                --failure--> error

analyzed and error are terminal. A prescription left in processing stays
there; nothing here times it out or retries it.
"""

from enum import Enum

from ..models.records import PrescriptionStatus


class AnalysisEvent(str, Enum):
    ANALYZE = "analyze"
    SUCCESS = "success"
    FAILURE = "failure"


class InvalidTransitionError(ValueError):
    """Raised when an event is not allowed from the current status."""

    def __init__(self, status: PrescriptionStatus, event: AnalysisEvent):
        self.status = status
        self.event = event
        super().__init__(f"Cannot apply '{event.value}' to a prescription in status '{status.value}'")


TRANSITIONS = {
    (PrescriptionStatus.NEW, AnalysisEvent.ANALYZE): PrescriptionStatus.PROCESSING,
    (PrescriptionStatus.PROCESSING, AnalysisEvent.SUCCESS): PrescriptionStatus.ANALYZED,
    (PrescriptionStatus.PROCESSING, AnalysisEvent.FAILURE): PrescriptionStatus.ERROR,
}

TERMINAL_STATUSES = frozenset({PrescriptionStatus.ANALYZED, PrescriptionStatus.ERROR})


def next_status(status: PrescriptionStatus, event: AnalysisEvent) -> PrescriptionStatus:
    status = PrescriptionStatus(status)
    event = AnalysisEvent(event)
    try:
        return TRANSITIONS[(status, event)]
    except KeyError:
        raise InvalidTransitionError(status, event) from None


def is_terminal(status: PrescriptionStatus) -> bool:
    return PrescriptionStatus(status) in TERMINAL_STATUSES
