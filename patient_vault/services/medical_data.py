"""
Medical Data Service - Fetches a user's rows from the record store and feeds
them through the timeline, vitals and trend builders.

Fetch failures never reach the aggregation code: a collection that cannot be
loaded is treated as empty and a warning is logged.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..core.filters import CategoryFilter, TimeWindow, apply_filters
from ..core.logging_config import VaultLoggerAdapter
from ..core.normalizer import DEFAULT_RECORD_IMPORTANCE
from ..core.prescriptions import AnalysisEvent, next_status
from ..core.timeline import build_timeline
from ..core.trends import build_trend_series, build_all_trends
from ..core.vitals import summarize_vitals
from ..models import (
    MedicalRecord, UploadedPrescription, Checkup, Medication, Importance,
    TimelineEvent, TimelineView, TrendMetric, TrendSeries, VitalsSummary,
)
from ..storage import (
    RecordStore, StoreError,
    MEDICAL_RECORDS, UPLOADED_PRESCRIPTIONS, CHECKUPS, MEDICATIONS,
)

logger = logging.getLogger(__name__)

# Produces the AI summary for a prescription document
PrescriptionAnalyzer = Callable[[UploadedPrescription], Awaitable[str]]


class MedicalData(BaseModel):
    """All source collections for one user."""
    records: List[MedicalRecord] = Field(default_factory=list)
    prescriptions: List[UploadedPrescription] = Field(default_factory=list)
    checkups: List[Checkup] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)


class MedicalDataService:
    """
    Per-user facade over the record store.
    Every call re-fetches; nothing is cached between calls.
    """

    def __init__(
        self,
        store: RecordStore,
        user_id: str,
        fetch_timeout: float = 15.0,
        record_importance: Importance = DEFAULT_RECORD_IMPORTANCE,
    ):
        """
        Initialize the service for a specific user.

        Args:
            store: Record store implementation to read from
            user_id: User identifier
            fetch_timeout: Deadline in seconds for loading all collections
            record_importance: Importance given to medical record events
        """
        self.store = store
        self.user_id = user_id
        self.fetch_timeout = fetch_timeout
        self.record_importance = Importance(record_importance)
        self.logger = VaultLoggerAdapter(logger, {"user_id": user_id})

    async def _fetch_rows(self, table: str, order_by: str) -> List[Dict[str, Any]]:
        try:
            return await self.store.select(table, self.user_id, order_by=order_by, descending=True)
        except StoreError as e:
            self.logger.warning(f"Fetching {table} failed, continuing without it: {e}")
            return []

    def _parse_rows(self, table: str, rows: List[Dict[str, Any]], parse: Callable[[Dict[str, Any]], Any]) -> list:
        items = []
        for row in rows:
            try:
                items.append(parse(row))
            except (ValueError, TypeError) as e:
                self.logger.warning(f"Skipping malformed {table} row {row.get('id')!r}: {e}")
        return items

    async def fetch_medical_records(self) -> List[MedicalRecord]:
        rows = await self._fetch_rows(MEDICAL_RECORDS, "visit_date")
        return self._parse_rows(MEDICAL_RECORDS, rows, MedicalRecord.from_row)

    async def fetch_prescriptions(self) -> List[UploadedPrescription]:
        rows = await self._fetch_rows(UPLOADED_PRESCRIPTIONS, "uploaded_at")
        return self._parse_rows(UPLOADED_PRESCRIPTIONS, rows, UploadedPrescription.from_row)

    async def fetch_checkups(self) -> List[Checkup]:
        rows = await self._fetch_rows(CHECKUPS, "date")
        return self._parse_rows(CHECKUPS, rows, Checkup.from_row)

    async def fetch_medications(self) -> List[Medication]:
        rows = await self._fetch_rows(MEDICATIONS, "prescribed_date")
        return self._parse_rows(MEDICATIONS, rows, Medication.from_row)

    async def fetch_all(self) -> MedicalData:
        """
        Load all four collections concurrently under one deadline.

        Cancelling the awaiting task cancels the in-flight fetches as well,
        so a caller that goes away never receives late results.

        Returns:
            MedicalData, with empty collections for anything that failed
        """
        try:
            records, prescriptions, checkups, medications = await asyncio.wait_for(
                asyncio.gather(
                    self.fetch_medical_records(),
                    self.fetch_prescriptions(),
                    self.fetch_checkups(),
                    self.fetch_medications(),
                ),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError:
            self.logger.warning(f"Medical data fetch timed out after {self.fetch_timeout}s, continuing with empty data")
            return MedicalData()

        self.logger.info(
            f"Fetched {len(records)} records, {len(prescriptions)} prescriptions, "
            f"{len(checkups)} checkups, {len(medications)} medications"
        )
        return MedicalData(
            records=records,
            prescriptions=prescriptions,
            checkups=checkups,
            medications=medications,
        )

    async def get_events(self) -> List[TimelineEvent]:
        """Unfiltered timeline, newest first."""
        data = await self.fetch_all()
        return build_timeline(
            records=data.records,
            prescriptions=data.prescriptions,
            checkups=data.checkups,
            medications=data.medications,
            record_importance=self.record_importance,
        )

    async def get_timeline(
        self,
        now: Union[date, datetime],
        search: str = "",
        category: Union[CategoryFilter, str] = CategoryFilter.ALL,
        window: Union[TimeWindow, str] = TimeWindow.ALL,
    ) -> TimelineView:
        """Filtered and day-grouped timeline."""
        events = await self.get_events()
        return apply_filters(events, now, search=search, category=category, window=window)

    async def get_trend(self, metric: TrendMetric) -> TrendSeries:
        return build_trend_series(await self.fetch_medical_records(), metric)

    async def get_trends(self) -> List[TrendSeries]:
        return build_all_trends(await self.fetch_medical_records())

    async def get_vitals_summary(self) -> VitalsSummary:
        records, checkups = await asyncio.gather(self.fetch_medical_records(), self.fetch_checkups())
        return summarize_vitals(records, checkups)

    async def analyze_prescription(
        self,
        prescription_id: str,
        analyzer: PrescriptionAnalyzer,
    ) -> UploadedPrescription:
        """
        Run the analysis workflow for a new prescription.

        The row moves to processing before the analyzer is called, then to
        analyzed with the returned summary, or to error if the analyzer raises.

        Args:
            prescription_id: Prescription identifier
            analyzer: Coroutine function returning the summary text

        Returns:
            UploadedPrescription: The prescription in its final status

        Raises:
            LookupError: If the user has no prescription with that id
            InvalidTransitionError: If the prescription is not in status new
            StoreError: If a status update cannot be written
        """
        prescriptions = await self.fetch_prescriptions()
        prescription = next((p for p in prescriptions if p.id == str(prescription_id)), None)
        if prescription is None:
            raise LookupError(f"Prescription not found: {prescription_id}")

        status = next_status(prescription.status, AnalysisEvent.ANALYZE)
        await self.store.update(UPLOADED_PRESCRIPTIONS, prescription.id, {"status": status.value})
        prescription = prescription.model_copy(update={"status": status})
        self.logger.info(f"Analyzing prescription {prescription.id}")

        try:
            summary = await analyzer(prescription)
        except Exception as e:
            self.logger.error(f"Analysis of prescription {prescription.id} failed: {e}", exc_info=True)
            status = next_status(status, AnalysisEvent.FAILURE)
            await self.store.update(UPLOADED_PRESCRIPTIONS, prescription.id, {"status": status.value})
            return prescription.model_copy(update={"status": status})

        status = next_status(status, AnalysisEvent.SUCCESS)
        await self.store.update(
            UPLOADED_PRESCRIPTIONS, prescription.id, {"status": status.value, "ai_summary": summary}
        )
        self.logger.info(f"Prescription {prescription.id} analyzed")
        return prescription.model_copy(update={"status": status, "ai_summary": summary})
