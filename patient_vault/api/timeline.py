"""
Timeline API endpoints - Read-only views over a user's medical data.
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..core.filters import CategoryFilter, TimeWindow
from ..models import Importance, TimelineView, TrendMetric, TrendSeries, VitalsSummary
from ..services import MedicalDataService
from ..storage import get_record_store

router = APIRouter(prefix="/users/{user_id}", tags=["timeline"])


def get_medical_data_service(user_id: str) -> MedicalDataService:
    """Build a service scoped to the user in the request path."""
    return MedicalDataService(
        get_record_store(),
        user_id,
        fetch_timeout=settings.fetch_timeout_seconds,
        record_importance=Importance(settings.timeline_record_importance),
    )


@router.get("/timeline", response_model=TimelineView)
async def get_timeline(
    search: str = Query(default="", max_length=200),
    category: CategoryFilter = CategoryFilter.ALL,
    window: TimeWindow = TimeWindow.ALL,
    service: MedicalDataService = Depends(get_medical_data_service),
):
    """
    Get the user's timeline, filtered and grouped by day.

    Args:
        search: Case-insensitive text matched against title and description
        category: Event type, or "all"
        window: 1month, 3months, 6months, 1year, or "all"

    Returns:
        TimelineView: Matching events, newest first, flat and per day
    """
    return await service.get_timeline(date.today(), search=search, category=category, window=window)


@router.get("/trends", response_model=List[TrendSeries])
async def get_trends(service: MedicalDataService = Depends(get_medical_data_service)):
    """Get the weight, blood pressure, heart rate and blood sugar series."""
    return await service.get_trends()


@router.get("/trends/{metric}", response_model=TrendSeries)
async def get_trend(
    metric: TrendMetric,
    service: MedicalDataService = Depends(get_medical_data_service),
):
    """Get the series for one metric; an empty series means no data."""
    return await service.get_trend(metric)


@router.get("/vitals", response_model=VitalsSummary)
async def get_vitals(service: MedicalDataService = Depends(get_medical_data_service)):
    """Get the latest classified vitals with the heart-rate and BMI monitors."""
    return await service.get_vitals_summary()
