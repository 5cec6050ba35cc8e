"""
Vitals Models - Classified readings, BMI and per-metric trend series.
"""

from datetime import date
from enum import Enum
from typing import Optional, List, Union
from pydantic import BaseModel, computed_field


class VitalStatus(str, Enum):
    """Instantaneous status badge for a single reading."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class TrendMetric(str, Enum):
    """Metrics that can be charted over time."""
    WEIGHT = "weight"
    BLOOD_PRESSURE = "blood_pressure"  # systolic component
    HEART_RATE = "heart_rate"
    BLOOD_SUGAR = "blood_sugar"


class VitalReading(BaseModel):
    """One vital sign from a record, classified against its display band."""
    metric: str
    label: str
    value: Union[float, str]
    unit: str
    status: VitalStatus

    @property
    def normal(self) -> bool:
        return self.status == VitalStatus.NORMAL


class HeartRateReading(BaseModel):
    heart_rate: int  # bpm
    status: VitalStatus
    source: str  # "Medical Record" or "Checkup"
    updated_at: Optional[date] = None


class BMIReading(BaseModel):
    weight: float  # kg
    height: float  # cm
    bmi: float
    category: BMICategory
    position: float  # 0-100 on the 15..40 scale
    updated_at: Optional[date] = None


class TrendPoint(BaseModel):
    """One sample in a per-metric series."""
    date: str  # display formatted
    value: float
    normal: bool


class TrendSeries(BaseModel):
    """Chronological series for one metric, oldest first."""
    metric: TrendMetric
    title: str
    unit: str
    points: List[TrendPoint]

    @computed_field
    @property
    def latest(self) -> Optional[TrendPoint]:
        return self.points[-1] if self.points else None

    @computed_field
    @property
    def status(self) -> Optional[str]:
        """Badge for the latest point; None when there is no data."""
        if not self.points:
            return None
        return "Normal" if self.points[-1].normal else "Monitor"


class VitalsSummary(BaseModel):
    """Dashboard snapshot: latest record vitals plus heart-rate and BMI monitors."""
    record_id: Optional[str] = None
    readings: List[VitalReading]
    heart_rate: Optional[HeartRateReading] = None
    bmi: Optional[BMIReading] = None
