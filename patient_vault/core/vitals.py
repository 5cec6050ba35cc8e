"""
Vitals Extractor - Classifies vital signs and derives BMI.

Two families of reference bands exist and are kept apart on purpose:
the display bands drive the instantaneous status badges on a record,
the trend bands drive the normal flag on charted series. They disagree
on blood sugar (126 vs 140 mg/dL) and on a systolic reading of exactly 140.
"""

import math
import re
from typing import Optional, List, Tuple, Iterable

from ..models.records import MedicalRecord, Checkup
from ..models.vitals import (
    VitalStatus, BMICategory, TrendMetric, VitalReading, HeartRateReading,
    BMIReading, VitalsSummary,
)
from .dates import to_calendar_date, to_instant

# Display bands
HEART_RATE_LOW = 60
HEART_RATE_HIGH = 100
SYSTOLIC_HIGH = 140
DIASTOLIC_HIGH = 90
SYSTOLIC_LOW = 90
DIASTOLIC_LOW = 60
BLOOD_SUGAR_DISPLAY_BAND = (70.0, 126.0)

# Trend bands, inclusive on both ends
HEART_RATE_TREND_BAND = (60.0, 100.0)
SYSTOLIC_TREND_BAND = (90.0, 140.0)
BLOOD_SUGAR_TREND_BAND = (70.0, 140.0)

# BMI
BMI_UNDERWEIGHT_BELOW = 18.5
BMI_OVERWEIGHT_FROM = 25.0
BMI_OBESE_FROM = 30.0
BMI_SCALE_MIN = 15.0
BMI_SCALE_MAX = 40.0

_LEADING_INT = re.compile(r"\s*(\d+)")


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_blood_pressure(value: Optional[str]) -> Optional[Tuple[int, Optional[int]]]:
    """
    Parse a "systolic/diastolic" string.

    Returns:
        (systolic, diastolic) where diastolic may be None, or None when the
        systolic part is not numeric
    """
    if not value:
        return None
    parts = value.split("/", 1)
    systolic = _leading_int(parts[0])
    if systolic is None:
        return None
    diastolic = _leading_int(parts[1]) if len(parts) > 1 else None
    return systolic, diastolic


def in_band(value: float, band: Tuple[float, float]) -> bool:
    low, high = band
    return low <= value <= high


def classify_heart_rate(bpm: float) -> VitalStatus:
    if bpm < HEART_RATE_LOW:
        return VitalStatus.LOW
    if bpm > HEART_RATE_HIGH:
        return VitalStatus.HIGH
    return VitalStatus.NORMAL


def classify_blood_pressure(systolic: int, diastolic: Optional[int] = None) -> VitalStatus:
    """High wins over low when a reading trips both."""
    if systolic >= SYSTOLIC_HIGH or (diastolic is not None and diastolic >= DIASTOLIC_HIGH):
        return VitalStatus.HIGH
    if systolic < SYSTOLIC_LOW or (diastolic is not None and diastolic < DIASTOLIC_LOW):
        return VitalStatus.LOW
    return VitalStatus.NORMAL


def classify_blood_sugar(mg_dl: float) -> VitalStatus:
    low, high = BLOOD_SUGAR_DISPLAY_BAND
    if mg_dl < low:
        return VitalStatus.LOW
    if mg_dl > high:
        return VitalStatus.HIGH
    return VitalStatus.NORMAL


def is_trend_normal(metric: TrendMetric, value: float) -> bool:
    """Normal flag for a charted point, using the trend bands."""
    if metric == TrendMetric.HEART_RATE:
        return in_band(value, HEART_RATE_TREND_BAND)
    if metric == TrendMetric.BLOOD_PRESSURE:
        return in_band(value, SYSTOLIC_TREND_BAND)
    if metric == TrendMetric.BLOOD_SUGAR:
        return in_band(value, BLOOD_SUGAR_TREND_BAND)
    # Weight has no reference band
    return True


def extract_vitals(record: MedicalRecord) -> List[VitalReading]:
    """
    Classify every vital present on a record.

    Absent fields produce no reading. A blood pressure whose systolic part
    is not numeric is skipped as well.
    """
    readings: List[VitalReading] = []

    if record.weight is not None:
        readings.append(VitalReading(
            metric=TrendMetric.WEIGHT.value, label="Weight",
            value=record.weight, unit="kg", status=VitalStatus.NORMAL,
        ))

    pressure = parse_blood_pressure(record.blood_pressure)
    if pressure is not None:
        readings.append(VitalReading(
            metric=TrendMetric.BLOOD_PRESSURE.value, label="Blood Pressure",
            value=record.blood_pressure, unit="mmHg",
            status=classify_blood_pressure(*pressure),
        ))

    if record.heart_rate is not None:
        readings.append(VitalReading(
            metric=TrendMetric.HEART_RATE.value, label="Heart Rate",
            value=record.heart_rate, unit="bpm",
            status=classify_heart_rate(record.heart_rate),
        ))

    if record.blood_sugar is not None:
        readings.append(VitalReading(
            metric=TrendMetric.BLOOD_SUGAR.value, label="Blood Sugar",
            value=record.blood_sugar, unit="mg/dL",
            status=classify_blood_sugar(record.blood_sugar),
        ))

    return readings


def classify_bmi(bmi: float) -> BMICategory:
    if bmi < BMI_UNDERWEIGHT_BELOW:
        return BMICategory.UNDERWEIGHT
    if bmi < BMI_OVERWEIGHT_FROM:
        return BMICategory.NORMAL
    if bmi < BMI_OBESE_FROM:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def bmi_position(bmi: float) -> float:
    """Position of a BMI on the 15..40 visual scale, as a clamped percentage."""
    position = (bmi - BMI_SCALE_MIN) / (BMI_SCALE_MAX - BMI_SCALE_MIN) * 100
    return max(0.0, min(100.0, position))


def calculate_bmi(weight: Optional[float], height: Optional[float], updated_at=None) -> Optional[BMIReading]:
    """
    Derive BMI from weight (kg) and height (cm).

    The category is taken from the unrounded value; the reported BMI is
    rounded half-up to one decimal.

    Returns:
        BMIReading, or None unless both measurements are present and positive
    """
    if weight is None or height is None or height <= 0 or weight <= 0:
        return None
    raw = weight / ((height / 100) ** 2)
    bmi = math.floor(raw * 10 + 0.5) / 10
    return BMIReading(
        weight=weight,
        height=height,
        bmi=bmi,
        category=classify_bmi(raw),
        position=bmi_position(bmi),
        updated_at=to_calendar_date(updated_at),
    )


def _records_newest_first(records: Iterable[MedicalRecord]) -> List[MedicalRecord]:
    return sorted(records, key=lambda r: to_instant(r.uploaded_at, r.upload_date), reverse=True)


def _checkups_newest_first(checkups: Iterable[Checkup]) -> List[Checkup]:
    return sorted(
        checkups,
        key=lambda c: to_instant(c.created_at, c.date),
        reverse=True,
    )


def latest_heart_rate(
    records: Iterable[MedicalRecord],
    checkups: Iterable[Checkup] = (),
) -> Optional[HeartRateReading]:
    """Most recent heart rate from records, falling back to checkup vitals."""
    for record in _records_newest_first(records):
        if record.heart_rate is not None:
            return HeartRateReading(
                heart_rate=record.heart_rate,
                status=classify_heart_rate(record.heart_rate),
                source="Medical Record",
                updated_at=record.upload_date,
            )
    for checkup in _checkups_newest_first(checkups):
        if checkup.vitals.heart_rate is not None:
            return HeartRateReading(
                heart_rate=checkup.vitals.heart_rate,
                status=classify_heart_rate(checkup.vitals.heart_rate),
                source="Checkup",
                updated_at=to_calendar_date(checkup.created_at) or checkup.date,
            )
    return None


def latest_bmi(
    records: Iterable[MedicalRecord],
    checkups: Iterable[Checkup] = (),
) -> Optional[BMIReading]:
    """Most recent BMI from a record carrying both weight and height, else from checkups."""
    for record in _records_newest_first(records):
        reading = calculate_bmi(record.weight, record.height, record.upload_date)
        if reading is not None:
            return reading
    for checkup in _checkups_newest_first(checkups):
        reading = calculate_bmi(
            checkup.vitals.weight,
            checkup.vitals.height,
            to_calendar_date(checkup.created_at) or checkup.date,
        )
        if reading is not None:
            return reading
    return None


def summarize_vitals(
    records: Iterable[MedicalRecord],
    checkups: Iterable[Checkup] = (),
) -> VitalsSummary:
    """Readings of the latest visit that recorded vitals, plus the heart-rate and BMI monitors."""
    records = list(records)
    checkups = list(checkups)

    with_vitals = [record for record in records if record.has_vitals]
    latest = max(
        with_vitals,
        key=lambda r: (r.visit_date, to_instant(r.uploaded_at, r.upload_date)),
        default=None,
    )

    return VitalsSummary(
        record_id=latest.id if latest else None,
        readings=extract_vitals(latest) if latest else [],
        heart_rate=latest_heart_rate(records, checkups),
        bmi=latest_bmi(records, checkups),
    )
