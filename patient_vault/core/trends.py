"""
Trend Series Builder - Per-metric chart series over medical records.
"""

from typing import Iterable, List, Optional

from ..models.records import MedicalRecord
from ..models.vitals import TrendMetric, TrendPoint, TrendSeries
from .dates import format_display_date
from .vitals import parse_blood_pressure, is_trend_normal

# Number of most recent points kept per series.
# TODO: confirm with product whether this should become a per-user setting.
TREND_WINDOW = 6

# Chart order and presentation per metric
METRIC_DISPLAY = {
    TrendMetric.WEIGHT: ("Weight", "kg"),
    TrendMetric.BLOOD_PRESSURE: ("Blood Pressure (Systolic)", "mmHg"),
    TrendMetric.HEART_RATE: ("Heart Rate", "bpm"),
    TrendMetric.BLOOD_SUGAR: ("Blood Sugar", "mg/dL"),
}


def extract_metric_value(record: MedicalRecord, metric: TrendMetric) -> Optional[float]:
    """Numeric value of a metric on a record, or None when absent or malformed."""
    if metric == TrendMetric.BLOOD_PRESSURE:
        pressure = parse_blood_pressure(record.blood_pressure)
        return float(pressure[0]) if pressure else None

    value = {
        TrendMetric.WEIGHT: record.weight,
        TrendMetric.HEART_RATE: record.heart_rate,
        TrendMetric.BLOOD_SUGAR: record.blood_sugar,
    }[metric]
    return float(value) if value is not None else None


def build_trend_series(
    records: Iterable[MedicalRecord],
    metric: TrendMetric,
    window: int = TREND_WINDOW,
) -> TrendSeries:
    """
    Build the chart series for one metric.

    Records are ordered by visit date, oldest first, and only the latest
    `window` qualifying points are kept. A metric with no data yields an
    empty series.
    """
    if window < 1:
        raise ValueError(f"Trend window must be positive, got {window}")
    metric = TrendMetric(metric)
    title, unit = METRIC_DISPLAY[metric]

    points: List[TrendPoint] = []
    for record in sorted(records, key=lambda r: r.visit_date):
        value = extract_metric_value(record, metric)
        if value is None:
            continue
        points.append(TrendPoint(
            date=format_display_date(record.visit_date),
            value=value,
            normal=is_trend_normal(metric, value),
        ))

    return TrendSeries(metric=metric, title=title, unit=unit, points=points[-window:])


def build_all_trends(records: Iterable[MedicalRecord], window: int = TREND_WINDOW) -> List[TrendSeries]:
    """All four series in chart order."""
    records = list(records)
    return [build_trend_series(records, metric, window) for metric in METRIC_DISPLAY]
