"""Tyre tread assessment."""

import math
from typing import Mapping, Optional, Union

from vpassport.models.inspection import (
    TyreAssessment,
    TyreBand,
    TyreCondition,
    WearStatus,
)
from vpassport.models.passport import TyreDepths

# South African legal minimum tread depth
LEGAL_MIN_MM = 1.6
RECOMMENDED_REPLACEMENT_MM = 3.0
NEW_TYRE_RANGE_MM = (8.0, 12.0)

POOR_BELOW_MM = 2.0
FAIR_BELOW_MM = 4.0
MAX_EVEN_VARIANCE_MM = 3.0

# status -> (message, recommendation)
_ASSESSMENTS = {
    WearStatus.CRITICAL: (
        "Vehicle has tyres below legal minimum (1.6mm). "
        "Immediate replacement required before use.",
        "Do not drive - replace immediately",
    ),
    WearStatus.POOR: (
        "Vehicle has tyres at or near legal minimum. Replacement urgently needed.",
        "Budget for immediate tyre replacement",
    ),
    WearStatus.FAIR: (
        "Tyres show moderate wear. Replacement should be planned within 6 months.",
        "Plan for replacement in coming months",
    ),
    WearStatus.UNEVEN: (
        "Significant variation in tyre wear detected. "
        "May indicate alignment or suspension issues.",
        "Inspect for underlying mechanical issues",
    ),
    WearStatus.GOOD: (
        "All tyres in good condition with adequate remaining tread.",
        "No immediate action required",
    ),
}

_CONDITIONS = (
    (8.0, TyreBand.EXCELLENT, "Like new condition"),
    (4.0, TyreBand.GOOD, "Good remaining life"),
    (2.0, TyreBand.FAIR, "Consider replacement soon"),
    (LEGAL_MIN_MM, TyreBand.LEGAL_MINIMUM, "At legal limit - replace immediately"),
)

Depths = Union[TyreDepths, Mapping[str, Optional[float]], None]


def _readings(depths: Depths) -> list[float]:
    if depths is None:
        return []
    if isinstance(depths, TyreDepths):
        values = depths.by_position().values()
    else:
        values = depths.values()
    return [
        float(d)
        for d in values
        if isinstance(d, (int, float)) and not isinstance(d, bool) and not math.isnan(d)
    ]


def _status(min_mm: float, variance_mm: float) -> WearStatus:
    # Depth thresholds outrank the variance rule
    if min_mm < LEGAL_MIN_MM:
        return WearStatus.CRITICAL
    if min_mm < POOR_BELOW_MM:
        return WearStatus.POOR
    if min_mm < FAIR_BELOW_MM:
        return WearStatus.FAIR
    if variance_mm > MAX_EVEN_VARIANCE_MM:
        return WearStatus.UNEVEN
    return WearStatus.GOOD


def assess(depths: Depths) -> Optional[TyreAssessment]:
    """Aggregate tyre condition over the wheels that have a reading.

    Args:
        depths: TyreDepths, or a mapping of position -> mm (None = no reading)

    Returns:
        TyreAssessment, or None when no wheel has a reading
    """
    readings = _readings(depths)
    if not readings:
        return None

    min_mm = min(readings)
    max_mm = max(readings)
    variance_mm = max_mm - min_mm
    status = _status(min_mm, variance_mm)
    message, recommendation = _ASSESSMENTS[status]

    return TyreAssessment(
        status=status,
        message=message,
        recommendation=recommendation,
        min_mm=min_mm,
        max_mm=max_mm,
        avg_mm=sum(readings) / len(readings),
        variance_mm=variance_mm,
        readings=len(readings),
    )


def tyre_condition(depth_mm: float) -> TyreCondition:
    """Band a single wheel's tread depth."""
    for floor, band, description in _CONDITIONS:
        if depth_mm >= floor:
            return TyreCondition(band=band, description=description)
    return TyreCondition(
        band=TyreBand.BELOW_LEGAL,
        description="Unsafe - immediate replacement required",
    )


def wheel_conditions(depths: TyreDepths) -> dict[str, Optional[TyreCondition]]:
    """Per-position condition bands; None where a wheel has no reading."""
    return {
        position: tyre_condition(mm) if mm is not None and not math.isnan(mm) else None
        for position, mm in depths.by_position().items()
    }
