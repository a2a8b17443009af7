"""EV battery health colour bands."""

import math
from typing import Optional

from vpassport.models.inspection import ChargingTone, HealthBand
from vpassport.models.passport import ChargingStatus

SOC_GOOD_PCT = 80.0
SOC_WARNING_PCT = 20.0

SOH_GOOD_PCT = 90.0
SOH_WARNING_PCT = 80.0

_CHARGING_TONES = {
    ChargingStatus.CHARGING: ChargingTone.POSITIVE,
    ChargingStatus.DISCHARGING: ChargingTone.CAUTION,
    ChargingStatus.IDLE: ChargingTone.NEUTRAL,
}


def _band(pct: Optional[float], good_at: float, warning_at: float) -> Optional[HealthBand]:
    if pct is None or math.isnan(pct):
        return None
    if pct >= good_at:
        return HealthBand.GOOD
    if pct >= warning_at:
        return HealthBand.WARNING
    return HealthBand.CRITICAL


def soc_band(
    pct: Optional[float],
    good_at: float = SOC_GOOD_PCT,
    warning_at: float = SOC_WARNING_PCT,
) -> Optional[HealthBand]:
    """Band a State-of-Charge percentage against caller-chosen thresholds."""
    return _band(pct, good_at, warning_at)


def soh_band(pct: Optional[float]) -> Optional[HealthBand]:
    """Band a State-of-Health percentage: >=90 good, >=80 warning, else critical."""
    return _band(pct, SOH_GOOD_PCT, SOH_WARNING_PCT)


def charging_tone(status: Optional[ChargingStatus]) -> ChargingTone:
    return _CHARGING_TONES.get(status, ChargingTone.NEUTRAL)
