"""Canonical passport view rendered by the CLI."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from vpassport.models.inspection import (
    AuctionCountdown,
    Audience,
    ChargingTone,
    DtcLine,
    HealthBand,
    TyreAssessment,
    TyreCondition,
)
from vpassport.models.passport import (
    AuctionInfo,
    BatteryHealth,
    DtcStatus,
    TimelineEntry,
    VerificationStatus,
)
from vpassport.models.vin import EvDetectionResult


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class WheelView(_View):
    position: str
    depth_mm: Optional[float] = None
    condition: Optional[TyreCondition] = None


class SealSummary(_View):
    valid: bool
    sealed_at: datetime
    key_id: Optional[str] = None
    hash_short: Optional[str] = None


class BatteryView(_View):
    capacity_kwh: Optional[float] = None
    health: Optional[BatteryHealth] = None
    soc: Optional[HealthBand] = None
    soh: Optional[HealthBand] = None
    charging: ChargingTone = ChargingTone.NEUTRAL


class AuctionView(_View):
    info: AuctionInfo
    countdown: AuctionCountdown
    current_bid_display: str


class PassportView(_View):
    """Everything the results screen shows for one VIN."""

    vin: str
    audience: Audience
    status: VerificationStatus
    status_title: str
    status_message: str
    lot_id: Optional[str] = None
    odometer_km: Optional[float] = None
    dekra_url: Optional[str] = None
    dtc_status: DtcStatus = DtcStatus.NA
    dtc_label: str = "N/A"
    dtc_lines: list[DtcLine] = Field(default_factory=list)
    dtc_hidden: int = 0
    wheels: list[WheelView] = Field(default_factory=list)
    tyre_assessment: Optional[TyreAssessment] = None
    ev_detection: EvDetectionResult
    battery: Optional[BatteryView] = None
    auction: Optional[AuctionView] = None
    timeline: list[TimelineEntry] = Field(default_factory=list)
    seal: Optional[SealSummary] = None

    @property
    def show_technical(self) -> bool:
        return self.audience is Audience.INTERNAL
