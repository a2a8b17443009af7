"""Passport record models, as served by the passport backend.

Field names follow the backend's JSON. camelCase keys are mapped through
aliases; either spelling is accepted when constructing models in code.
Records are frozen: a sealed passport is evidence and is never edited
client-side.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _as_utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class DtcStatus(str, Enum):
    """Backend-assigned DTC severity bucket."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"
    NA = "n/a"


class ChargingStatus(str, Enum):
    """EV charging state at the time of the battery reading."""

    CHARGING = "charging"
    DISCHARGING = "discharging"
    IDLE = "idle"


class DtcCode(_Record):
    code: str
    desc: Optional[str] = None


class DtcSummary(_Record):
    status: DtcStatus = DtcStatus.NA
    codes: tuple[DtcCode, ...] = ()

    @field_validator("status", "codes", mode="before")
    @classmethod
    def drop_nulls(cls, v, info):
        """Treat explicit JSON nulls as absent."""
        if v is None:
            return DtcStatus.NA if info.field_name == "status" else ()
        return v


class TyreDepths(_Record):
    """Tread depth in millimetres per wheel position."""

    fl: Optional[float] = None
    fr: Optional[float] = None
    rl: Optional[float] = None
    rr: Optional[float] = None

    def by_position(self) -> dict[str, Optional[float]]:
        """Return readings keyed by display label (FL, FR, RL, RR)."""
        return {"FL": self.fl, "FR": self.fr, "RL": self.rl, "RR": self.rr}


class Dekra(_Record):
    url: Optional[str] = None
    inspection_ts: Optional[datetime] = None
    site: Optional[str] = None


class Odometer(_Record):
    km: Optional[float] = Field(default=None, ge=0)


class Provenance(_Record):
    ts: Optional[datetime] = None
    site: Optional[str] = None
    captured_by: Optional[str] = None


class EvCapabilities(_Record):
    obd_ev_pids: bool = False
    smartcar_oauth: bool = False
    manual: bool = False


class EvProvenance(_Record):
    detection: Optional[str] = None
    detection_confidence: Optional[float] = Field(default=None, alias="detectionConfidence")
    battery_source: Optional[str] = Field(default=None, alias="batterySource")


class BatteryHealth(_Record):
    soh_pct: Optional[float] = Field(default=None, ge=0, le=100)
    soc_pct: Optional[float] = Field(default=None, ge=0, le=100)
    range_km: Optional[float] = Field(default=None, ge=0, alias="rangeKm")
    charging_status: Optional[ChargingStatus] = Field(default=None, alias="chargingStatus")
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")


class EvInfo(_Record):
    is_electric: Optional[bool] = Field(default=None, alias="isElectric")
    battery_capacity_kwh: Optional[float] = Field(default=None, alias="batteryCapacityKwh")
    smartcar_compatible: Optional[bool] = Field(default=None, alias="smartcarCompatible")
    capabilities: Optional[EvCapabilities] = None
    provenance: Optional[EvProvenance] = None
    battery_health: Optional[BatteryHealth] = Field(default=None, alias="batteryHealth")


class TimelineEntry(_Record):
    ts: datetime
    title: str
    note: Optional[str] = None


class AuctionInfo(_Record):
    """Auction window for the lot. Boundaries are fixed once published."""

    model_config = ConfigDict(allow_inf_nan=False)

    open_at: datetime = Field(alias="openAt")
    close_at: datetime = Field(alias="closeAt")
    reserve_met: bool = Field(default=False, alias="reserveMet")
    current_bid: Optional[float] = Field(default=None, ge=0, alias="currentBid")
    bids: int = Field(default=0, ge=0)
    url: Optional[str] = None

    @model_validator(mode="after")
    def validate_window(self) -> "AuctionInfo":
        """Ensure the auction closes no earlier than it opens. Naive times are UTC."""
        if _as_utc(self.close_at) < _as_utc(self.open_at):
            raise ValueError("closeAt must not be earlier than openAt")
        return self


class PassportDraft(_Record):
    """Inspection data captured for a vehicle, sealed or not."""

    vin: str
    lot_id: Optional[str] = None
    dekra: Optional[Dekra] = None
    odometer: Optional[Odometer] = None
    tyres_mm: TyreDepths = Field(default_factory=TyreDepths)
    dtc: DtcSummary = Field(default_factory=DtcSummary)
    provenance: Optional[Provenance] = None
    ev: Optional[EvInfo] = None
    timeline: tuple[TimelineEntry, ...] = ()
    auction: Optional[AuctionInfo] = None

    @field_validator("tyres_mm", "dtc", "timeline", mode="before")
    @classmethod
    def drop_nulls(cls, v, info):
        """Treat explicit JSON nulls as absent."""
        if v is None:
            return () if info.field_name == "timeline" else {}
        return v


class Seal(_Record):
    hash: str
    sig: str
    key_id: str
    sealed_ts: datetime


class PassportSealed(PassportDraft):
    """Draft fields frozen under a cryptographic seal."""

    seal: Seal


class PassportRecord(_Record):
    """Top-level record returned by ``GET /passports/{vin}``."""

    vin: str
    draft: Optional[PassportDraft] = None
    sealed: Optional[PassportSealed] = None
    updated_at: datetime = Field(alias="updatedAt")

    @property
    def is_sealed(self) -> bool:
        return self.sealed is not None

    @property
    def content(self) -> Optional[PassportDraft]:
        """Sealed copy when present, otherwise the draft."""
        return self.sealed or self.draft


class VerifyResult(_Record):
    """Result of ``GET /verify?vin=``."""

    valid: bool
    reasons: tuple[str, ...] = ()

    @field_validator("reasons", mode="before")
    @classmethod
    def drop_null_reasons(cls, v):
        return () if v is None else v


class VerificationStatus(str, Enum):
    """Outcome of looking up and verifying a passport."""

    VERIFIED = "verified"
    FAILED = "failed"
    UNSEALED = "unsealed"
    NOT_FOUND = "not_found"


class LookupResult(_Record):
    """A fetched passport together with its verification outcome."""

    vin: str
    status: VerificationStatus
    record: Optional[PassportRecord] = None
    verification: Optional[VerifyResult] = None

    @property
    def reasons(self) -> tuple[str, ...]:
        if self.verification is None:
            return ()
        return self.verification.reasons

    @property
    def status_title(self) -> str:
        return {
            VerificationStatus.VERIFIED: "Passport Verified",
            VerificationStatus.FAILED: "Verification Failed",
            VerificationStatus.UNSEALED: "Not Sealed Yet",
            VerificationStatus.NOT_FOUND: "No Sealed Passport Found",
        }[self.status]

    @property
    def status_message(self) -> str:
        if self.status is VerificationStatus.VERIFIED:
            return "This vehicle passport is authentic and tamper-proof"
        if self.status is VerificationStatus.FAILED:
            return f"Integrity issues detected: {', '.join(self.reasons) or 'Unknown error'}"
        if self.status is VerificationStatus.UNSEALED:
            return "An inspection is in progress; this passport has not been sealed"
        return "This VIN does not have a sealed digital passport"
