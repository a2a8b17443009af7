"""Data models for vpassport."""

from vpassport.models.config import SavedVin, UserConfig
from vpassport.models.inspection import (
    AuctionCountdown,
    AuctionState,
    Audience,
    ChargingTone,
    DtcLine,
    HealthBand,
    TyreAssessment,
    TyreBand,
    TyreCondition,
    WearStatus,
)
from vpassport.models.passport import (
    AuctionInfo,
    BatteryHealth,
    ChargingStatus,
    DtcCode,
    DtcStatus,
    DtcSummary,
    EvInfo,
    LookupResult,
    PassportDraft,
    PassportRecord,
    PassportSealed,
    Seal,
    TimelineEntry,
    TyreDepths,
    VerificationStatus,
    VerifyResult,
)
from vpassport.models.view import (
    AuctionView,
    BatteryView,
    PassportView,
    SealSummary,
    WheelView,
)
from vpassport.models.vin import EvCapability, EvDetectionResult, VinError

__all__ = [
    # Config
    "UserConfig",
    "SavedVin",
    # VIN
    "EvCapability",
    "EvDetectionResult",
    "VinError",
    # Passport
    "PassportRecord",
    "PassportDraft",
    "PassportSealed",
    "Seal",
    "VerifyResult",
    "VerificationStatus",
    "LookupResult",
    "DtcCode",
    "DtcStatus",
    "DtcSummary",
    "TyreDepths",
    "EvInfo",
    "BatteryHealth",
    "ChargingStatus",
    "AuctionInfo",
    "TimelineEntry",
    # Derived
    "Audience",
    "AuctionCountdown",
    "AuctionState",
    "ChargingTone",
    "DtcLine",
    "HealthBand",
    "TyreAssessment",
    "TyreBand",
    "TyreCondition",
    "WearStatus",
    # View
    "PassportView",
    "AuctionView",
    "BatteryView",
    "SealSummary",
    "WheelView",
]
