"""VIN classification data models."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class VinError(str, Enum):
    """Reasons a VIN was rejected before classification."""

    INVALID_LENGTH = "invalid_vin_length"
    INVALID_CHARACTERS = "invalid_vin_characters"


class EvCapability(BaseModel):
    """One row of the WMI-prefix EV capability table."""

    model_config = ConfigDict(frozen=True)

    make: str
    smartcar_supported: bool = False
    battery_kwh: Optional[float] = Field(default=None, gt=0)
    note: Optional[str] = None


class EvDetectionResult(BaseModel):
    """Outcome of the VIN heuristic EV detection."""

    model_config = ConfigDict(frozen=True)

    is_electric: bool = False
    make: Optional[str] = None
    smartcar_compatible: bool = False
    battery_estimate_kwh: Optional[float] = None
    confidence: float = Field(default=0.0, ge=0, le=1)
    source: Literal["vin_heuristic"] = "vin_heuristic"
    error: Optional[VinError] = None
    caveat: Optional[str] = None

    @property
    def notes(self) -> Optional[str]:
        """Single-field view: the rejection reason, else the manufacturer caveat."""
        if self.error is not None:
            return self.error.value
        return self.caveat

    @property
    def is_valid_vin(self) -> bool:
        """True when the VIN passed length and character checks."""
        return self.error is None
