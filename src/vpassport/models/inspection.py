"""Derived display states computed from passport fields."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


def format_hms(seconds: int) -> str:
    """Format a duration in whole seconds as HH:MM:SS (hours are not capped)."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class WearStatus(str, Enum):
    """Aggregate tyre wear verdict across all wheels."""

    CRITICAL = "Critical"
    POOR = "Poor"
    FAIR = "Fair"
    UNEVEN = "Uneven Wear"
    GOOD = "Good"


class TyreBand(str, Enum):
    """Per-wheel tread depth band."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    LEGAL_MINIMUM = "Legal Minimum"
    BELOW_LEGAL = "Below Legal"


class HealthBand(str, Enum):
    """Colour band for battery percentages."""

    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class ChargingTone(str, Enum):
    """Styling tone for the charging status."""

    POSITIVE = "positive"
    CAUTION = "caution"
    NEUTRAL = "neutral"


class AuctionState(str, Enum):
    """Auction lifecycle, derived from wall-clock time."""

    UPCOMING = "upcoming"
    LIVE = "live"
    CLOSED = "closed"


class Audience(str, Enum):
    """Who the passport view is rendered for."""

    CUSTOMER = "customer"
    INTERNAL = "internal"


class TyreAssessment(BaseModel):
    """Aggregate tyre condition over the wheels that have readings."""

    model_config = ConfigDict(frozen=True)

    status: WearStatus
    message: str
    recommendation: str
    min_mm: float
    max_mm: float
    avg_mm: float
    variance_mm: float
    readings: int


class TyreCondition(BaseModel):
    """Independent condition band for a single wheel."""

    model_config = ConfigDict(frozen=True)

    band: TyreBand
    description: str


class DtcLine(BaseModel):
    """A trouble code ready for display."""

    model_config = ConfigDict(frozen=True)

    code: str
    description: Optional[str] = None


class AuctionCountdown(BaseModel):
    """Auction state with the time left until the next boundary."""

    model_config = ConfigDict(frozen=True)

    state: AuctionState
    seconds_remaining: Optional[int] = None

    @property
    def display(self) -> Optional[str]:
        """Countdown as HH:MM:SS, or None once the auction has closed."""
        if self.seconds_remaining is None:
            return None
        return format_hms(self.seconds_remaining)
