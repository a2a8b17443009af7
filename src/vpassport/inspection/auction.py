"""Auction lifecycle and countdown.

State is never stored: it is recomputed from the current time and the two
published boundary timestamps every time it is needed, so calling these
functions at any frequency is safe.
"""

import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from vpassport.models.inspection import AuctionCountdown, AuctionState, format_hms
from vpassport.models.passport import AuctionInfo

__all__ = [
    "auction_countdown",
    "auction_state",
    "format_hms",
    "format_zar",
    "seconds_remaining",
]


def _as_utc(ts: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def auction_state(open_at: datetime, close_at: datetime, now: datetime) -> AuctionState:
    """upcoming before open, live in [open, close), closed from close onwards."""
    now = _as_utc(now)
    if now < _as_utc(open_at):
        return AuctionState.UPCOMING
    if now < _as_utc(close_at):
        return AuctionState.LIVE
    return AuctionState.CLOSED


def seconds_remaining(open_at: datetime, close_at: datetime, now: datetime) -> Optional[int]:
    """Whole seconds until the next boundary, or None once closed."""
    state = auction_state(open_at, close_at, now)
    if state is AuctionState.CLOSED:
        return None
    target = open_at if state is AuctionState.UPCOMING else close_at
    delta = (_as_utc(target) - _as_utc(now)).total_seconds()
    return max(0, math.floor(delta))


def auction_countdown(auction: AuctionInfo, now: Optional[datetime] = None) -> AuctionCountdown:
    """Current state and countdown for an auction window."""
    now = now or datetime.now(timezone.utc)
    return AuctionCountdown(
        state=auction_state(auction.open_at, auction.close_at, now),
        seconds_remaining=seconds_remaining(auction.open_at, auction.close_at, now),
    )


def format_zar(amount: Optional[float]) -> str:
    """Format rand without cents, en-ZA style: R 179 000."""
    if amount is None or not math.isfinite(amount):
        return "\u2014"
    whole = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if whole < 0 else ""
    grouped = f"{abs(whole):,}".replace(",", " ")
    return f"{sign}R {grouped}"
