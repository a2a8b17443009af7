"""Map a looked-up passport onto the one canonical display view.

Customer and internal renderings share this view; ``audience`` only
decides whether seal technicalities (key id, hash) are carried.
"""

from datetime import datetime, timezone
from typing import Optional

from vpassport.inspection import auction as auction_rules
from vpassport.inspection import battery, dtc, tyres
from vpassport.inspection.vin import CapabilityTable, classify
from vpassport.models.inspection import Audience
from vpassport.models.passport import (
    LookupResult,
    PassportDraft,
    PassportRecord,
    TimelineEntry,
    VerificationStatus,
)
from vpassport.models.view import (
    AuctionView,
    BatteryView,
    PassportView,
    SealSummary,
    WheelView,
)


def short_middle(value: Optional[str], left: int = 6, right: int = 6) -> Optional[str]:
    """Elide the middle of a long identifier: abcdef…uvwxyz."""
    if not value:
        return None
    if len(value) <= left + right + 1:
        return value
    return f"{value[:left]}…{value[-right:]}"


def _sort_key(entry: TimelineEntry) -> datetime:
    ts = entry.ts
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def build_timeline(record: PassportRecord, include_key_id: bool = False) -> list[TimelineEntry]:
    """Record timeline plus inspection and seal events, oldest first.

    The seal event names the signing key only when ``include_key_id`` is set.
    """
    content = record.content
    entries = list(content.timeline) if content else []
    seen = {_sort_key(e) for e in entries}

    derived = []
    if content and content.dekra and content.dekra.inspection_ts:
        derived.append(TimelineEntry(
            ts=content.dekra.inspection_ts,
            title="DEKRA inspection attached",
            note=content.dekra.site,
        ))
    if record.sealed:
        derived.append(TimelineEntry(
            ts=record.sealed.seal.sealed_ts,
            title="Passport sealed",
            note=record.sealed.seal.key_id if include_key_id else None,
        ))

    entries.extend(e for e in derived if _sort_key(e) not in seen)
    return sorted(entries, key=_sort_key)


def _battery_view(content: PassportDraft, soc_good: float, soc_warning: float) -> Optional[BatteryView]:
    if content.ev is None:
        return None
    health = content.ev.battery_health
    return BatteryView(
        capacity_kwh=content.ev.battery_capacity_kwh,
        health=health,
        soc=battery.soc_band(health.soc_pct, soc_good, soc_warning) if health else None,
        soh=battery.soh_band(health.soh_pct) if health else None,
        charging=battery.charging_tone(health.charging_status if health else None),
    )


def build_view(
    result: LookupResult,
    now: Optional[datetime] = None,
    audience: Audience = Audience.CUSTOMER,
    soc_good_pct: float = battery.SOC_GOOD_PCT,
    soc_warning_pct: float = battery.SOC_WARNING_PCT,
    table: Optional[CapabilityTable] = None,
) -> PassportView:
    """Derive every display state for a looked-up passport.

    Args:
        result: Lookup outcome (record may be absent for NOT_FOUND)
        now: Reference time for the auction countdown (defaults to now, UTC)
        audience: customer or internal rendering
        soc_good_pct: SoC at or above this is "good"
        soc_warning_pct: SoC at or above this (and below good) is "warning"
        table: WMI capability table override

    Returns:
        PassportView
    """
    now = now or datetime.now(timezone.utc)
    view = {
        "vin": result.vin,
        "audience": audience,
        "status": result.status,
        "status_title": result.status_title,
        "status_message": result.status_message,
        "ev_detection": classify(result.vin, table),
    }

    record = result.record
    content = record.content if record else None
    if content is None:
        return PassportView(**view)

    lines, hidden = dtc.enrich_codes(content.dtc.codes)
    depths = content.tyres_mm
    conditions = tyres.wheel_conditions(depths)

    view.update(
        lot_id=content.lot_id,
        odometer_km=content.odometer.km if content.odometer else None,
        dekra_url=content.dekra.url if content.dekra else None,
        dtc_status=content.dtc.status,
        dtc_label=dtc.status_label(content.dtc.status),
        dtc_lines=lines,
        dtc_hidden=hidden,
        wheels=[
            WheelView(position=pos, depth_mm=mm, condition=conditions[pos])
            for pos, mm in depths.by_position().items()
        ],
        tyre_assessment=tyres.assess(depths),
        battery=_battery_view(content, soc_good_pct, soc_warning_pct),
        timeline=build_timeline(record, include_key_id=audience is Audience.INTERNAL),
    )

    if content.auction is not None:
        view["auction"] = AuctionView(
            info=content.auction,
            countdown=auction_rules.auction_countdown(content.auction, now),
            current_bid_display=auction_rules.format_zar(content.auction.current_bid),
        )

    if record.sealed is not None:
        technical = audience is Audience.INTERNAL
        seal = record.sealed.seal
        view["seal"] = SealSummary(
            valid=result.status is VerificationStatus.VERIFIED,
            sealed_at=seal.sealed_ts,
            key_id=seal.key_id if technical else None,
            hash_short=short_middle(seal.hash) if technical else None,
        )

    return PassportView(**view)
