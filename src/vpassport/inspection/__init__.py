"""Pure derivations over VINs and passport fields."""

from vpassport.inspection.auction import auction_countdown, auction_state, format_zar
from vpassport.inspection.battery import charging_tone, soc_band, soh_band
from vpassport.inspection.dtc import describe, enrich_codes
from vpassport.inspection.tyres import assess, tyre_condition
from vpassport.inspection.vin import classify, format_vin, is_valid_vin

__all__ = [
    "assess",
    "auction_countdown",
    "auction_state",
    "charging_tone",
    "classify",
    "describe",
    "enrich_codes",
    "format_vin",
    "format_zar",
    "is_valid_vin",
    "soc_band",
    "soh_band",
    "tyre_condition",
]
