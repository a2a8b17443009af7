"""VIN validation and WMI-prefix EV detection.

This is a manufacturer-prefix heuristic, not a VIN decoder: there is no
check-digit validation and no model-year decode. The capability table is
plain data and can be swapped for one loaded from a TOML file.
"""

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import tomli
from pydantic import ValidationError

from vpassport.exceptions import CapabilityTableError
from vpassport.models.vin import EvCapability, EvDetectionResult, VinError

logger = logging.getLogger(__name__)

VIN_LENGTH = 17
VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")

# Fixed confidence for any WMI-table hit
HEURISTIC_CONFIDENCE = 0.7

CapabilityTable = Mapping[str, EvCapability]

DEFAULT_EV_CAPABILITIES: CapabilityTable = MappingProxyType({
    "WDD": EvCapability(make="Mercedes-Benz", smartcar_supported=True, battery_kwh=80),  # EQ family
    "WBA": EvCapability(make="BMW", smartcar_supported=True, battery_kwh=85),  # i4/iX
    "JYJ": EvCapability(make="Tesla", smartcar_supported=True, battery_kwh=75),  # Model 3/Y
    "WVW": EvCapability(make="Volkswagen", smartcar_supported=True, battery_kwh=77),  # ID.3/ID.4
    "LGX": EvCapability(
        make="BYD",
        smartcar_supported=False,
        battery_kwh=60,
        note="Confirm locally",
    ),
})


def normalize_vin(vin_raw: Any) -> str:
    """Trim and uppercase. Missing or non-string input becomes ''."""
    if not isinstance(vin_raw, str):
        return ""
    return vin_raw.strip().upper()


def format_vin(vin_raw: Any, max_length: Optional[int] = VIN_LENGTH) -> str:
    """Canonicalize free-form input: uppercase, alphanumerics only.

    Input is capped at ``max_length`` characters, as a VIN entry field
    would; pass None to keep everything.
    """
    cleaned = re.sub(r"[^A-Z0-9]", "", normalize_vin(vin_raw))
    return cleaned if max_length is None else cleaned[:max_length]


def is_valid_vin(vin_raw: Any) -> bool:
    """Check length and character set (I, O, Q excluded)."""
    return bool(VIN_PATTERN.match(normalize_vin(vin_raw)))


def wmi_of(vin_raw: Any) -> Optional[str]:
    """World Manufacturer Identifier of a valid VIN, else None."""
    vin = normalize_vin(vin_raw)
    if not VIN_PATTERN.match(vin):
        return None
    return vin[:3]


def classify(vin_raw: Any, table: Optional[CapabilityTable] = None) -> EvDetectionResult:
    """Validate a VIN and derive an EV-detection verdict from its WMI.

    Total and deterministic: never raises, and inputs differing only in
    case or surrounding whitespace classify identically.

    Args:
        vin_raw: VIN as typed; None and non-strings are treated as ''
        table: WMI capability table (defaults to DEFAULT_EV_CAPABILITIES)

    Returns:
        EvDetectionResult; rejected VINs carry ``error``, table hits carry
        the entry's caveat (if any) in ``caveat``
    """
    vin = normalize_vin(vin_raw)

    # Length is checked before characters
    if len(vin) != VIN_LENGTH:
        return EvDetectionResult(error=VinError.INVALID_LENGTH)

    if not VIN_PATTERN.match(vin):
        return EvDetectionResult(error=VinError.INVALID_CHARACTERS)

    capabilities = DEFAULT_EV_CAPABILITIES if table is None else table
    match = capabilities.get(vin[:3])
    if match is None:
        return EvDetectionResult()

    return EvDetectionResult(
        is_electric=True,
        make=match.make,
        smartcar_compatible=match.smartcar_supported,
        battery_estimate_kwh=match.battery_kwh,
        confidence=HEURISTIC_CONFIDENCE,
        caveat=match.note,
    )


def load_capability_table(path: Path) -> CapabilityTable:
    """Load a replacement WMI table from TOML.

    Expected layout, one table per WMI::

        [LRW]
        make = "Tesla"
        smartcar_supported = true
        battery_kwh = 75
        note = "Shanghai build"

    Raises:
        CapabilityTableError: If the file is missing, unparseable, or invalid
    """
    path = Path(path)
    try:
        raw = tomli.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CapabilityTableError(str(path), str(e))
    except tomli.TOMLDecodeError as e:
        raise CapabilityTableError(str(path), f"TOML parse error: {e}")

    table: dict[str, EvCapability] = {}
    for wmi, entry in raw.items():
        key = wmi.strip().upper()
        if not re.match(r"^[A-HJ-NPR-Z0-9]{3}$", key):
            raise CapabilityTableError(str(path), f"'{wmi}' is not a valid WMI")
        if not isinstance(entry, dict):
            raise CapabilityTableError(str(path), f"[{wmi}] must be a table")
        try:
            table[key] = EvCapability.model_validate(entry)
        except ValidationError as e:
            raise CapabilityTableError(str(path), f"[{wmi}] {e.errors()[0]['msg']}")

    logger.debug("Loaded %d WMI entries from %s", len(table), path)
    return MappingProxyType(table)
