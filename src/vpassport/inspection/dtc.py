"""OBD-II trouble code descriptions: known codes plus sensible fallbacks.

Descriptions are advisory. A code the backend already annotated keeps its
own description; anything unknown falls back to a coarse system/area label.
"""

import re
from typing import Any, Iterable, Optional

from vpassport.models.inspection import DtcLine
from vpassport.models.passport import DtcCode, DtcStatus

DTC_PATTERN = re.compile(r"^[PCBU][0-9A-F]{4}$")

# Rows shown before collapsing into "+N more"
MAX_SHOWN = 5

KNOWN_CODES = {
    # Emissions / catalyst
    "P0420": "Catalyst system efficiency below threshold (Bank 1)",
    "P0430": "Catalyst system efficiency below threshold (Bank 2)",
    # Fuel/air trim
    "P0171": "System too lean (Bank 1)",
    "P0174": "System too lean (Bank 2)",
    "P0172": "System too rich (Bank 1)",
    "P0175": "System too rich (Bank 2)",
    # EVAP
    "P0440": "Evaporative emission control system (generic fault)",
    "P0442": "Evaporative emission system leak detected (small leak)",
    "P0455": "Evaporative emission system leak detected (large leak)",
    # Ignition/misfire
    "P0300": "Random/multiple cylinder misfire detected",
    # Intake/MAF/O2
    "P0101": "MAF/VAF circuit range/performance problem",
    "P0113": "Intake air temperature sensor 1 circuit high",
    "P0128": "Coolant thermostat (below regulating temperature)",
    "P0130": "O2 sensor circuit (Bank 1, Sensor 1)",
    # Speed/TCM
    "P0500": "Vehicle speed sensor (VSS) malfunction",
    "P0700": "Transmission control system (TCM) malfunction (request MIL)",
}

SYSTEMS = {
    "P": "Powertrain",
    "B": "Body",
    "C": "Chassis",
    "U": "Network/Comm",
}

# Second character of a P code
P_CATEGORIES = {
    "0": "generic (SAE)",
    "1": "manufacturer-specific",
    "2": "manufacturer-specific",
    "3": "manufacturer-specific",
}

# Third character of a P code
P_AREAS = {
    "0": "generic fault",
    "1": "fuel/air metering",
    "2": "fuel/air metering (injector circuit)",
    "3": "ignition/misfire",
    "4": "auxiliary emission controls",
    "5": "vehicle speed/idle/aux inputs",
    "6": "computer/output circuits",
    "7": "transmission",
    "8": "transmission",
    "9": "SAE reserved",
    "A": "hybrid/EV (manufacturer-specific)",
}

STATUS_LABELS = {
    DtcStatus.GREEN: "No faults",
    DtcStatus.AMBER: "Advisories",
    DtcStatus.RED: "Critical faults",
}


def normalize_code(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip().upper()


def is_valid_code(raw: Any) -> bool:
    """Check SAE J2012 format: system letter plus four hex digits."""
    return bool(DTC_PATTERN.match(normalize_code(raw)))


def describe(raw: Any) -> Optional[str]:
    """Describe a DTC (best effort).

    Returns None for anything that is not a well-formed code. Never raises.
    """
    code = normalize_code(raw)
    if not DTC_PATTERN.match(code):
        return None

    if code in KNOWN_CODES:
        return KNOWN_CODES[code]

    misfire = re.match(r"^P030([1-8])$", code)
    if misfire:
        return f"Cylinder {misfire.group(1)} misfire detected"

    if re.match(r"^P013[0-9A-F]$", code):
        return "O2 sensor circuit (Bank 1)"
    if re.match(r"^P015[0-9A-F]$", code):
        return "O2 sensor circuit (Bank 2)"

    if re.match(r"^P044[0-9A-F]$", code):
        return "Evaporative emission system fault"

    system = SYSTEMS[code[0]]
    if code[0] == "P":
        family = P_CATEGORIES.get(code[1], "unspecified")
        area = P_AREAS.get(code[2], "unspecified area")
        return f"{system} ({family}) \u2014 {area} ({code[:3]}xx)"
    return f"{system} fault"


def enrich_codes(
    codes: Iterable[DtcCode],
    limit: int = MAX_SHOWN,
) -> tuple[list[DtcLine], int]:
    """Prepare backend codes for display.

    Malformed codes are dropped, the rest are uppercased and missing
    descriptions are filled in.

    Returns:
        (lines to show, number of further codes hidden by ``limit``)
    """
    lines = [
        DtcLine(code=normalize_code(c.code), description=c.desc or describe(c.code))
        for c in codes
        if is_valid_code(c.code)
    ]
    shown = lines[: max(0, limit)]
    return shown, len(lines) - len(shown)


def status_label(status: Optional[DtcStatus]) -> str:
    """Human label for the backend's severity bucket."""
    return STATUS_LABELS.get(status, "N/A")
