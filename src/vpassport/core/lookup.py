"""Passport lookup: fetch a record and verify it when sealed."""

import logging

from vpassport.core.client import PassportClient
from vpassport.exceptions import BackendError, PassportNotFoundError, VinFormatError
from vpassport.inspection.vin import format_vin, is_valid_vin
from vpassport.models import LookupResult, VerificationStatus, VerifyResult

logger = logging.getLogger(__name__)


async def lookup_passport(client: PassportClient, vin_raw: str) -> LookupResult:
    """Fetch a passport and, if sealed, its verification result.

    An unknown VIN and a draft-only record are normal outcomes
    (NOT_FOUND / UNSEALED), not errors. A seal that fails to verify, or a
    verify call that fails outright, is reported as FAILED and never
    retried or corrected.

    Args:
        client: Open PassportClient
        vin_raw: VIN as entered

    Returns:
        LookupResult

    Raises:
        VinFormatError: If the VIN is not 17 valid characters
        BackendError: If the passport itself can't be fetched
    """
    vin = format_vin(vin_raw, max_length=None)
    if not is_valid_vin(vin):
        raise VinFormatError(str(vin_raw or "").strip())

    logger.info("Passport lookup: vin=%s", vin)
    try:
        record = await client.get_passport(vin)
    except PassportNotFoundError:
        logger.info("No passport for %s", vin)
        return LookupResult(vin=vin, status=VerificationStatus.NOT_FOUND)

    if not record.is_sealed:
        logger.info("Passport for %s is not sealed", vin)
        return LookupResult(vin=vin, status=VerificationStatus.UNSEALED, record=record)

    try:
        verification = await client.verify_passport(vin)
    except BackendError as e:
        logger.warning("Verification call failed for %s: %s", vin, e.message)
        verification = VerifyResult(valid=False, reasons=[f"Verification failed: {e.message}"])

    status = VerificationStatus.VERIFIED if verification.valid else VerificationStatus.FAILED
    logger.info("Passport %s: %s", vin, status.value)
    return LookupResult(vin=vin, status=status, record=record, verification=verification)
