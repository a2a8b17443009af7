"""HTTP client for the passport backend.

The backend owns sealing, signature checks and storage. This client only
reads: ``GET /passports/{vin}`` and ``GET /verify?vin=``. There is no retry
or backoff; a failure surfaces immediately as a BackendError.
"""

import logging
from typing import Any, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from vpassport.exceptions import (
    BackendStatusError,
    BackendUnavailableError,
    InvalidResponseError,
    PassportNotFoundError,
)
from vpassport.models import PassportRecord, UserConfig, VerifyResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PassportClient:
    """Read-only client for the passport backend.

    Use as an async context manager. An ``http`` client passed in is left
    open for its owner; one created here is closed on exit.
    """

    API_KEY_HEADER = "X-Api-Key"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Backend origin, e.g. https://passports.example.com
            api_key: Optional key sent as X-Api-Key
            timeout: Request timeout in seconds
            http: Injected httpx client (tests, shared pools)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._http = http
        self._owns_http = http is None

    @classmethod
    def from_config(
        cls,
        config: UserConfig,
        api_key: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> "PassportClient":
        return cls(
            base_url=config.api_base_url,
            api_key=api_key,
            timeout=config.timeout_seconds,
            http=http,
        )

    async def __aenter__(self) -> "PassportClient":
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    # ─────────────────────────────────────────────────────────────────────
    # Endpoints
    # ─────────────────────────────────────────────────────────────────────

    async def get_passport(self, vin: str) -> PassportRecord:
        """Fetch the passport record for a VIN.

        Raises:
            PassportNotFoundError: If the backend has no record (404)
            BackendStatusError: On any other non-2xx status
            BackendUnavailableError: If the backend can't be reached
            InvalidResponseError: If the body is not a valid record
        """
        url = f"{self.base_url}/passports/{quote(vin, safe='')}"
        try:
            return await self._get(url, PassportRecord)
        except BackendStatusError as e:
            if e.status_code == 404:
                raise PassportNotFoundError(vin, e.body) from e
            raise

    async def verify_passport(self, vin: str) -> VerifyResult:
        """Ask the backend to verify the seal on a VIN's passport.

        Raises:
            BackendStatusError: On non-2xx status
            BackendUnavailableError: If the backend can't be reached
            InvalidResponseError: If the body is not a verify result
        """
        url = f"{self.base_url}/verify"
        return await self._get(url, VerifyResult, params={"vin": vin})

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers[self.API_KEY_HEADER] = self.api_key
        return headers

    async def _get(
        self,
        url: str,
        model: Type[ModelT],
        params: Optional[dict[str, Any]] = None,
    ) -> ModelT:
        if self._http is None:
            raise RuntimeError("PassportClient must be used as an async context manager")

        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self._http.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("Backend unreachable: %s (%s)", url, e)
            raise BackendUnavailableError(url, str(e) or type(e).__name__) from e

        logger.debug("Response %s from %s", response.status_code, url)
        if not response.is_success:
            raise BackendStatusError(
                response.status_code,
                response.reason_phrase,
                response.text,
            )

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            reason = _describe_invalid(e)
            logger.warning("Invalid response from %s: %s", url, reason)
            raise InvalidResponseError(url, reason) from e


def _describe_invalid(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        where = ".".join(str(loc) for loc in first["loc"])
        return f"{where}: {first['msg']}" if where else first["msg"]
    return f"Response body is not JSON ({error})"
