"""Custom exceptions for vpassport."""

from typing import Optional


class VpassportError(Exception):
    """Base exception for all vpassport errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Config Errors
# ─────────────────────────────────────────────────────────────────────────────


class ConfigError(VpassportError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    def __init__(self) -> None:
        super().__init__(
            "Configuration not found",
            "Run 'vpassport config --base-url URL' to point at a passport backend.",
        )


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration: {field}",
            reason,
        )


class CapabilityTableError(ConfigError):
    """EV capability table file could not be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Invalid EV capability table: {path}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Input Errors
# ─────────────────────────────────────────────────────────────────────────────


class VinFormatError(VpassportError):
    """VIN is not a well-formed 17-character VIN."""

    def __init__(self, vin: str) -> None:
        super().__init__(
            "Please enter a valid 17-character VIN",
            f"'{vin}' is not a valid VIN (letters I, O and Q are not allowed).",
        )


# ─────────────────────────────────────────────────────────────────────────────
# Backend Errors
# ─────────────────────────────────────────────────────────────────────────────


class BackendError(VpassportError):
    """Base class for passport backend errors."""


class BackendUnavailableError(BackendError):
    """Backend could not be reached."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.url = url
        super().__init__(
            f"Could not reach passport backend at {url}",
            reason,
        )


class BackendStatusError(BackendError):
    """Backend answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        body: str = "",
        message: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(message or f"{status_code} {reason}".strip(), body or None)


class PassportNotFoundError(BackendStatusError):
    """No passport record exists for the VIN."""

    def __init__(self, vin: str, body: str = "") -> None:
        self.vin = vin
        super().__init__(404, "Not Found", body, message=f"No passport found for {vin}")


class InvalidResponseError(BackendError):
    """Backend returned a payload that could not be understood."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(
            f"Unexpected response from {url}",
            reason,
        )
