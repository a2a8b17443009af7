"""OS keychain integration for the backend API key."""

import os
from typing import Optional

import keyring
from keyring.errors import PasswordDeleteError

SERVICE_NAME = "vpassport"

ENV_API_KEY = "VPASSPORT_API_KEY"


class ApiKeyKeychain:
    """Secure storage for the passport backend API key using OS keychain."""

    KEY_API_KEY = "api_key"

    @classmethod
    def store(cls, api_key: str) -> None:
        """Store API key in OS keychain.

        Args:
            api_key: Value sent as the X-Api-Key header
        """
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        keyring.set_password(SERVICE_NAME, cls.KEY_API_KEY, api_key)

    @classmethod
    def retrieve(cls) -> Optional[str]:
        """Retrieve API key.

        ``VPASSPORT_API_KEY`` wins over the keychain.

        Returns:
            API key if configured, None otherwise
        """
        from_env = os.environ.get(ENV_API_KEY)
        if from_env:
            return from_env
        return keyring.get_password(SERVICE_NAME, cls.KEY_API_KEY) or None

    @classmethod
    def delete(cls) -> None:
        """Remove API key from keychain."""
        try:
            keyring.delete_password(SERVICE_NAME, cls.KEY_API_KEY)
        except PasswordDeleteError:
            pass  # Key doesn't exist

    @classmethod
    def exists(cls) -> bool:
        """Check if an API key is stored in keychain."""
        return keyring.get_password(SERVICE_NAME, cls.KEY_API_KEY) is not None
