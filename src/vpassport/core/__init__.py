"""Core services for vpassport."""

from vpassport.core.client import PassportClient
from vpassport.core.config import ConfigManager
from vpassport.core.keychain import ApiKeyKeychain
from vpassport.core.lookup import lookup_passport

__all__ = [
    "ApiKeyKeychain",
    "ConfigManager",
    "PassportClient",
    "lookup_passport",
]
