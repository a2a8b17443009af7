"""Configuration management."""

import logging
import os
from pathlib import Path
from typing import Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from vpassport.exceptions import ConfigNotFoundError, ConfigValidationError
from vpassport.inspection.vin import (
    DEFAULT_EV_CAPABILITIES,
    CapabilityTable,
    load_capability_table,
)
from vpassport.models import UserConfig

logger = logging.getLogger(__name__)

ENV_API_BASE_URL = "VPASSPORT_API_BASE_URL"


class ConfigManager:
    """Manages TOML configuration storage."""

    CONFIG_FILENAME = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Override config directory (for testing)
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir("vpassport"))

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self._config_dir / self.CONFIG_FILENAME

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def save(self, config: UserConfig) -> None:
        """Save configuration to TOML.

        Args:
            config: User configuration to save
        """
        self._config_dir.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json", exclude_none=True)
        self.config_path.write_text(tomli_w.dumps(config_dict), encoding="utf-8")
        logger.debug("Config saved to %s", self.config_path)

    def load(self) -> UserConfig:
        """Load configuration from TOML.

        Returns:
            Loaded and validated UserConfig

        Raises:
            ConfigNotFoundError: If config file doesn't exist
            ConfigValidationError: If config is unreadable or invalid
        """
        if not self.exists:
            raise ConfigNotFoundError()

        try:
            config_dict = tomli.loads(self.config_path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            raise ConfigValidationError("config", f"TOML parse error: {e}")

        try:
            return UserConfig.model_validate(config_dict)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(loc) for loc in error["loc"]) or "config"
            raise ConfigValidationError(field, error["msg"])

    def load_or_default(self) -> UserConfig:
        """Load saved config, or built-in defaults when none is saved.

        ``VPASSPORT_API_BASE_URL`` overrides the saved base URL.
        """
        config = self.load() if self.exists else UserConfig()

        env_url = os.environ.get(ENV_API_BASE_URL)
        if env_url:
            try:
                config = UserConfig.model_validate(
                    {**config.model_dump(), "api_base_url": env_url}
                )
            except ValidationError as e:
                raise ConfigValidationError(ENV_API_BASE_URL, e.errors()[0]["msg"])
        return config

    def delete(self) -> bool:
        """Delete configuration file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.config_path.unlink()
            return True
        return False


def capability_table_for(config: UserConfig) -> CapabilityTable:
    """WMI table configured for this user: the TOML override or the built-in one."""
    if config.ev_table_path is None:
        return DEFAULT_EV_CAPABILITIES
    return load_capability_table(config.ev_table_path)
