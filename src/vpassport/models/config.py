"""User configuration model."""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from vpassport.models.inspection import Audience

VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")

DEFAULT_API_BASE_URL = "http://localhost:8080"


class SavedVin(BaseModel):
    """A VIN the user looks up regularly."""

    vin: str
    nickname: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Optional friendly name, e.g. 'Lot 14 EQS'",
    )
    added_at: datetime = Field(default_factory=datetime.now)

    @field_validator("vin")
    @classmethod
    def validate_vin(cls, v: str) -> str:
        """Normalize to uppercase and reject malformed VINs."""
        normalized = v.strip().upper()
        if not VIN_PATTERN.match(normalized):
            raise ValueError(
                "VIN must be 17 alphanumeric characters (I, O, Q not allowed)"
            )
        return normalized

    @property
    def display_name(self) -> str:
        """Friendly display name: nickname or VIN."""
        return self.nickname or self.vin


class UserConfig(BaseModel):
    """Complete user configuration."""

    version: int = Field(default=1, description="Config schema version")

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # Passport backend
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL)
    timeout_seconds: float = Field(default=10.0, gt=0, le=300)

    # Display
    audience: Audience = Audience.CUSTOMER
    soc_good_pct: float = Field(default=80.0, ge=0, le=100)
    soc_warning_pct: float = Field(default=20.0, ge=0, le=100)

    # Replacement WMI table (TOML); built-in table when unset
    ev_table_path: Optional[Path] = None

    saved_vins: list[SavedVin] = Field(default_factory=list)

    @field_validator("api_base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Strip trailing slashes and require an http(s) URL."""
        normalized = v.strip().rstrip("/")
        if not re.match(r"^https?://[^/\s]+", normalized):
            raise ValueError("API base URL must start with http:// or https://")
        return normalized

    @model_validator(mode="after")
    def validate_thresholds(self) -> "UserConfig":
        """Ensure the SoC warning threshold sits at or below the good threshold."""
        if self.soc_warning_pct > self.soc_good_pct:
            raise ValueError("soc_warning_pct must not exceed soc_good_pct")
        return self

    @model_validator(mode="after")
    def validate_unique_vins(self) -> "UserConfig":
        """Ensure no VIN is saved twice."""
        vins = [entry.vin for entry in self.saved_vins]
        if len(vins) != len(set(vins)):
            raise ValueError("Saved VINs must be unique")
        return self

    def model_post_init(self, __context: object) -> None:
        """Update timestamp on any modification."""
        object.__setattr__(self, "updated_at", datetime.now())

    # --- Saved VIN management ---

    def get_vin(self, vin: str) -> Optional[SavedVin]:
        """Find a saved VIN (case-insensitive)."""
        normalized = vin.strip().upper()
        for entry in self.saved_vins:
            if entry.vin == normalized:
                return entry
        return None

    def add_vin(self, vin: str, nickname: Optional[str] = None) -> "UserConfig":
        """Return new config with VIN added."""
        entry = SavedVin(vin=vin, nickname=nickname)
        if self.get_vin(entry.vin):
            raise ValueError(f"VIN '{entry.vin}' is already saved")
        return self.model_copy(update={"saved_vins": [*self.saved_vins, entry]})

    def remove_vin(self, vin: str) -> "UserConfig":
        """Return new config with VIN removed."""
        normalized = vin.strip().upper()
        remaining = [v for v in self.saved_vins if v.vin != normalized]
        if len(remaining) == len(self.saved_vins):
            raise ValueError(f"VIN '{vin}' not found")
        return self.model_copy(update={"saved_vins": remaining})
