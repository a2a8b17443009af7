"""Tests for battery colour bands."""

import math

import pytest

from vpassport.inspection.battery import charging_tone, soc_band, soh_band
from vpassport.models import ChargingStatus, ChargingTone, HealthBand


class TestSocBand:
    @pytest.mark.parametrize("pct,band", [
        (100, HealthBand.GOOD),
        (80, HealthBand.GOOD),
        (79.9, HealthBand.WARNING),
        (20, HealthBand.WARNING),
        (19, HealthBand.CRITICAL),
        (0, HealthBand.CRITICAL),
    ])
    def test_default_thresholds(self, pct, band):
        assert soc_band(pct) == band

    def test_custom_thresholds(self):
        assert soc_band(60, good_at=50, warning_at=10) == HealthBand.GOOD
        assert soc_band(15, good_at=50, warning_at=10) == HealthBand.WARNING

    def test_missing(self):
        assert soc_band(None) is None

    def test_nan_has_no_band(self):
        assert soc_band(math.nan) is None


class TestSohBand:
    @pytest.mark.parametrize("pct,band", [
        (95, HealthBand.GOOD),
        (90, HealthBand.GOOD),
        (85, HealthBand.WARNING),
        (80, HealthBand.WARNING),
        (79, HealthBand.CRITICAL),
    ])
    def test_thresholds(self, pct, band):
        assert soh_band(pct) == band

    def test_missing(self):
        assert soh_band(None) is None

    def test_nan_has_no_band(self):
        assert soh_band(math.nan) is None


class TestChargingTone:
    def test_tones(self):
        assert charging_tone(ChargingStatus.CHARGING) == ChargingTone.POSITIVE
        assert charging_tone(ChargingStatus.DISCHARGING) == ChargingTone.CAUTION
        assert charging_tone(ChargingStatus.IDLE) == ChargingTone.NEUTRAL

    def test_unknown_is_neutral(self):
        assert charging_tone(None) == ChargingTone.NEUTRAL
