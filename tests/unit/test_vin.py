"""Tests for VIN validation and EV detection."""

import pytest

from vpassport.exceptions import CapabilityTableError
from vpassport.inspection.vin import (
    DEFAULT_EV_CAPABILITIES,
    HEURISTIC_CONFIDENCE,
    classify,
    format_vin,
    is_valid_vin,
    load_capability_table,
    normalize_vin,
    wmi_of,
)
from vpassport.models import EvCapability, VinError


class TestClassifyKnownMakes:
    def test_mercedes(self):
        result = classify("WDD2040082R088866")
        assert result.is_electric is True
        assert result.make == "Mercedes-Benz"
        assert result.battery_estimate_kwh == 80
        assert result.smartcar_compatible is True
        assert result.confidence == 0.7
        assert result.source == "vin_heuristic"
        assert result.error is None
        assert result.notes is None

    @pytest.mark.parametrize("wmi,make,kwh", [
        ("WBA", "BMW", 85),
        ("JYJ", "Tesla", 75),
        ("WVW", "Volkswagen", 77),
    ])
    def test_other_supported_makes(self, wmi, make, kwh):
        result = classify(f"{wmi}12345678901234")
        assert result.is_electric is True
        assert result.make == make
        assert result.battery_estimate_kwh == kwh
        assert result.smartcar_compatible is True

    def test_byd_carries_caveat(self):
        result = classify("LGX12345678901234")
        assert result.is_electric is True
        assert result.make == "BYD"
        assert result.smartcar_compatible is False
        assert result.battery_estimate_kwh == 60
        assert result.caveat == "Confirm locally"
        assert result.notes == "Confirm locally"


class TestClassifyNonElectric:
    def test_unknown_wmi(self):
        result = classify("MAJ12345678901234")
        assert result.is_electric is False
        assert result.make is None
        assert result.smartcar_compatible is False
        assert result.battery_estimate_kwh is None
        assert result.confidence == 0
        assert result.error is None
        assert result.is_valid_vin is True

    def test_another_unknown_wmi(self):
        result = classify("XYZ12345678901234")
        assert result.is_electric is False
        assert result.confidence == 0


class TestClassifyRejected:
    def test_too_short(self):
        result = classify("WDD204008")
        assert result.is_electric is False
        assert result.confidence == 0
        assert result.error == VinError.INVALID_LENGTH
        assert result.notes == "invalid_vin_length"

    def test_too_long(self):
        assert classify("WDD2040082R0888661").error == VinError.INVALID_LENGTH

    def test_forbidden_letter(self):
        result = classify("WDD2040082R08886I")
        assert result.error == VinError.INVALID_CHARACTERS
        assert result.notes == "invalid_vin_characters"
        assert result.is_valid_vin is False

    def test_length_checked_before_characters(self):
        assert classify("IOQ").error == VinError.INVALID_LENGTH

    @pytest.mark.parametrize("value", [None, "", "   ", 12345, ["WDD"]])
    def test_missing_or_non_string(self, value):
        result = classify(value)
        assert result.is_electric is False
        assert result.error == VinError.INVALID_LENGTH


class TestClassifyNormalization:
    def test_case_insensitive(self):
        assert classify("wdd2040082r088866") == classify("WDD2040082R088866")

    def test_whitespace_trimmed(self):
        assert classify("  WDD2040082R088866\n") == classify("WDD2040082R088866")

    def test_confidence_tracks_is_electric(self):
        for vin in ["WDD2040082R088866", "MAJ12345678901234", "short", "LGX12345678901234"]:
            result = classify(vin)
            assert (result.confidence > 0) == result.is_electric


class TestCustomTable:
    def test_custom_table_replaces_default(self):
        table = {"MAJ": EvCapability(make="Ford", smartcar_supported=True, battery_kwh=68)}
        result = classify("MAJ12345678901234", table)
        assert result.is_electric is True
        assert result.make == "Ford"
        assert result.confidence == HEURISTIC_CONFIDENCE

        assert classify("WDD2040082R088866", table).is_electric is False

    def test_default_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_EV_CAPABILITIES["MAJ"] = EvCapability(make="Ford")


class TestLoadCapabilityTable:
    def test_load(self, tmp_path):
        path = tmp_path / "ev.toml"
        path.write_text(
            '[lrw]\nmake = "Tesla"\nsmartcar_supported = true\nbattery_kwh = 75\n'
            'note = "Shanghai build"\n',
            encoding="utf-8",
        )
        table = load_capability_table(path)
        assert table["LRW"].make == "Tesla"
        assert table["LRW"].note == "Shanghai build"
        assert classify("LRW12345678901234", table).battery_estimate_kwh == 75

    def test_missing_file(self, tmp_path):
        with pytest.raises(CapabilityTableError):
            load_capability_table(tmp_path / "missing.toml")

    def test_bad_toml(self, tmp_path):
        path = tmp_path / "ev.toml"
        path.write_text("[LRW\nmake=", encoding="utf-8")
        with pytest.raises(CapabilityTableError) as exc:
            load_capability_table(path)
        assert "TOML parse error" in exc.value.details

    def test_bad_wmi(self, tmp_path):
        path = tmp_path / "ev.toml"
        path.write_text('[LRWX]\nmake = "Tesla"\n', encoding="utf-8")
        with pytest.raises(CapabilityTableError):
            load_capability_table(path)

    def test_entry_not_a_table(self, tmp_path):
        path = tmp_path / "ev.toml"
        path.write_text('LRW = "Tesla"\n', encoding="utf-8")
        with pytest.raises(CapabilityTableError):
            load_capability_table(path)

    def test_entry_missing_make(self, tmp_path):
        path = tmp_path / "ev.toml"
        path.write_text("[LRW]\nbattery_kwh = 75\n", encoding="utf-8")
        with pytest.raises(CapabilityTableError):
            load_capability_table(path)


class TestVinHelpers:
    def test_normalize(self):
        assert normalize_vin(" wdd2040082r088866 ") == "WDD2040082R088866"
        assert normalize_vin(None) == ""

    def test_format_strips_separators(self):
        assert format_vin("wdd-204008 2r088866") == "WDD2040082R088866"

    def test_format_caps_length(self):
        assert format_vin("WDD2040082R088866XYZ") == "WDD2040082R088866"
        assert format_vin("WDD2040082R088866XYZ", max_length=None) == "WDD2040082R088866XYZ"

    def test_is_valid_vin(self):
        assert is_valid_vin("wdd2040082r088866") is True
        assert is_valid_vin("WDD2040082R08886O") is False
        assert is_valid_vin("WDD") is False

    def test_wmi_of(self):
        assert wmi_of("WDD2040082R088866") == "WDD"
        assert wmi_of("bad") is None
