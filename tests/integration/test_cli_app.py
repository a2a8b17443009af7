"""Integration tests for CLI app entry points."""

import pytest
from unittest.mock import patch
from typer.testing import CliRunner

from vpassport.cli.app import app
from vpassport.core.config import ConfigManager
from vpassport.models import UserConfig

runner = CliRunner()


@pytest.fixture
def manager(tmp_path):
    """Point every command's ConfigManager at an isolated dir."""
    config_dir = tmp_path / ".config" / "vpassport"
    manager = ConfigManager(config_dir=config_dir)
    with (
        patch("vpassport.cli.commands.passport.ConfigManager", return_value=manager),
        patch("vpassport.cli.commands.config.ConfigManager", return_value=manager),
        patch("vpassport.cli.commands.vins.ConfigManager", return_value=manager),
    ):
        yield manager


class TestCLIEntryPoints:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "Usage" in result.output

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ["classify", "dtc", "tyres", "passport", "verify", "config", "vins"]:
            assert command in result.output

    def test_passport_help(self):
        result = runner.invoke(app, ["passport", "--help"])
        assert result.exit_code == 0
        assert "--internal" in result.output
        assert "--all" in result.output

    def test_invalid_command(self):
        result = runner.invoke(app, ["invalid_command"])
        assert result.exit_code != 0


class TestClassifyCommand:
    def test_electric(self, manager):
        result = runner.invoke(app, ["classify", "wdd2040082r088866"])
        assert result.exit_code == 0
        assert "Mercedes-Benz" in result.output
        assert "80 kWh" in result.output

    def test_not_electric(self, manager):
        result = runner.invoke(app, ["classify", "MAJ12345678901234"])
        assert result.exit_code == 0
        assert "No EV match" in result.output

    def test_invalid(self, manager):
        result = runner.invoke(app, ["classify", "ABC"])
        assert result.exit_code == 1
        assert "valid 17-character VIN" in result.output

    def test_custom_table(self, manager, tmp_path):
        table = tmp_path / "ev.toml"
        table.write_text('[MAJ]\nmake = "Ford"\nbattery_kwh = 68\n', encoding="utf-8")
        manager.save(UserConfig(ev_table_path=table))
        result = runner.invoke(app, ["classify", "MAJ12345678901234"])
        assert result.exit_code == 0
        assert "Ford" in result.output

    def test_broken_table(self, manager, tmp_path):
        manager.save(UserConfig(ev_table_path=tmp_path / "missing.toml"))
        result = runner.invoke(app, ["classify", "MAJ12345678901234"])
        assert result.exit_code == 1
        assert "Invalid EV capability table" in result.output


class TestDtcCommand:
    def test_describes_codes(self):
        result = runner.invoke(app, ["dtc", "p0301", "U0100"])
        assert result.exit_code == 0
        assert "Cylinder 1 misfire detected" in result.output
        assert "Network/Comm fault" in result.output

    def test_mixed_valid_and_invalid(self):
        result = runner.invoke(app, ["dtc", "P0420", "Z9999"])
        assert result.exit_code == 0
        assert "Not a valid DTC" in result.output

    def test_all_invalid(self):
        result = runner.invoke(app, ["dtc", "Z9999"])
        assert result.exit_code == 1
        assert "No valid trouble codes" in result.output


class TestTyresCommand:
    def test_critical(self):
        result = runner.invoke(app, ["tyres", "--fl", "1.5", "--fr", "6", "--rl", "6", "--rr", "6"])
        assert result.exit_code == 0
        assert "Critical" in result.output
        assert "Below Legal" in result.output

    def test_uneven(self):
        result = runner.invoke(app, ["tyres", "--fl", "5", "--fr", "5", "--rl", "9", "--rr", "5"])
        assert result.exit_code == 0
        assert "Uneven Wear" in result.output

    def test_partial_readings(self):
        result = runner.invoke(app, ["tyres", "--fl", "7"])
        assert result.exit_code == 0
        assert "No reading" in result.output

    def test_no_readings(self):
        result = runner.invoke(app, ["tyres"])
        assert result.exit_code == 1
        assert "No tyre readings" in result.output


class TestConfigCommand:
    def test_show_defaults(self, manager, mock_keyring):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "http://localhost:8080" in result.output
        assert "not set" in result.output

    def test_set_base_url(self, manager, mock_keyring):
        result = runner.invoke(app, ["config", "--base-url", "https://passports.example.com/"])
        assert result.exit_code == 0
        assert manager.load().api_base_url == "https://passports.example.com"

    def test_invalid_base_url(self, manager, mock_keyring):
        result = runner.invoke(app, ["config", "--base-url", "nope"])
        assert result.exit_code == 1
        assert "Invalid backend URL" in result.output
        assert manager.exists is False

    def test_set_api_key(self, manager, mock_keyring):
        with patch("vpassport.cli.commands.config.Prompt.ask", return_value="sk_test_9876"):
            result = runner.invoke(app, ["config", "--set-api-key"])
        assert result.exit_code == 0
        assert mock_keyring["vpassport:api_key"] == "sk_test_9876"

        shown = runner.invoke(app, ["config"])
        assert "9876" in shown.output
        assert "sk_test_9876" not in shown.output

    def test_clear_api_key(self, manager, mock_keyring):
        mock_keyring["vpassport:api_key"] = "sk_test_9876"
        result = runner.invoke(app, ["config", "--clear-api-key"])
        assert result.exit_code == 0
        assert mock_keyring == {}

    def test_reset(self, manager, mock_keyring):
        manager.save(UserConfig())
        mock_keyring["vpassport:api_key"] = "k"
        result = runner.invoke(app, ["config", "--reset"])
        assert result.exit_code == 0
        assert manager.exists is False
        assert mock_keyring == {}

    def test_corrupt_config(self, manager, mock_keyring):
        manager.config_path.parent.mkdir(parents=True)
        manager.config_path.write_text("timeout_seconds = -1\n", encoding="utf-8")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestVinsCommand:
    def test_list_empty(self, manager):
        result = runner.invoke(app, ["vins"])
        assert result.exit_code == 0
        assert "No saved VINs" in result.output

    def test_add_and_list(self, manager):
        result = runner.invoke(app, ["vins", "--add", "wdd2040082r088866", "--nickname", "EQS"])
        assert result.exit_code == 0
        assert manager.load().saved_vins[0].vin == "WDD2040082R088866"

        listed = runner.invoke(app, ["vins"])
        assert "WDD2040082R088866" in listed.output
        assert "EQS" in listed.output

    def test_add_invalid(self, manager):
        result = runner.invoke(app, ["vins", "--add", "nope"])
        assert result.exit_code == 1
        assert "Invalid VIN" in result.output

    def test_add_duplicate(self, manager):
        manager.save(UserConfig().add_vin("WDD2040082R088866"))
        result = runner.invoke(app, ["vins", "--add", "WDD2040082R088866"])
        assert result.exit_code == 1
        assert "already saved" in result.output

    def test_remove_confirmed(self, manager):
        manager.save(UserConfig().add_vin("WDD2040082R088866"))
        result = runner.invoke(app, ["vins", "--remove", "wdd2040082r088866"], input="y\n")
        assert result.exit_code == 0
        assert manager.load().saved_vins == []

    def test_remove_cancelled(self, manager):
        manager.save(UserConfig().add_vin("WDD2040082R088866"))
        result = runner.invoke(app, ["vins", "--remove", "WDD2040082R088866"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(manager.load().saved_vins) == 1

    def test_remove_missing(self, manager):
        result = runner.invoke(app, ["vins", "--remove", "WDD2040082R088866"])
        assert result.exit_code == 1
        assert "not found" in result.output
