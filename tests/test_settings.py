"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from src.ecc_console.models.schemas import LogLevel
from src.ecc_console.settings import Settings, parse_comma_separated_list


class TestSettings:
    """Test cases for Settings."""

    def test_environment_values(self, mock_settings, keymap_file):
        """Test settings are read from the environment."""
        assert mock_settings.partner_key == "test-partner-key"
        assert mock_settings.app_id == "EccTest"
        assert mock_settings.app_name == "EasyCallControl Console"
        assert mock_settings.keymap_path == str(keymap_file)
        assert mock_settings.simulated_devices == ["Headset A", "Headset B"]
        assert mock_settings.sdk_log_level == LogLevel.ERROR
        assert mock_settings.log_level == "INFO"

    def test_invalid_app_id(self):
        """Test app ids with spaces are rejected."""
        with pytest.raises(ValidationError, match="ECC_APP_ID"):
            Settings(ECC_APP_ID="not valid!")

    def test_blank_partner_key(self):
        """Test a blank partner key is treated as unset."""
        settings = Settings(ECC_PARTNER_KEY="   ")
        assert settings.partner_key is None

    def test_missing_keymap_falls_back(self, temp_dir, capsys):
        """Test a missing keymap path warns and uses defaults."""
        settings = Settings(KEYMAP_PATH=str(temp_dir / "missing.yaml"))

        assert settings.keymap_path is None
        assert "does not exist" in capsys.readouterr().out

    def test_sdk_log_level_case_insensitive(self):
        """Test SDK log level names ignore case."""
        settings = Settings(SDK_LOG_LEVEL="Warning")
        assert settings.sdk_log_level == LogLevel.WARNING

    def test_invalid_sdk_log_level(self):
        """Test unknown SDK log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(SDK_LOG_LEVEL="verbose")

    def test_log_level_normalized(self):
        """Test log level names are upper-cased."""
        assert Settings(LOG_LEVEL="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings(LOG_LEVEL="loud")

    def test_simulated_devices_list(self):
        """Test device names may be given as a list."""
        settings = Settings(SIMULATED_DEVICES=["One", "Two"])
        assert settings.simulated_devices == ["One", "Two"]


class TestParseCommaSeparatedList:
    """Test cases for parse_comma_separated_list."""

    def test_parse(self):
        assert parse_comma_separated_list(" a, b ,,c ") == ["a", "b", "c"]
        assert parse_comma_separated_list("") == []
