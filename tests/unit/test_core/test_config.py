#!/usr/bin/env python3
"""Tests for configuration loading."""

from datetime import timedelta

import pytest

from monthly_averages.core.config import (
    DEFAULT_DONUT_MERCHANTS,
    Config,
    Environment,
    get_config,
    load_settings,
    reload_config,
)
from monthly_averages.core.errors import SettingsError


class TestConfigLoading:
    """Test configuration loading from the settings document."""

    def test_config_loads_settings(self, settings_file):
        config = get_config()

        assert config.environment == Environment.TEST
        assert config.settings_file == settings_file
        assert config.api.base_url == "https://api.example.test/api"
        assert config.api.app_token == "test-app-token"
        assert config.api.user == "test@example.com"
        assert config.api.password == "test-password"
        assert config.report.donut_merchants == frozenset(DEFAULT_DONUT_MERCHANTS)
        assert config.report.payment_window == timedelta(hours=24)

    def test_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config_rereads_environment(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("MONTHLY_AVERAGES_APP_TOKEN", "override-token")
        second = reload_config()

        assert second is not first
        assert second.api.app_token == "override-token"

    def test_alternate_key_names_and_yaml(self, tmp_path, monkeypatch):
        """The settings document may be YAML and use the api_* key names."""
        path = tmp_path / "settings.yaml"
        path.write_text(
            "api_url: https://api.example.test/v2/\n"
            "api_token: yaml-token\n"
            "api_user: yaml@example.com\n"
            "api_pass: yaml-pass\n"
            "donut_merchants:\n"
            "  - Tim Hortons\n"
        )
        monkeypatch.setenv("MONTHLY_AVERAGES_SETTINGS", str(path))

        config = Config.from_environment()

        assert config.api.base_url == "https://api.example.test/v2"
        assert config.api.app_token == "yaml-token"
        assert config.api.user == "yaml@example.com"
        assert config.report.donut_merchants == frozenset({"Tim Hortons"})


class TestConfigErrors:
    """Test fatal configuration errors."""

    def test_missing_settings_file_is_fatal(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MONTHLY_AVERAGES_SETTINGS", str(tmp_path / "missing.json"))

        with pytest.raises(SettingsError, match="Unable to load settings"):
            get_config()

    def test_non_mapping_settings(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(SettingsError):
            load_settings(path)

    def test_missing_url_fails_validation(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        path.write_text('{"token": "abc"}')
        monkeypatch.setenv("MONTHLY_AVERAGES_SETTINGS", str(path))

        with pytest.raises(SettingsError, match="API url is missing"):
            get_config()

    def test_unknown_environment_is_settings_error(self, monkeypatch):
        monkeypatch.setenv("MONTHLY_AVERAGES_ENV", "staging")

        with pytest.raises(SettingsError, match="MONTHLY_AVERAGES_ENV"):
            get_config()

    def test_bad_timeout_override_is_settings_error(self, monkeypatch):
        monkeypatch.setenv("MONTHLY_AVERAGES_TIMEOUT", "soon")

        with pytest.raises(SettingsError, match="Invalid timeout"):
            get_config()

    @pytest.mark.parametrize(
        "settings,message",
        [
            ('{"url": "https://x.test", "timeout": "slow"}', "Invalid timeout"),
            ('{"url": "https://x.test", "payment_window_hours": "a day"}', "Invalid payment_window_hours"),
            ('{"url": "https://x.test", "payment_window_hours": null}', "Invalid payment_window_hours"),
            ('{"url": "https://x.test", "donut_merchants": "Dunkin"}', "Invalid donut_merchants"),
        ],
        ids=["timeout", "window", "null_window", "merchants"],
    )
    def test_bad_settings_values_are_settings_errors(self, tmp_path, monkeypatch, settings, message):
        path = tmp_path / "settings.json"
        path.write_text(settings)
        monkeypatch.setenv("MONTHLY_AVERAGES_SETTINGS", str(path))

        with pytest.raises(SettingsError, match=message):
            get_config()


class TestConfigToDict:
    """Test configuration serialization."""

    def test_sensitive_fields_are_redacted(self):
        data = get_config().to_dict()

        assert data["api"]["app_token"] == "***REDACTED***"
        assert data["api"]["password"] == "***REDACTED***"
        assert data["api"]["base_url"] == "https://api.example.test/api"
        assert data["environment"] == "test"
        assert data["report"]["donut_merchants"] == sorted(DEFAULT_DONUT_MERCHANTS)

    def test_include_sensitive(self):
        data = get_config().to_dict(include_sensitive=True)
        assert data["api"]["app_token"] == "test-app-token"
