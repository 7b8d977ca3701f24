"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import json
from typing import Any

import pytest

from monthly_averages.core import config as config_module
from tests.fixtures.transactions import make_transaction


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings document for the test run."""
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "url": "https://api.example.test/api",
                "token": "test-app-token",
                "user": "test@example.com",
                "pass": "test-password",
            }
        )
    )
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, settings_file):
    """Point configuration at the test settings and reset the cached config."""
    monkeypatch.setenv("MONTHLY_AVERAGES_ENV", "test")
    monkeypatch.setenv("MONTHLY_AVERAGES_SETTINGS", str(settings_file))
    monkeypatch.delenv("MONTHLY_AVERAGES_APP_TOKEN", raising=False)
    monkeypatch.delenv("MONTHLY_AVERAGES_TIMEOUT", raising=False)
    monkeypatch.delenv("MONTHLY_AVERAGES_USER", raising=False)
    monkeypatch.delenv("MONTHLY_AVERAGES_PASS", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def donut_transactions() -> list[dict[str, Any]]:
    """Two donut shop purchases in January 2016."""
    return [
        make_transaction("1453195740000", -111200, "2016-01-18T00:00:00.000Z", "Krispy Kreme Donuts"),
        make_transaction("1453214340000", -76400, "2016-01-19T00:00:00.000Z", "Dunkin #336784"),
    ]


@pytest.fixture
def cc_payment_transactions() -> list[dict[str, Any]]:
    """A card payment and its credit within 24 hours, plus an unrelated credit."""
    return [
        make_transaction("1453195740001", -1000, "2016-01-18T00:00:00.000Z", "CC Payment"),
        make_transaction("1453214340002", 1200, "2016-01-18T12:00:00.000Z", "Some Other Credit"),
        make_transaction("1453214340003", 1000, "2016-01-19T00:00:00.000Z", "CC Credit"),
    ]


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "matcher: Tests for credit card payment matching")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
