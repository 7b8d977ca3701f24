#!/usr/bin/env python3
"""
Configuration Management for Monthly Averages

Loads the settings document (API base URL, default application token and
fallback test credentials) plus environment overrides. The settings
document is required: without it the process cannot reach the API, so
loading fails instead of falling back to defaults.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import SettingsError

# Load environment variables from .env file
load_dotenv()

DEFAULT_SETTINGS_FILE = "conf/settings.json"

# Names of donut merchants, matched case-insensitively
DEFAULT_DONUT_MERCHANTS = frozenset({"KRISPY KREME DONUTS", "DUNKIN #336784"})


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ApiConfig:
    """Upstream API configuration."""

    base_url: str
    app_token: str | None = None
    timeout: float = 30.0
    # Fallback credentials, used by the live API tests only
    user: str | None = None
    password: str | None = None


@dataclass
class ReportConfig:
    """Defaults for the monthly averages report."""

    donut_merchants: frozenset[str] = DEFAULT_DONUT_MERCHANTS
    payment_window_hours: int = 24

    @property
    def payment_window(self) -> timedelta:
        return timedelta(hours=self.payment_window_hours)


@dataclass
class Config:
    """
    Main configuration class.

    Built once at process start by the CLI. The aggregation engine never
    reads it directly; the CLI copies the relevant values into explicit
    report options.
    """

    environment: Environment
    settings_file: Path

    api: ApiConfig
    report: ReportConfig

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from the settings document and environment variables."""
        env_name = os.getenv("MONTHLY_AVERAGES_ENV", "development")
        try:
            env = Environment(env_name)
        except ValueError as e:
            raise SettingsError(f"Invalid MONTHLY_AVERAGES_ENV: {env_name!r}") from e

        settings_file = Path(os.getenv("MONTHLY_AVERAGES_SETTINGS", DEFAULT_SETTINGS_FILE)).expanduser()
        settings = load_settings(settings_file)

        api = ApiConfig(
            base_url=str(_first(settings, "url", "api_url") or "").rstrip("/"),
            app_token=os.getenv("MONTHLY_AVERAGES_APP_TOKEN") or _first(settings, "token", "api_token"),
            timeout=_convert("timeout", os.getenv("MONTHLY_AVERAGES_TIMEOUT", settings.get("timeout", 30)), float),
            user=_first(settings, "user", "api_user"),
            password=_first(settings, "pass", "api_pass"),
        )

        donut_merchants = settings.get("donut_merchants")
        if donut_merchants is not None and not isinstance(donut_merchants, list):
            raise SettingsError(f"Invalid donut_merchants in {settings_file}: expected a list")
        report = ReportConfig(
            donut_merchants=(
                frozenset(str(m) for m in donut_merchants) if donut_merchants is not None else DEFAULT_DONUT_MERCHANTS
            ),
            payment_window_hours=_convert("payment_window_hours", settings.get("payment_window_hours", 24), int),
        )

        return cls(
            environment=env,
            settings_file=settings_file,
            api=api,
            report=report,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.api.base_url:
            errors.append(f"API url is missing from {self.settings_file}")

        if self.api.timeout <= 0:
            errors.append("API timeout must be positive")

        if self.report.payment_window_hours <= 0:
            errors.append("Payment window must be positive")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "api.app_token",
            "api.password",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    elif isinstance(nested_value, frozenset):
                        nested_dict[nested_name] = sorted(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def load_settings(settings_file: Path) -> dict[str, Any]:
    """
    Read the settings document.

    The file may be JSON or YAML; both are read with the YAML loader.

    Raises:
        SettingsError: If the file is missing, unreadable or not a mapping
    """
    try:
        with open(settings_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Unable to load settings ({settings_file}): {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Unable to load settings ({settings_file}): expected a mapping")
    return data


def _convert(name: str, value: Any, converter: Callable[[Any], Any]) -> Any:
    """Convert a settings value, reporting failures as SettingsError."""
    try:
        return converter(value)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid {name}: {value!r}") from e


def _first(settings: dict[str, Any], *keys: str) -> Any:
    """Return the first present value among alternative key spellings."""
    for key in keys:
        value = settings.get(key)
        if value is not None:
            return value
    return None


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise SettingsError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
