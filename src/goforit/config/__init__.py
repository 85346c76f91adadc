"""Config – settings loading and validation."""

from goforit.config.settings import EnvSettingsLoader, FlagsetSettings, Settings, SettingsLoader
from goforit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "FlagsetSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
