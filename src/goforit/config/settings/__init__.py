"""Config settings – 12-factor env-based configuration."""
from goforit.config.settings.base import Settings
from goforit.config.settings.flagset import FlagsetSettings
from goforit.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "FlagsetSettings", "Settings", "SettingsLoader"]
