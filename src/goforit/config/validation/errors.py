"""Config validation – errors raised while loading goforit settings."""
from __future__ import annotations

from goforit.kernel.errors import GoforitError


class ConfigError(GoforitError):
    """Settings could not be loaded or do not describe a usable engine."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable without a default is not set.

    ``setting_name`` is the full variable name, e.g. ``GOFORIT_CSV_PATH``.
    """

    default_code = "missing_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"{setting_name} must be set",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting was read but its value cannot configure a flagset."""

    default_code = "invalid_setting"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} rejected: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
