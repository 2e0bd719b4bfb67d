"""Config – 12-factor pagination settings and loaders."""

from mp_keyset.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_keyset.config.loaders import EnvSettingsLoader, SettingsLoader
from mp_keyset.config.settings import PaginationSettings, Settings

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PaginationSettings",
    "Settings",
    "SettingsLoader",
]
