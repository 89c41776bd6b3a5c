"""Report settings and the YAML loader that produces them."""

from .settings import (
    CONFIG_ENV_VAR,
    DEFAULT_CODE_FENCE,
    ReportSettings,
    SettingsLoader,
    settings_files_from_env,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CODE_FENCE",
    "ReportSettings",
    "SettingsLoader",
    "settings_files_from_env",
]
