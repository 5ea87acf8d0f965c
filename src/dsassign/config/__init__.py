"""Application configuration helpers."""

from __future__ import annotations

from .assign import AssignConfig, get_assign_config, get_login_data_path
from .env import env_flag, env_str, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError

__all__ = [
    "AssignConfig",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "env_flag",
    "env_str",
    "get_assign_config",
    "get_login_data_path",
    "require_env_vars",
]
