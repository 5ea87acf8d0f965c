"""Assignment defaults read from the environment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .env import env_flag, env_str, require_env_vars
from .errors import InvalidConfigurationError

ASYNC_ENV_VAR = "DSASSIGN_ASYNC"
PROGRESS_ENV_VAR = "DSASSIGN_PROGRESS"
LOG_LEVEL_ENV_VAR = "DSASSIGN_LOG_LEVEL"
LOGIN_DATA_ENV_VAR = "DSASSIGN_LOGINDATA"


@dataclass(frozen=True)
class AssignConfig:
    """Caller-level defaults applied when an assign call leaves them unset."""

    asynchronous: bool = True
    progress: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> AssignConfig:
        log_level = env_str(LOG_LEVEL_ENV_VAR, default=cls.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise InvalidConfigurationError(
                f"Invalid log level for {LOG_LEVEL_ENV_VAR}: {log_level}"
            )
        return cls(
            asynchronous=env_flag(ASYNC_ENV_VAR, default=cls.asynchronous),
            progress=env_flag(PROGRESS_ENV_VAR, default=cls.progress),
            log_level=log_level,
        )


def get_assign_config() -> AssignConfig:
    return AssignConfig.from_environment()


def get_login_data_path() -> Path:
    """Return the login data file named by ``DSASSIGN_LOGINDATA``."""

    values = require_env_vars((LOGIN_DATA_ENV_VAR,))
    return Path(values[LOGIN_DATA_ENV_VAR]).expanduser()
