from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from tests.support.connections import Journal

_CONFIG_ENV_VARS = (
    "DSASSIGN_ASYNC",
    "DSASSIGN_PROGRESS",
    "DSASSIGN_LOG_LEVEL",
    "DSASSIGN_LOGINDATA",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def journal() -> Journal:
    return []
