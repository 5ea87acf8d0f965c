"""Login data file schema: which servers to reach, and what to assign on each."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_DRIVER = "memory"


class LoginDataError(ValueError):
    """Raised when a login data file cannot be read or validated."""


class LoginEntry(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    server: str = Field(min_length=1)
    driver: str = DEFAULT_DRIVER
    url: str | None = None
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    table: str | None = None
    resource: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning("Login data: unmodeled keys: %s", ", ".join(sorted(new_keys)))


class LoginData(BaseModel):
    entries: list[LoginEntry] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_servers(self) -> LoginData:
        seen: set[str] = set()
        for entry in self.entries:
            if entry.server in seen:
                raise ValueError(f"Duplicate server in login data: {entry.server}")
            seen.add(entry.server)
        return self

    @property
    def servers(self) -> list[str]:
        return [entry.server for entry in self.entries]

    def select(self, servers: list[str] | None) -> LoginData:
        """Return the subset of entries for ``servers``, in login data order."""

        if not servers:
            return self
        unknown = sorted(set(servers).difference(self.servers))
        if unknown:
            raise LoginDataError(f"Unknown server(s): {', '.join(unknown)}")
        return LoginData(entries=[entry for entry in self.entries if entry.server in servers])

    def target_rows(self, column: str) -> list[dict[str, object]]:
        """Rows of ``server`` and ``column`` usable as a table-form target spec."""

        return [
            {"server": entry.server, column: getattr(entry, column, None)}
            for entry in self.entries
        ]


def parse_login_data(payload: object) -> LoginData:
    """Validate a decoded login data document (a list of entries)."""

    try:
        if isinstance(payload, list):
            return LoginData.model_validate({"entries": payload})
        return LoginData.model_validate(payload)
    except ValidationError as exc:
        raise LoginDataError(f"Invalid login data: {exc}") from exc


def load_login_data(path: Path) -> LoginData:
    try:
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise LoginDataError(f"Cannot read login data from {path}: {exc}") from exc
    return parse_login_data(payload)
