"""Registry of connection drivers, keyed by the ``driver`` name of a login entry."""

from __future__ import annotations

from collections.abc import Callable
from importlib import metadata
from logging import getLogger
from typing import TYPE_CHECKING

from .logindata import LoginData, LoginEntry
from .memory import MemoryConnection

if TYPE_CHECKING:
    from dsassign.domain.ports.connection import Connection

type ConnectionFactory = Callable[[LoginEntry], Connection]

DRIVER_ENTRY_POINT_GROUP = "dsassign.drivers"

log = getLogger(__name__)

_DRIVERS: dict[str, ConnectionFactory] = {}


class DriverNotFoundError(LookupError):
    """Raised when no driver is registered under the requested name."""


def register_driver(name: str, factory: ConnectionFactory, *, overwrite: bool = False) -> None:
    key = name.strip().lower()
    if not key:
        raise ValueError("Driver name must be non-empty")
    if key in _DRIVERS and not overwrite:
        raise ValueError(f"Driver already registered: {key}")
    _DRIVERS[key] = factory


def get_driver(name: str) -> ConnectionFactory:
    key = name.strip().lower()
    try:
        return _DRIVERS[key]
    except KeyError as exc:
        raise DriverNotFoundError(f"Unknown connection driver: {name}") from exc


def list_drivers() -> list[str]:
    return sorted(_DRIVERS)


def load_driver_plugins(*, group: str = DRIVER_ENTRY_POINT_GROUP) -> int:
    """Register connection factories published under the ``group`` entry points.

    Plugin pyproject.toml example::

        [project.entry-points."dsassign.drivers"]
        opal = "my_pkg.driver:connect"

    Returns the number of drivers loaded.
    """

    loaded = 0
    for entry_point in metadata.entry_points(group=group):
        factory = entry_point.load()
        if not callable(factory):
            log.warning("Skipping driver plugin %s: not callable", entry_point.name)
            continue
        register_driver(entry_point.name, factory, overwrite=True)
        loaded += 1
    return loaded


def open_connections(login_data: LoginData) -> dict[str, Connection]:
    """Create one connection per login entry, keyed by server name."""

    connections: dict[str, Connection] = {}
    for entry in login_data.entries:
        factory = get_driver(entry.driver)
        log.debug("Opening %s with driver %s", entry.server, entry.driver)
        connections[entry.server] = factory(entry)
    return connections


def _memory_connection(entry: LoginEntry) -> MemoryConnection:
    tables = entry.options.get("tables", {})
    resources = entry.options.get("resources", {})
    if not isinstance(tables, dict) or not isinstance(resources, dict):
        raise ValueError(f"Memory driver options for {entry.server} must map names to values")
    return MemoryConnection(name=entry.server, tables=tables, resources=resources)


register_driver("memory", _memory_connection)
