"""Connection drivers and the login data used to open them."""

from __future__ import annotations

from .logindata import LoginData, LoginDataError, LoginEntry, load_login_data, parse_login_data
from .memory import MemoryConnection, MemoryDriverError
from .registry import (
    DriverNotFoundError,
    get_driver,
    list_drivers,
    load_driver_plugins,
    open_connections,
    register_driver,
)

__all__ = [
    "DriverNotFoundError",
    "LoginData",
    "LoginDataError",
    "LoginEntry",
    "MemoryConnection",
    "MemoryDriverError",
    "get_driver",
    "list_drivers",
    "load_driver_plugins",
    "load_login_data",
    "open_connections",
    "parse_login_data",
    "register_driver",
]
