"""Decide, once per call, which connections are triggered without blocking."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from dsassign.domain.ports.connection import Connection
    from dsassign.domain.types import OperationKind

log = getLogger(__name__)


def is_async_capable(connection: Connection, kind: OperationKind, *, prefer_async: bool) -> bool:
    """Return whether ``connection`` should be triggered asynchronously for ``kind``.

    A caller preference of ``prefer_async=False`` wins over any declared capability.
    """

    if not prefer_async:
        return False
    return connection.capabilities().supports_async(kind)


@dataclass(slots=True, frozen=True)
class DispatchPlan:
    """Connections split into the non-blocking and blocking waves, in declared order."""

    async_names: tuple[str, ...]
    sync_names: tuple[str, ...]

    def is_async(self, name: str) -> bool:
        return name in self.async_names


def plan_dispatch(
    connections: Mapping[str, Connection],
    kind: OperationKind,
    *,
    prefer_async: bool,
) -> DispatchPlan:
    async_names: list[str] = []
    sync_names: list[str] = []
    for name, connection in connections.items():
        if is_async_capable(connection, kind, prefer_async=prefer_async):
            async_names.append(name)
        else:
            sync_names.append(name)
    log.debug("Dispatch plan for %s: async=%s sync=%s", kind, async_names, sync_names)
    return DispatchPlan(async_names=tuple(async_names), sync_names=tuple(sync_names))
