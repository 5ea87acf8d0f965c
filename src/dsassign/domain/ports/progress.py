"""Observer port for progress reporting."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressReporter(Protocol):
    """Receives ticks while an assign call walks its connections.

    Implementations are purely observational: whatever they do, or fail to do,
    has no effect on which connections get assigned.
    """

    def new_progress(self, total: int, *, title: str) -> object: ...

    def tick(self, handle: object, label: str) -> None: ...


__all__ = ["ProgressReporter"]
