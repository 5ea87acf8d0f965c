"""Progress reporters and the guard the orchestrator drives them through."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dsassign.domain.ports.progress import ProgressReporter

log = getLogger(__name__)


@dataclass(slots=True)
class ProgressState:
    """Monotonic tick counter with a known total."""

    total: int
    title: str = ""
    ticks: int = 0

    def advance(self) -> int:
        self.ticks += 1
        return self.ticks

    @property
    def done(self) -> bool:
        return self.ticks >= self.total


class NullProgressReporter:
    """Reporter that ignores every tick."""

    def new_progress(self, total: int, *, title: str) -> object:
        _ = (total, title)
        return None

    def tick(self, handle: object, label: str) -> None:
        _ = (handle, label)


class LoggingProgressReporter:
    """Render progress as log lines, one per tick."""

    def __init__(self, *, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or log
        self._level = level

    def new_progress(self, total: int, *, title: str) -> ProgressState:
        return ProgressState(total=total, title=title)

    def tick(self, handle: object, label: str) -> None:
        if not isinstance(handle, ProgressState):
            raise TypeError(f"Unexpected progress handle: {handle!r}")
        handle.advance()
        self._logger.log(self._level, "[%d/%d] %s", handle.ticks, handle.total, label)


class ProgressTracker:
    """Counts ticks for one call and forwards them to a reporter.

    Reporter failures are logged and otherwise ignored so that progress output
    can never change the outcome of an assignment.
    """

    def __init__(self, reporter: ProgressReporter, *, total: int, title: str) -> None:
        self.state = ProgressState(total=total, title=title)
        self._reporter = reporter
        self._handle: object = None
        try:
            self._handle = reporter.new_progress(total, title=title)
        except Exception:  # noqa: BLE001
            log.warning("Progress reporter failed to start %r", title, exc_info=True)

    def tick(self, label: str) -> None:
        self.state.advance()
        try:
            self._reporter.tick(self._handle, label)
        except Exception:  # noqa: BLE001
            log.warning("Progress reporter failed on %r", label, exc_info=True)
