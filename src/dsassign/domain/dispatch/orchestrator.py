"""Two-wave fan-out of one assignment request over a set of connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from dsassign.domain.errors import AggregateError, SingleConnectionError
from dsassign.domain.types import ErrorRecord, Stage

from .capability import plan_dispatch
from .ledger import ErrorLedger
from .progress import NullProgressReporter, ProgressTracker
from .targets import resolve_targets

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from dsassign.domain.ports.connection import Connection
    from dsassign.domain.ports.progress import ProgressReporter
    from dsassign.domain.requests import AssignmentRequest

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StageAttempt:
    """Outcome of one trigger or finalize call: a handle, or an error record."""

    connection: str
    stage: Stage
    handle: object = None
    error: ErrorRecord | None = None
    cause: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def attempt_stage(connection: str, stage: Stage, call: Callable[[], object]) -> StageAttempt:
    """Run ``call`` and capture any driver failure instead of raising it."""

    try:
        handle = call()
    except Exception as exc:  # noqa: BLE001
        message = str(exc) or type(exc).__name__
        return StageAttempt(
            connection=connection,
            stage=stage,
            error=ErrorRecord(connection=connection, stage=stage, message=message),
            cause=exc,
        )
    return StageAttempt(connection=connection, stage=stage, handle=handle)


@dataclass(slots=True)
class DispatchOrchestrator:
    """Apply one assignment request to many connections with per-connection isolation.

    The fan-out protocol is:

    1. resolve every connection's target (a failure aborts before any remote call);
    2. wave A: trigger every async-capable connection without waiting;
    3. wave B: trigger every other connection, one blocking call at a time;
    4. finalize the pending handles of wave A connections that have not failed;
    5. raise :class:`AggregateError` if any connection failed.

    Issuance is in declared connection order within each wave. Connections that
    succeeded stay assigned when a sibling fails.
    """

    progress: ProgressReporter = field(default_factory=NullProgressReporter)

    def run(
        self,
        connections: Mapping[str, Connection],
        request: AssignmentRequest,
        *,
        asynchronous: bool = True,
    ) -> None:
        names = tuple(connections)
        targets = resolve_targets(names, request.target_spec, value_column=request.value_column)
        plan = plan_dispatch(connections, request.kind, prefer_async=asynchronous)

        ledger = ErrorLedger()
        tracker = ProgressTracker(
            self.progress,
            total=1 + len(names),
            title=f"Assigning {request.noun} ({request.symbol})",
        )
        pending: dict[str, object] = {}

        wave_a = [
            self._trigger(name, connections[name], request, targets[name], asynchronous=True)
            for name in plan.async_names
        ]
        for attempt in wave_a:
            if self._fold(attempt, ledger):
                tracker.tick(self._label(request, attempt, targets[attempt.connection]))
            else:
                pending[attempt.connection] = attempt.handle

        for name in plan.sync_names:
            attempt = self._trigger(
                name, connections[name], request, targets[name], asynchronous=False
            )
            self._fold(attempt, ledger)
            tracker.tick(self._label(request, attempt, targets[name]))

        for name in plan.async_names:
            if name in ledger:
                continue
            attempt = self._finalize(name, connections[name], request, pending[name])
            self._fold(attempt, ledger)
            tracker.tick(self._label(request, attempt, targets[name]))

        tracker.tick(f"Assigned all {request.noun} ({request.symbol} <- ...)")

        if not ledger.is_empty():
            raise AggregateError(ledger.snapshot(), total=len(names))
        log.info("Assigned %s %s on %d connection(s)", request.noun, request.symbol, len(names))

    def run_single(self, connection: Connection, request: AssignmentRequest) -> None:
        """Blocking trigger then finalize on one connection; failures are raised directly."""

        name = connection.name
        targets = resolve_targets((name,), request.target_spec, value_column=request.value_column)
        target = targets[name]
        tracker = ProgressTracker(
            self.progress,
            total=2,
            title=f"Assigning {request.noun} ({request.symbol})",
        )

        attempt = self._trigger(name, connection, request, target, asynchronous=False)
        if not attempt.failed:
            attempt = self._finalize(name, connection, request, attempt.handle)
        tracker.tick(self._label(request, attempt, target))
        tracker.tick(f"Assigned {request.noun} ({request.describe_assignment(target)})")

        if attempt.error is not None:
            raise SingleConnectionError(attempt.error) from attempt.cause

    def _trigger(
        self,
        name: str,
        connection: Connection,
        request: AssignmentRequest,
        target: object,
        *,
        asynchronous: bool,
    ) -> StageAttempt:
        log.debug(
            "Triggering %s on %s (async=%s)",
            request.describe_assignment(target),
            name,
            asynchronous,
        )
        call = partial(request.trigger, connection, target, asynchronous=asynchronous)
        return attempt_stage(name, Stage.TRIGGER, call)

    def _finalize(
        self,
        name: str,
        connection: Connection,
        request: AssignmentRequest,
        handle: object,
    ) -> StageAttempt:
        def call() -> object:
            if request.describe_before_finalize:
                connection.describe(handle)
            return connection.finalize(handle)

        return attempt_stage(name, Stage.FINALIZE, call)

    def _fold(self, attempt: StageAttempt, ledger: ErrorLedger) -> bool:
        if attempt.error is None:
            return False
        ledger.add(attempt.error)
        log.warning(
            "Assignment failed on %s at %s: %s",
            attempt.connection,
            attempt.stage,
            attempt.error.message,
        )
        return True

    def _label(self, request: AssignmentRequest, attempt: StageAttempt, target: object) -> str:
        verb = "Failed" if attempt.failed else "Assigned"
        return f"{verb} {request.noun} {attempt.connection} ({request.describe_assignment(target)})"
