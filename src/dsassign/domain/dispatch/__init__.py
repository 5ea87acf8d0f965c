"""Fan-out dispatch engine for assignment requests.

Targets are resolved per connection, connections are split into a
non-blocking and a blocking wave from their declared capabilities, and every
per-connection failure lands in an :class:`ErrorLedger` that is reported as a
single :class:`~dsassign.domain.errors.AggregateError` at the end of the call.
"""

from __future__ import annotations

from .capability import DispatchPlan, is_async_capable, plan_dispatch
from .ledger import ErrorLedger
from .orchestrator import DispatchOrchestrator, StageAttempt, attempt_stage
from .progress import LoggingProgressReporter, NullProgressReporter, ProgressState, ProgressTracker
from .targets import SERVER_COLUMN, resolve_targets

__all__ = [
    "SERVER_COLUMN",
    "DispatchOrchestrator",
    "DispatchPlan",
    "ErrorLedger",
    "LoggingProgressReporter",
    "NullProgressReporter",
    "ProgressState",
    "ProgressTracker",
    "StageAttempt",
    "attempt_stage",
    "is_async_capable",
    "plan_dispatch",
    "resolve_targets",
]
