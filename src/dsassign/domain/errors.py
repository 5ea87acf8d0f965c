"""Exceptions raised by the assignment dispatch engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .types import ErrorRecord, Stage


class DispatchError(RuntimeError):
    """Base class for every failure reported by an assign call."""


class ResolutionError(DispatchError):
    """Raised when a target spec does not yield exactly one value per connection.

    Resolution happens before any remote call, so this error always means that
    no connection was touched.
    """


class PerConnectionError(DispatchError):
    """Failure of a trigger or finalize call on one connection."""

    def __init__(self, record: ErrorRecord) -> None:
        super().__init__(str(record))
        self.record = record

    @property
    def connection(self) -> str:
        return self.record.connection

    @property
    def stage(self) -> Stage:
        return self.record.stage

    @property
    def message(self) -> str:
        return self.record.message


class SingleConnectionError(PerConnectionError):
    """Raised directly by the single-connection form of an assign call."""


class AggregateError(DispatchError):
    """Raised at the end of a fan-out call when at least one connection failed.

    Connections missing from ``records`` had their symbol bound; nothing is
    rolled back on them.
    """

    def __init__(self, records: Sequence[ErrorRecord], *, total: int | None = None) -> None:
        self.records = tuple(records)
        self.total = total
        scope = f"{len(self.records)} of {total}" if total is not None else str(len(self.records))
        details = "; ".join(str(record) for record in self.records)
        super().__init__(f"Assignment failed on {scope} connection(s): {details}")

    @property
    def failed(self) -> tuple[str, ...]:
        return tuple(record.connection for record in self.records)

    @property
    def errors(self) -> tuple[PerConnectionError, ...]:
        return tuple(PerConnectionError(record) for record in self.records)

    def as_dict(self) -> dict[str, str]:
        """Map each failed connection to its error message."""

        return {record.connection: record.message for record in self.records}
