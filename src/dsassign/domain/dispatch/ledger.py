"""Per-invocation record of which connections failed, where and why."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger

from dsassign.domain.types import ErrorRecord, Stage

log = getLogger(__name__)


@dataclass(slots=True)
class ErrorLedger:
    """Failures of one assign call, keyed by connection name.

    A connection is recorded at most once: the first failure wins and later
    stages are skipped for it. A ledger belongs to a single invocation and is
    never reused by the next one.
    """

    _records: dict[str, ErrorRecord] = field(default_factory=dict[str, ErrorRecord])

    def record(self, connection: str, stage: Stage, message: str) -> ErrorRecord:
        return self.add(ErrorRecord(connection=connection, stage=stage, message=message))

    def add(self, record: ErrorRecord) -> ErrorRecord:
        existing = self._records.get(record.connection)
        if existing is not None:
            log.debug(
                "Ignoring %s failure for %s, already failed at %s",
                record.stage,
                record.connection,
                existing.stage,
            )
            return existing
        self._records[record.connection] = record
        return record

    def is_empty(self) -> bool:
        return not self._records

    def snapshot(self) -> tuple[ErrorRecord, ...]:
        return tuple(self._records.values())

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, connection: object) -> bool:
        return connection in self._records

    def __len__(self) -> int:
        return len(self._records)
