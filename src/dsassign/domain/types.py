"""Core value types shared by the dispatch engine and connection drivers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

type Variables = str | Sequence[str] | None


class OperationKind(StrEnum):
    ASSIGN_TABLE = "assign-table"
    ASSIGN_RESOURCE = "assign-resource"
    ASSIGN_EXPR = "assign-expr"


class Stage(StrEnum):
    """Point of the per-connection sequence at which a failure happened."""

    RESOLVE = "resolve"
    TRIGGER = "trigger"
    FINALIZE = "finalize"


@dataclass(slots=True, frozen=True)
class Capabilities:
    """Non-blocking support declared by a connection, per operation kind."""

    assign_table: bool = False
    assign_resource: bool = False
    assign_expr: bool = False

    def supports_async(self, kind: OperationKind) -> bool:
        if kind is OperationKind.ASSIGN_TABLE:
            return self.assign_table
        if kind is OperationKind.ASSIGN_RESOURCE:
            return self.assign_resource
        return self.assign_expr


@dataclass(slots=True, frozen=True)
class ErrorRecord:
    connection: str
    stage: Stage
    message: str

    def __str__(self) -> str:
        return f"{self.connection} [{self.stage}]: {self.message}"
