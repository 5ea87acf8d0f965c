"""Assignment requests: what to bind, and how to trigger it on a connection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .expressions import Expression, deparse
from .types import OperationKind

if TYPE_CHECKING:
    from .ports.connection import Connection
    from .types import Variables


@dataclass(slots=True, frozen=True, kw_only=True)
class TableRequest:
    """Bind ``symbol`` to an extract of a server-side table."""

    kind: ClassVar[OperationKind] = OperationKind.ASSIGN_TABLE
    value_column: ClassVar[str] = "table"
    noun: ClassVar[str] = "table"
    describe_before_finalize: ClassVar[bool] = True

    symbol: str
    table: object
    variables: Variables = None
    missings: bool = False
    identifiers: str | None = None
    id_name: str | None = None

    @property
    def target_spec(self) -> object:
        return self.table

    def trigger(self, connection: Connection, target: object, *, asynchronous: bool) -> object:
        return connection.assign_table(
            self.symbol,
            target,
            variables=self.variables,
            missings=self.missings,
            identifiers=self.identifiers,
            id_name=self.id_name,
            asynchronous=asynchronous,
        )

    def describe_assignment(self, target: object) -> str:
        return f"{self.symbol} <- {deparse(target)}"


@dataclass(slots=True, frozen=True, kw_only=True)
class ResourceRequest:
    """Bind ``symbol`` to a server-side resource reference."""

    kind: ClassVar[OperationKind] = OperationKind.ASSIGN_RESOURCE
    value_column: ClassVar[str] = "resource"
    noun: ClassVar[str] = "resource"
    describe_before_finalize: ClassVar[bool] = True

    symbol: str
    resource: object

    @property
    def target_spec(self) -> object:
        return self.resource

    def trigger(self, connection: Connection, target: object, *, asynchronous: bool) -> object:
        return connection.assign_resource(self.symbol, target, asynchronous=asynchronous)

    def describe_assignment(self, target: object) -> str:
        return f"{self.symbol} <- {deparse(target)}"


@dataclass(slots=True, frozen=True, kw_only=True)
class ExprRequest:
    """Bind ``symbol`` to the result of evaluating ``expression`` remotely."""

    kind: ClassVar[OperationKind] = OperationKind.ASSIGN_EXPR
    value_column: ClassVar[str] = "expr"
    noun: ClassVar[str] = "expr."
    describe_before_finalize: ClassVar[bool] = False

    symbol: str
    expression: Expression

    @property
    def target_spec(self) -> object:
        return self.expression

    def trigger(self, connection: Connection, target: object, *, asynchronous: bool) -> object:
        expression = target if isinstance(target, Expression) else Expression(str(target))
        return connection.assign_expr(self.symbol, expression, asynchronous=asynchronous)

    def describe_assignment(self, target: object) -> str:
        return f"{self.symbol} <- {deparse(target)}"


type AssignmentRequest = TableRequest | ResourceRequest | ExprRequest


__all__ = ["AssignmentRequest", "ExprRequest", "ResourceRequest", "TableRequest"]
