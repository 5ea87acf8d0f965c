"""Application entry points for assigning symbols in remote sessions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from dsassign.config import get_assign_config
from dsassign.domain.dispatch import (
    DispatchOrchestrator,
    LoggingProgressReporter,
    NullProgressReporter,
)
from dsassign.domain.errors import ResolutionError
from dsassign.domain.expressions import Expression
from dsassign.domain.requests import ExprRequest, ResourceRequest, TableRequest

if TYPE_CHECKING:
    from dsassign.domain.ports.connection import Connection
    from dsassign.domain.ports.progress import ProgressReporter
    from dsassign.domain.requests import AssignmentRequest
    from dsassign.domain.types import Variables

type Connections = Connection | Mapping[str, Connection] | Sequence[Connection]

log = getLogger(__name__)


def assign(
    conns: Connections,
    symbol: str,
    value: object,
    *,
    variables: Variables = None,
    missings: bool = False,
    identifiers: str | None = None,
    id_name: str | None = None,
    asynchronous: bool | None = None,
    progress: ProgressReporter | None = None,
) -> None:
    """Assign a table, or the result of an :class:`Expression`, to ``symbol``.

    Table-only options are ignored when ``value`` is an expression.
    """

    if isinstance(value, Expression):
        assign_expr(conns, symbol, value, asynchronous=asynchronous, progress=progress)
        return
    assign_table(
        conns,
        symbol,
        value,
        variables=variables,
        missings=missings,
        identifiers=identifiers,
        id_name=id_name,
        asynchronous=asynchronous,
        progress=progress,
    )


def assign_table(
    conns: Connections,
    symbol: str,
    table: object,
    *,
    variables: Variables = None,
    missings: bool = False,
    identifiers: str | None = None,
    id_name: str | None = None,
    asynchronous: bool | None = None,
    progress: ProgressReporter | None = None,
) -> None:
    """Assign a server-side table to ``symbol`` in every session.

    ``table`` is one fully qualified table name for all connections (or a vector
    of names shared by all), a mapping of connection name to table name, or a
    table with ``server`` and ``table`` columns such as the login data rows.
    """

    _check_target(table, "table")
    request = TableRequest(
        symbol=_check_symbol(symbol),
        table=table,
        variables=variables,
        missings=missings,
        identifiers=identifiers,
        id_name=id_name,
    )
    _dispatch(conns, request, asynchronous=asynchronous, progress=progress)


def assign_resource(
    conns: Connections,
    symbol: str,
    resource: object,
    *,
    asynchronous: bool | None = None,
    progress: ProgressReporter | None = None,
) -> None:
    """Assign a server-side resource reference to ``symbol`` in every session."""

    _check_target(resource, "resource")
    request = ResourceRequest(symbol=_check_symbol(symbol), resource=resource)
    _dispatch(conns, request, asynchronous=asynchronous, progress=progress)


def assign_expr(
    conns: Connections,
    symbol: str,
    expr: Expression | str,
    *,
    asynchronous: bool | None = None,
    progress: ProgressReporter | None = None,
) -> None:
    """Assign the result of evaluating ``expr`` remotely to ``symbol``."""

    expression = expr if isinstance(expr, Expression) else Expression(expr)
    request = ExprRequest(symbol=_check_symbol(symbol), expression=expression)
    _dispatch(conns, request, asynchronous=asynchronous, progress=progress)


def as_connection_map(
    conns: Mapping[str, Connection] | Sequence[Connection],
) -> dict[str, Connection]:
    """Key a collection of connections by name, rejecting duplicate names."""

    if isinstance(conns, Mapping):
        return {str(name): connection for name, connection in conns.items()}

    mapping: dict[str, Connection] = {}
    for connection in conns:
        if connection.name in mapping:
            raise ValueError(f"Duplicate connection name: {connection.name}")
        mapping[connection.name] = connection
    return mapping


def _dispatch(
    conns: Connections,
    request: AssignmentRequest,
    *,
    asynchronous: bool | None,
    progress: ProgressReporter | None,
) -> None:
    config = get_assign_config()
    if asynchronous is None:
        asynchronous = config.asynchronous
    if progress is None:
        progress = LoggingProgressReporter() if config.progress else NullProgressReporter()

    orchestrator = DispatchOrchestrator(progress=progress)
    if isinstance(conns, Mapping | Sequence):
        orchestrator.run(as_connection_map(conns), request, asynchronous=asynchronous)
    else:
        orchestrator.run_single(conns, request)


def _check_symbol(symbol: str) -> str:
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValueError(f"Not a valid symbol name: {symbol!r}")
    return symbol


def _check_target(value: object, noun: str) -> None:
    if value is None or (isinstance(value, str | Mapping | Sequence) and len(value) == 0):
        raise ResolutionError(f"Not a valid {noun} name")
