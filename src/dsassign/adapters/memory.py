"""In-memory connection driver.

Each :class:`MemoryConnection` holds a plain ``dict`` as its remote session. It
is the reference backend for tests and local dry runs: no transport is
involved, but the driver honours the connection contract, including pending
handles that only do their work when they are finalized.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dsassign.domain.types import Capabilities

if TYPE_CHECKING:
    from dsassign.domain.expressions import Expression
    from dsassign.domain.types import Variables

type Session = dict[str, object]
type Evaluator = Callable[[str, Session], object]

log = getLogger(__name__)


class MemoryDriverError(RuntimeError):
    """Raised by the in-memory session, as a remote server would report an error."""


@dataclass(slots=True, frozen=True)
class BoundTable:
    """Extract of a table as it would be materialized in the remote session."""

    name: str
    columns: dict[str, tuple[object, ...]]
    missings: bool = False
    identifiers: str | None = None
    id_name: str | None = None


@dataclass(slots=True, frozen=True)
class BoundResource:
    name: str
    location: object


@dataclass(slots=True)
class MemoryHandle:
    """Handle returned by every ``assign_*`` call of :class:`MemoryConnection`."""

    description: str
    work: Callable[[], object] | None = None
    result: object = None
    completed: bool = False
    fetched: bool = False

    def run(self) -> object:
        if not self.completed:
            work = self.work
            self.work = None
            if work is not None:
                self.result = work()
            self.completed = True
        return self.result


def lookup_evaluator(text: str, session: Session) -> object:
    """Evaluate an expression that simply names an existing symbol."""

    name = text.strip()
    if name not in session:
        raise MemoryDriverError(f"object '{name}' not found")
    return session[name]


@dataclass(slots=True)
class MemoryConnection:
    """Connection whose remote session lives in this process."""

    name: str
    tables: Mapping[str, Mapping[str, Sequence[object]]] = field(
        default_factory=dict[str, Mapping[str, Sequence[object]]]
    )
    resources: Mapping[str, object] = field(default_factory=dict[str, object])
    evaluator: Evaluator = lookup_evaluator
    declared: Capabilities = field(
        default_factory=lambda: Capabilities(
            assign_table=True, assign_resource=True, assign_expr=True
        )
    )
    session: Session = field(default_factory=dict[str, object])

    def capabilities(self) -> Capabilities:
        return self.declared

    def assign_table(
        self,
        symbol: str,
        table: object,
        *,
        variables: Variables = None,
        missings: bool = False,
        identifiers: str | None = None,
        id_name: str | None = None,
        asynchronous: bool = True,
    ) -> MemoryHandle:
        def work() -> BoundTable:
            bound = BoundTable(
                name=str(table),
                columns=self._select(str(table), variables),
                missings=missings,
                identifiers=identifiers,
                id_name=id_name,
            )
            self.session[symbol] = bound
            return bound

        return self._submit(f"{symbol} <- table {table}", work, asynchronous=asynchronous)

    def assign_resource(
        self,
        symbol: str,
        resource: object,
        *,
        asynchronous: bool = True,
    ) -> MemoryHandle:
        def work() -> BoundResource:
            key = str(resource)
            if key not in self.resources:
                raise MemoryDriverError(f"No resource with name: {key}")
            bound = BoundResource(name=key, location=self.resources[key])
            self.session[symbol] = bound
            return bound

        return self._submit(f"{symbol} <- resource {resource}", work, asynchronous=asynchronous)

    def assign_expr(
        self,
        symbol: str,
        expression: Expression,
        *,
        asynchronous: bool = True,
    ) -> MemoryHandle:
        def work() -> object:
            value = self.evaluator(expression.text, self.session)
            self.session[symbol] = value
            return value

        return self._submit(f"{symbol} <- {expression.text}", work, asynchronous=asynchronous)

    def describe(self, handle: object) -> dict[str, object]:
        memory_handle = self._check_handle(handle)
        return {
            "connection": self.name,
            "command": memory_handle.description,
            "status": "COMPLETED" if memory_handle.completed else "PENDING",
        }

    def finalize(self, handle: object) -> object:
        memory_handle = self._check_handle(handle)
        if memory_handle.fetched:
            raise MemoryDriverError(f"Result already fetched: {memory_handle.description}")
        memory_handle.fetched = True
        return memory_handle.run()

    def _submit(
        self,
        description: str,
        work: Callable[[], object],
        *,
        asynchronous: bool,
    ) -> MemoryHandle:
        handle = MemoryHandle(description=description, work=work)
        if not asynchronous:
            handle.run()
        log.debug("%s: %s (%s)", self.name, description, "pending" if asynchronous else "completed")
        return handle

    def _select(self, table: str, variables: Variables) -> dict[str, tuple[object, ...]]:
        if table not in self.tables:
            raise MemoryDriverError(f"No table with name: {table}")
        columns = self.tables[table]
        if variables is None:
            return {name: tuple(values) for name, values in columns.items()}
        if isinstance(variables, str):
            raise MemoryDriverError("Variable filter scripts are not supported in memory")
        unknown = [name for name in variables if name not in columns]
        if unknown:
            raise MemoryDriverError(f"No such variable(s) in {table}: {', '.join(unknown)}")
        return {name: tuple(columns[name]) for name in variables}

    def _check_handle(self, handle: object) -> MemoryHandle:
        if not isinstance(handle, MemoryHandle):
            raise TypeError(f"Not a memory connection handle: {handle!r}")
        return handle
