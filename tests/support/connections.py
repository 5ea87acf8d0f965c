"""Reusable fake connections and progress reporters for dispatch tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dsassign.domain.types import Capabilities

if TYPE_CHECKING:
    from dsassign.domain.expressions import Expression
    from dsassign.domain.types import Variables

type Journal = list[tuple[str, str]]


class FakeDriverError(RuntimeError):
    pass


@dataclass(slots=True)
class FakeHandle:
    connection: str
    symbol: str
    value: object
    asynchronous: bool


@dataclass(slots=True)
class FakeConnection:
    """Connection that records every call into a journal shared between connections."""

    name: str
    journal: Journal = field(default_factory=list[tuple[str, str]])
    async_capable: bool = True
    fail_trigger: str | None = None
    fail_describe: str | None = None
    fail_finalize: str | None = None
    bound: dict[str, object] = field(default_factory=dict[str, object])
    calls: list[dict[str, object]] = field(default_factory=list[dict[str, object]])

    def capabilities(self) -> Capabilities:
        return Capabilities(
            assign_table=self.async_capable,
            assign_resource=self.async_capable,
            assign_expr=self.async_capable,
        )

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
    ) -> FakeHandle:
        self.calls.append(
            {
                "operation": "assign_table",
                "symbol": symbol,
                "table": table,
                "variables": variables,
                "missings": missings,
                "identifiers": identifiers,
                "id_name": id_name,
                "asynchronous": asynchronous,
            }
        )
        return self._trigger(symbol, table, asynchronous=asynchronous)

    def assign_resource(
        self,
        symbol: str,
        resource: object,
        *,
        asynchronous: bool = True,
    ) -> FakeHandle:
        self.calls.append(
            {
                "operation": "assign_resource",
                "symbol": symbol,
                "resource": resource,
                "asynchronous": asynchronous,
            }
        )
        return self._trigger(symbol, resource, asynchronous=asynchronous)

    def assign_expr(
        self,
        symbol: str,
        expression: Expression,
        *,
        asynchronous: bool = True,
    ) -> FakeHandle:
        self.calls.append(
            {
                "operation": "assign_expr",
                "symbol": symbol,
                "expression": expression,
                "asynchronous": asynchronous,
            }
        )
        return self._trigger(symbol, expression, asynchronous=asynchronous)

    def describe(self, handle: object) -> dict[str, object]:
        self.journal.append(("describe", self.name))
        if self.fail_describe is not None:
            raise FakeDriverError(self.fail_describe)
        return {"connection": self.name}

    def finalize(self, handle: object) -> object:
        assert isinstance(handle, FakeHandle)
        self.journal.append(("finalize", self.name))
        if self.fail_finalize is not None:
            raise FakeDriverError(self.fail_finalize)
        self.bound[handle.symbol] = handle.value
        return handle.value

    def _trigger(self, symbol: str, value: object, *, asynchronous: bool) -> FakeHandle:
        self.journal.append(("trigger-async" if asynchronous else "trigger-sync", self.name))
        if self.fail_trigger is not None:
            raise FakeDriverError(self.fail_trigger)
        if not asynchronous:
            self.bound[symbol] = value
        return FakeHandle(
            connection=self.name, symbol=symbol, value=value, asynchronous=asynchronous
        )


@dataclass(slots=True)
class RecordingProgress:
    """Progress reporter keeping every title and tick label."""

    titles: list[tuple[str, int]] = field(default_factory=list[tuple[str, int]])
    labels: list[str] = field(default_factory=list[str])

    def new_progress(self, total: int, *, title: str) -> object:
        self.titles.append((title, total))
        return len(self.titles)

    def tick(self, handle: object, label: str) -> None:
        _ = handle
        self.labels.append(label)


class ExplodingProgress:
    def new_progress(self, total: int, *, title: str) -> object:
        raise RuntimeError("progress backend down")

    def tick(self, handle: object, label: str) -> None:
        raise RuntimeError("progress backend down")


def make_connections(journal: Journal, **specs: dict[str, object]) -> dict[str, FakeConnection]:
    """Build named fake connections sharing ``journal``, in keyword order."""

    return {
        name: FakeConnection(name=name, journal=journal, **spec)  # type: ignore[arg-type]
        for name, spec in specs.items()
    }
