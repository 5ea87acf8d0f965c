"""Port implemented by connection drivers, one implementation per backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dsassign.domain.expressions import Expression
    from dsassign.domain.types import Capabilities, Variables


@runtime_checkable
class Connection(Protocol):
    """Handle to one remote analysis session.

    Every ``assign_*`` call returns an opaque handle. With ``asynchronous=True``
    the handle may still be pending and must go through ``finalize`` exactly
    once; with ``asynchronous=False`` the call blocks until the remote side has
    completed the assignment. Drivers own transport, authentication, retries and
    timeouts; any failure they raise is treated as opaque.
    """

    @property
    def name(self) -> str: ...

    def capabilities(self) -> Capabilities: ...

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
    ) -> object: ...

    def assign_resource(
        self,
        symbol: str,
        resource: object,
        *,
        asynchronous: bool = True,
    ) -> object: ...

    def assign_expr(
        self,
        symbol: str,
        expression: Expression,
        *,
        asynchronous: bool = True,
    ) -> object: ...

    def describe(self, handle: object) -> object: ...

    def finalize(self, handle: object) -> object: ...


__all__ = ["Connection"]
