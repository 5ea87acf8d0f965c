from __future__ import annotations

from dsassign.domain.expressions import quote
from dsassign.domain.requests import ExprRequest, ResourceRequest, TableRequest
from dsassign.domain.types import OperationKind
from tests.support.connections import FakeConnection


def test_table_request_forwards_every_option() -> None:
    connection = FakeConnection(name="A")
    request = TableRequest(
        symbol="D",
        table="demo.HOP",
        variables="name().matches('LAB_')",
        missings=True,
        identifiers="idmap",
        id_name="ID",
    )

    request.trigger(connection, "demo.HOP", asynchronous=False)

    assert request.kind is OperationKind.ASSIGN_TABLE
    assert connection.calls == [
        {
            "operation": "assign_table",
            "symbol": "D",
            "table": "demo.HOP",
            "variables": "name().matches('LAB_')",
            "missings": True,
            "identifiers": "idmap",
            "id_name": "ID",
            "asynchronous": False,
        }
    ]


def test_resource_request_targets_resource_column() -> None:
    request = ResourceRequest(symbol="R", resource="res.one")

    assert request.kind is OperationKind.ASSIGN_RESOURCE
    assert request.value_column == "resource"
    assert request.target_spec == "res.one"
    assert request.describe_assignment("res.one") == "R <- `res.one`"


def test_expr_request_passes_expression_through() -> None:
    connection = FakeConnection(name="A")
    expression = quote("as.numeric(D$GENDER)")
    request = ExprRequest(symbol="G", expression=expression)

    request.trigger(connection, expression, asynchronous=True)

    assert connection.calls[0]["expression"] is expression
    assert request.describe_assignment(expression) == "G <- as.numeric(D$GENDER)"
    assert not request.describe_before_finalize
