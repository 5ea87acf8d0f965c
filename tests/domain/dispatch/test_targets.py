from __future__ import annotations

import pytest

from dsassign.domain.dispatch import resolve_targets
from dsassign.domain.errors import ResolutionError
from dsassign.domain.expressions import quote

NAMES = ("server1", "server2", "server3")


def test_scalar_is_broadcast_to_every_connection() -> None:
    targets = resolve_targets(NAMES, "demo.HOP", value_column="table")

    assert targets == dict.fromkeys(NAMES, "demo.HOP")
    assert list(targets) == list(NAMES)


def test_vector_is_broadcast_verbatim_as_one_tuple() -> None:
    targets = resolve_targets(NAMES, ["demo.HOP", "demo.CNSIM"], value_column="table")

    assert set(targets.values()) == {("demo.HOP", "demo.CNSIM")}


def test_expression_is_broadcast() -> None:
    expression = quote("as.numeric(D$GENDER)")

    targets = resolve_targets(NAMES, expression, value_column="expr")

    assert all(value is expression for value in targets.values())


def test_mapping_is_returned_in_declared_order() -> None:
    spec = {"server3": "t3", "server1": "t1", "server2": "t2"}

    targets = resolve_targets(NAMES, spec, value_column="table")

    assert list(targets.items()) == [("server1", "t1"), ("server2", "t2"), ("server3", "t3")]


def test_mapping_missing_a_connection_fails() -> None:
    with pytest.raises(ResolutionError) as excinfo:
        resolve_targets(("A", "B"), {"A": "t1"}, value_column="table")

    assert "B" in str(excinfo.value)


def test_mapping_with_blank_value_counts_as_missing() -> None:
    with pytest.raises(ResolutionError):
        resolve_targets(("A", "B"), {"A": "t1", "B": None}, value_column="table")


def test_mapping_with_unknown_connection_fails() -> None:
    with pytest.raises(ResolutionError) as excinfo:
        resolve_targets(("A",), {"A": "t1", "Z": "t9"}, value_column="table")

    assert "Z" in str(excinfo.value)


def test_row_table_is_resolved_by_server_column() -> None:
    rows = [
        {"server": "server2", "table": "CNSIM.CNSIM2", "url": "https://two"},
        {"server": "server1", "table": "CNSIM.CNSIM1", "url": "https://one"},
        {"server": "server3", "table": "CNSIM.CNSIM3", "url": "https://three"},
    ]

    targets = resolve_targets(NAMES, rows, value_column="table")

    assert targets == {
        "server1": "CNSIM.CNSIM1",
        "server2": "CNSIM.CNSIM2",
        "server3": "CNSIM.CNSIM3",
    }


def test_row_table_without_value_column_fails() -> None:
    rows = [{"server": "server1", "resource": "r1"}]

    with pytest.raises(ResolutionError) as excinfo:
        resolve_targets(("server1",), rows, value_column="table")

    assert "'table'" in str(excinfo.value)


def test_row_table_with_duplicate_server_fails() -> None:
    rows = [{"server": "A", "table": "t1"}, {"server": "A", "table": "t2"}]

    with pytest.raises(ResolutionError) as excinfo:
        resolve_targets(("A",), rows, value_column="table")

    assert "Duplicate" in str(excinfo.value)


def test_column_table_is_resolved() -> None:
    columns = {"server": ["A", "B"], "resource": ["res.one", "res.two"]}

    targets = resolve_targets(("A", "B"), columns, value_column="resource")

    assert targets == {"A": "res.one", "B": "res.two"}


def test_column_table_with_unequal_lengths_fails() -> None:
    columns = {"server": ["A", "B"], "table": ["t1"]}

    with pytest.raises(ResolutionError):
        resolve_targets(("A", "B"), columns, value_column="table")


@pytest.mark.parametrize("spec", [None, "", "   ", [], {}])
def test_empty_spec_fails(spec: object) -> None:
    with pytest.raises(ResolutionError) as excinfo:
        resolve_targets(NAMES, spec, value_column="table")

    assert str(excinfo.value) == "Not a valid table name"
