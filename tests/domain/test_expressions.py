from __future__ import annotations

import pytest

from dsassign.domain.expressions import Expression, deparse, quote


def test_quote_strips_whitespace() -> None:
    assert quote("  as.numeric(D$GENDER) \n") == Expression("as.numeric(D$GENDER)")


def test_blank_expression_is_rejected() -> None:
    with pytest.raises(ValueError, match="blank"):
        Expression("  ")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (quote("c(1, 2)"), "c(1, 2)"),
        ("demo.HOP", "`demo.HOP`"),
        (("demo.HOP", "demo.CNSIM"), "`demo.HOP`, `demo.CNSIM`"),
        (42, "42"),
    ],
)
def test_deparse_renders_labels(value: object, expected: str) -> None:
    assert deparse(value) == expected
