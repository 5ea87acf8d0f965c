"""Quoted remote expressions and the labels rendered for them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Expression:
    """Source text of an expression evaluated by the remote session.

    The text is never parsed locally; it is passed verbatim to the driver.
    """

    text: str

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("Expression text must not be blank")

    def __str__(self) -> str:
        return self.text


def quote(text: str) -> Expression:
    return Expression(text.strip())


def deparse(value: object) -> str:
    """Render an assignment value for progress and log output."""

    if isinstance(value, Expression):
        return value.text
    if isinstance(value, str):
        return f"`{value}`"
    if isinstance(value, Sequence):
        return ", ".join(deparse(item) for item in value)
    return str(value)
