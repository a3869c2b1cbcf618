"""Fragment: expression template plus ordered bound values."""

from __future__ import annotations

from typing import Any

from pydantic import model_validator

from .value_object import ValueObject

PLACEHOLDER = "?"


class Fragment(ValueObject):
    """Backend-agnostic query fragment.

    ``expression`` holds one :data:`PLACEHOLDER` per entry in ``values``,
    in the same order.  Fragments are immutable and compared structurally.
    """

    expression: str
    values: tuple[Any, ...] = ()

    @model_validator(mode="after")
    def _placeholders_match_values(self) -> Fragment:
        placeholders = self.expression.count(PLACEHOLDER)
        if placeholders != len(self.values):
            raise ValueError(
                f"Expression {self.expression!r} has {placeholders} placeholders "
                f"but {len(self.values)} values were supplied"
            )
        return self
