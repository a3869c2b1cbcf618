"""Text conditions: equals, does not equal, contains, does not contain.

``contains`` matches case-insensitively.  ``%``, ``_`` and ``!`` in the
value are escaped so they match literally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..condition import ConditionType, EncodingRule
from ..exceptions import InvalidValueError
from ..result import ParseResult
from ..validation import parse_value_type_error, validate_is_string

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..config import ConditionConfig

LIKE_ESCAPE = "!"


def escape_like(value: str) -> str:
    """Escape ``LIKE`` wildcards in *value* with :data:`LIKE_ESCAPE`."""
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return value


def _like_pattern(value: Any) -> Sequence[Any]:
    return (f"%{escape_like(value)}%",)


_RULES: dict[str, EncodingRule] = {
    "equals": EncodingRule("column = ?", reverse="does not equal"),
    "does not equal": EncodingRule("column != ?", reverse="equals"),
    "contains": EncodingRule(
        f"lower(column) LIKE lower(?) ESCAPE '{LIKE_ESCAPE}'",
        reverse="does not contain",
        values=_like_pattern,
    ),
    "does not contain": EncodingRule(
        f"lower(column) NOT LIKE lower(?) ESCAPE '{LIKE_ESCAPE}'",
        reverse="contains",
        values=_like_pattern,
    ),
}


class TextCondition(ConditionType):
    @property
    def name(self) -> str:
        return "text"

    @property
    def rules(self) -> Mapping[str, EncodingRule]:
        return _RULES

    @property
    def default_comparator(self) -> str:
        return "equals"

    def parse_value(
        self,
        config: ConditionConfig,
        column: str,
        comparator: str,
        value: Any,
    ) -> ParseResult[Any]:
        if validate_is_string(value) is None:
            return ParseResult.failure(
                InvalidValueError(parse_value_type_error(value, column, self.name))
            )
        return ParseResult.success(value)
