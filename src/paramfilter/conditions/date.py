"""Date conditions: before/after comparisons, ranges and equality.

Sub-configuration::

    {"keys": ["published_on"], "format": "%d/%m/%Y"}

``format`` is a ``strptime`` pattern and defaults to ISO ``%Y-%m-%d``.
Range comparators take ``{"start": ..., "end": ...}``.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from ..condition import ConditionType, EncodingRule
from ..exceptions import InvalidValueError, InvalidValueFormatError
from ..result import ParseResult
from ..validation import parse_value_type_error, render_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..config import ConditionConfig

DEFAULT_FORMAT = "%Y-%m-%d"
RANGE_COMPARATORS = frozenset({"between", "not between"})


class DateRange(BaseModel):
    """Inclusive ``start``/``end`` pair for range comparators."""

    model_config = ConfigDict(frozen=True)

    start: datetime.date
    end: datetime.date


def _range_values(value: DateRange) -> Sequence[Any]:
    return (value.start, value.end)


_RULES: dict[str, EncodingRule] = {
    "after": EncodingRule("column > ?", reverse="on or before"),
    "on or after": EncodingRule("column >= ?", reverse="before"),
    "before": EncodingRule("column < ?", reverse="on or after"),
    "on or before": EncodingRule("column <= ?", reverse="after"),
    "between": EncodingRule(
        "(column >= ?) AND (column <= ?)",
        reverse="not between",
        values=_range_values,
    ),
    "not between": EncodingRule(
        "(column < ?) OR (column > ?)",
        reverse="between",
        values=_range_values,
    ),
    "equals": EncodingRule("column = ?", reverse="does not equal"),
    "does not equal": EncodingRule("column != ?", reverse="equals"),
}


class DateCondition(ConditionType):
    @property
    def name(self) -> str:
        return "date"

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
        fmt = config.option("format", DEFAULT_FORMAT)
        if comparator in RANGE_COMPARATORS:
            return self._parse_range(column, value, fmt)
        return self._parse_date(column, value, fmt)

    def _parse_range(self, column: str, value: Any, fmt: str) -> ParseResult[Any]:
        bounds = _range_bounds(value)
        if bounds is None:
            return ParseResult.failure(
                InvalidValueFormatError(
                    "Invalid date value format: "
                    "Both a start and end key are required."
                )
            )
        start = self._parse_date(column, bounds[0], fmt)
        if not start:
            return start
        end = self._parse_date(column, bounds[1], fmt)
        if not end:
            return end
        return ParseResult.success(DateRange(start=start.value, end=end.value))

    def _parse_date(self, column: str, value: Any, fmt: str) -> ParseResult[Any]:
        if isinstance(value, datetime.datetime):
            return ParseResult.success(value.date())
        if isinstance(value, datetime.date):
            return ParseResult.success(value)
        if not isinstance(value, str):
            return ParseResult.failure(
                InvalidValueError(parse_value_type_error(value, column, self.name))
            )
        try:
            return ParseResult.success(datetime.datetime.strptime(value, fmt).date())
        except ValueError:
            return ParseResult.failure(
                InvalidValueError(
                    f"Invalid date value format for {column}: {render_value(value)} "
                    f"does not match '{fmt}'"
                )
            )


def _range_bounds(value: Any) -> tuple[Any, Any] | None:
    """Return ``(start, end)`` from a mapping, or ``None`` if either is missing."""
    if isinstance(value, DateRange):
        return value.start, value.end
    if not isinstance(value, Mapping):
        return None
    if "start" not in value or "end" not in value:
        return None
    return value["start"], value["end"]
