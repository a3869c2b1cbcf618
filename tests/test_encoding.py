"""Tests for condition encoding and inversion collapsing."""

from __future__ import annotations

import datetime

import pytest

from paramfilter import (
    Condition,
    ConditionType,
    DateCondition,
    DateRange,
    EncodingError,
    EncodingRule,
    Fragment,
    ParseResult,
    TextCondition,
    collapse_inversion,
)

TEXT = TextCondition()
DATE = DateCondition()

MARCH_10 = datetime.date(2016, 3, 10)
MARCH_20 = datetime.date(2016, 3, 20)


def _text(comparator: str, value: str = "milk", inverse: bool = False) -> Condition:
    return Condition(
        type="text",
        column="title",
        comparator=comparator,
        value=value,
        inverse=inverse,
    )


def _date(comparator: str, value=MARCH_10, inverse: bool = False) -> Condition:
    return Condition(
        type="date",
        column="date_column",
        comparator=comparator,
        value=value,
        inverse=inverse,
    )


class TestTextEncoding:
    """Test text encoding rules and LIKE escaping."""

    @pytest.mark.parametrize(
        ("comparator", "expression", "values"),
        [
            ("equals", "title = ?", ("milk",)),
            ("does not equal", "title != ?", ("milk",)),
            ("contains", "lower(title) LIKE lower(?) ESCAPE '!'", ("%milk%",)),
            (
                "does not contain",
                "lower(title) NOT LIKE lower(?) ESCAPE '!'",
                ("%milk%",),
            ),
        ],
    )
    def test_forward_rules(self, comparator, expression, values) -> None:
        assert TEXT.encode(_text(comparator)) == Fragment(
            expression=expression, values=values
        )

    def test_inverted_contains(self) -> None:
        fragment = TEXT.encode(_text("contains", inverse=True))
        assert fragment.expression == "lower(title) NOT LIKE lower(?) ESCAPE '!'"
        assert fragment.values == ("%milk%",)

    @pytest.mark.parametrize(
        ("value", "pattern"),
        [("100%", "%100!%%"), ("a_b", "%a!_b%"), ("wow!", "%wow!!%")],
    )
    def test_contains_escapes_wildcards(self, value, pattern) -> None:
        condition = _text("contains").model_copy(update={"value": value})
        assert TEXT.encode(condition).values == (pattern,)


class TestDateEncoding:
    """Test date encoding rules and their reverses."""

    @pytest.mark.parametrize(
        ("comparator", "expression"),
        [
            ("after", "date_column > ?"),
            ("on or after", "date_column >= ?"),
            ("before", "date_column < ?"),
            ("on or before", "date_column <= ?"),
            ("equals", "date_column = ?"),
            ("does not equal", "date_column != ?"),
        ],
    )
    def test_single_value_rules(self, comparator, expression) -> None:
        assert DATE.encode(_date(comparator)) == Fragment(
            expression=expression, values=(MARCH_10,)
        )

    def test_between_binds_two_values(self) -> None:
        span = DateRange(start=MARCH_10, end=MARCH_20)
        fragment = DATE.encode(_date("between", span))
        assert fragment.expression == "(date_column >= ?) AND (date_column <= ?)"
        assert fragment.values == (MARCH_10, MARCH_20)

    def test_inverted_between_is_not_between(self) -> None:
        span = DateRange(start=MARCH_10, end=MARCH_20)
        fragment = DATE.encode(_date("between", span, inverse=True))
        assert fragment.expression == "(date_column < ?) OR (date_column > ?)"

    def test_inverted_after_is_on_or_before(self) -> None:
        assert DATE.encode(_date("after", inverse=True)).expression == (
            "date_column <= ?"
        )


def _sample_condition(condition_type: ConditionType, comparator: str) -> Condition:
    if condition_type.name == "text":
        return _text(comparator)
    if comparator in ("between", "not between"):
        return _date(comparator, DateRange(start=MARCH_10, end=MARCH_20))
    return _date(comparator)


@pytest.mark.parametrize(
    ("condition_type", "comparator"),
    [(t, c) for t in (TEXT, DATE) for c in t.comparators],
)
def test_inverse_equals_reverse_comparator(condition_type, comparator) -> None:
    condition = _sample_condition(condition_type, comparator)
    reverse = condition_type.rules[comparator].reverse
    inverted = condition.model_copy(update={"inverse": True})
    assert condition_type.encode(inverted) == condition_type.encode(
        condition.model_copy(update={"comparator": reverse})
    )


@pytest.mark.parametrize(
    ("condition_type", "comparator"),
    [(t, c) for t in (TEXT, DATE) for c in t.comparators],
)
def test_double_reverse_is_identity(condition_type, comparator) -> None:
    reverse = condition_type.rules[comparator].reverse
    assert condition_type.rules[reverse].reverse == comparator


class TestCollapseInversion:
    """Test rewriting inverted conditions to their reverse comparator."""

    def test_returns_new_condition(self) -> None:
        original = _text("contains", inverse=True)
        collapsed = collapse_inversion(original, "does not contain")
        assert collapsed is not original
        assert collapsed.inverse is False
        assert collapsed.comparator == "does not contain"
        assert original.inverse is True
        assert original.comparator == "contains"


class _NoReverse(ConditionType):
    @property
    def name(self) -> str:
        return "flag"

    @property
    def rules(self):
        return {"is set": EncodingRule("column IS NOT NULL", values=lambda _v: ())}

    @property
    def default_comparator(self) -> str:
        return "is set"

    def parse_value(self, config, column, comparator, value):
        return ParseResult.success(value)


class TestEncodingErrors:
    """Test encoding failures caused by incomplete rule tables."""

    def test_inverse_without_reverse_is_fatal(self) -> None:
        condition = Condition(
            type="flag", column="archived", comparator="is set", inverse=True
        )
        with pytest.raises(EncodingError, match="cannot be inverted"):
            _NoReverse().encode(condition)

    def test_without_inverse_encodes(self) -> None:
        condition = Condition(type="flag", column="archived", comparator="is set")
        assert _NoReverse().encode(condition) == Fragment(
            expression="archived IS NOT NULL"
        )

    def test_unknown_comparator(self) -> None:
        with pytest.raises(EncodingError, match="No text encoding rule"):
            TEXT.encode(_text("sounds like"))


class TestColumnSubstitution:
    """Test column names substituted into expression templates."""

    def test_only_whole_word_is_replaced(self) -> None:
        condition = Condition(
            type="text", column="column_name", comparator="equals", value="x"
        )
        assert TEXT.encode(condition).expression == "column_name = ?"

    def test_column_containing_backslash(self) -> None:
        condition = Condition(
            type="text", column=r"a\1", comparator="equals", value="x"
        )
        assert TEXT.encode(condition).expression == r"a\1 = ?"
