"""
Condition value object and the condition-type strategy interface.

Each condition type (text, date, ...) is an isolated ``ConditionType``
subclass owning its comparator vocabulary, its value validation and a table
of :class:`EncodingRule` entries keyed by comparator.  New types are added by
subclassing and passing an instance to
:class:`~paramfilter.registry.ConditionTypeRegistry`.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import EncodingError, InvalidConditionError
from .fragment import Fragment
from .result import ParseResult
from .validation import parse_error, validate_in
from .value_object import ValueObject

if TYPE_CHECKING:
    from .config import ConditionConfig

_COLUMN_WORD = re.compile(r"\bcolumn\b")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s.\-]+")

REQUIRED_OPTIONS = ("column", "comparator", "value")


def canonical_name(identifier: str) -> str:
    """Normalize ``"DateTime"`` or ``"date time"`` to ``"date_time"``."""
    underscored = _CAMEL_BOUNDARY.sub("_", identifier.strip())
    return _SEPARATORS.sub("_", underscored).lower()


def comparator_suffix(comparator: str) -> str:
    """Params-key suffix: ``"on or after"`` -> ``"_on_or_after"``."""
    return "_" + comparator.replace(" ", "_")


def single_value(value: Any) -> Sequence[Any]:
    return (value,)


class Condition(ValueObject):
    """One validated filter criterion.

    Created only by a condition type's ``parse``; never mutated.
    """

    type: str
    column: str
    comparator: str
    value: Any = None
    inverse: bool = False


@dataclass(frozen=True)
class EncodingRule:
    """Forward encoding for one comparator.

    ``expression`` contains the literal word ``column`` where the column
    name goes.  ``reverse`` names the comparator an inverted condition is
    rewritten to; ``None`` means the comparator cannot be negated.
    """

    expression: str
    reverse: str | None = None
    values: Callable[[Any], Sequence[Any]] = field(default=single_value)

    def apply(self, column: str, value: Any) -> Fragment:
        return Fragment(
            expression=_COLUMN_WORD.sub(lambda _m: column, self.expression),
            values=tuple(self.values(value)),
        )


def collapse_inversion(condition: Condition, reverse: str) -> Condition:
    """Rewrite ``not <comparator>`` as ``<reverse>`` on a new condition."""
    return condition.model_copy(update={"inverse": False, "comparator": reverse})


class ConditionType(ABC):
    """
    Strategy interface for one family of conditions.

    Subclasses declare ``name``, ``rules`` (comparator -> EncodingRule, in
    vocabulary order) and ``default_comparator``, and implement
    ``parse_value``.  Column/comparator validation and encoding with
    inversion collapsing are shared.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier of the type, already in canonical form.

        This is the tag used as ``options["type"]`` and ``Condition.type``;
        it must equal ``canonical_name(name)``, e.g. ``"date_time"`` rather
        than ``"DateTime"``.  The class name plays no part.
        """
        ...

    @property
    @abstractmethod
    def rules(self) -> Mapping[str, EncodingRule]:
        """Encoding rule per comparator; key order is vocabulary order."""
        ...

    @property
    @abstractmethod
    def default_comparator(self) -> str:
        """Comparator used when a params key carries no comparator suffix."""
        ...

    @property
    def comparators(self) -> tuple[str, ...]:
        return tuple(self.rules)

    # -- parsing -------------------------------------------------------------

    @abstractmethod
    def parse_value(
        self,
        config: ConditionConfig,
        column: str,
        comparator: str,
        value: Any,
    ) -> ParseResult[Any]:
        """
        Validate and coerce *value* into the shape ``encode`` expects.

        Args:
            config: The type's :class:`~paramfilter.config.ConditionConfig`.
            column: Already validated column name.
            comparator: Already validated comparator.
            value: Raw, untrusted value.
        """
        ...

    def parse(
        self, config: ConditionConfig, options: Mapping[str, Any]
    ) -> ParseResult[Condition]:
        """Build a :class:`Condition` from raw *options* or describe why not."""
        missing = [
            f"Missing '{key}'" for key in REQUIRED_OPTIONS if key not in options
        ]
        if missing:
            return ParseResult.failure(InvalidConditionError(missing))

        column = options["column"]
        comparator = options["comparator"]
        inverse = options.get("inverse", False)
        errors: list[str] = []
        if validate_in(column, config.keys) is None:
            errors.append(f"Unknown {self.name} column '{column}'")
        if validate_in(comparator, self.rules) is None:
            errors.append(parse_error(comparator, "comparator", self.name))
        if not isinstance(inverse, bool):
            errors.append(parse_error(inverse, "inverse flag", self.name))
        if errors:
            return ParseResult.failure(InvalidConditionError(errors))

        parsed = self.parse_value(config, column, comparator, options["value"])
        if not parsed:
            return ParseResult.failure(parsed.error)  # type: ignore[arg-type]
        return ParseResult.success(
            Condition(
                type=self.name,
                column=column,
                comparator=comparator,
                value=parsed.value,
                inverse=inverse,
            )
        )

    # -- encoding ------------------------------------------------------------

    def encode(self, condition: Condition) -> Fragment:
        """
        Encode *condition* into a :class:`Fragment`.

        Inverted conditions are collapsed into their reverse comparator and
        re-encoded, so only forward rules are ever applied.

        Raises:
            EncodingError: If the comparator has no rule, or is inverted
                without a declared reverse.
        """
        rule = self.rules.get(condition.comparator)
        if rule is None:
            raise EncodingError(
                f"No {self.name} encoding rule for comparator "
                f"'{condition.comparator}'"
            )
        if condition.inverse:
            if rule.reverse is None:
                raise EncodingError(
                    f"{self.name} comparator '{condition.comparator}' "
                    "declares no reverse and cannot be inverted"
                )
            return self.encode(collapse_inversion(condition, rule.reverse))
        return rule.apply(condition.column, condition.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
