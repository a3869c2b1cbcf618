"""
Condition parsing exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``ConditionError`` and provide ``to_dict()``
for API-friendly error responses.  Parse-side errors are *returned* inside a
:class:`~paramfilter.result.ParseResult`; only ``EncodingError`` and
``RegistryError`` are raised, because they signal an authoring bug rather
than bad input.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConditionError(Exception):
    """Base exception for all condition errors."""

    kind = "CONDITION_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "message": str(self),
        }


class UnknownConditionTypeError(ConditionError):
    """
    Type discriminator does not match any registered condition type.

    Provides fuzzy-matched suggestions for likely intended type names.
    """

    kind = "UNKNOWN_CONDITION_TYPE"

    def __init__(self, type_name: str, valid_types: Iterable[str] = ()) -> None:
        self.type_name = type_name
        self.valid_types = sorted(valid_types)
        self.suggestions = get_close_matches(
            str(type_name), self.valid_types, n=3, cutoff=0.6
        )

        message = f"Unknown filter condition '{type_name}'"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "type": self.type_name,
            "suggestions": self.suggestions,
            "valid_types": self.valid_types,
        }


class UnknownFilterKeyError(ConditionError):
    """
    Params key matches no allow-listed column under any comparator.

    Example error message::

        Unknown filter key 'titel_contains'. Did you mean: title_contains?
    """

    kind = "UNKNOWN_FILTER_KEY"

    def __init__(self, key: str, known_keys: Iterable[str] = ()) -> None:
        self.key = key
        self.known_keys = sorted(known_keys)
        self.suggestions = get_close_matches(key, self.known_keys, n=3, cutoff=0.75)

        message = f"Unknown filter key '{key}'"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "key": self.key,
            "suggestions": self.suggestions,
        }


class InvalidConditionError(ConditionError):
    """A condition type rejected the column, comparator or options shape.

    Carries the human-readable messages produced by the type's ``parse``.
    """

    kind = "INVALID_CONDITION"

    def __init__(self, errors: list[str] | str) -> None:
        self.errors: list[str] = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "message": str(self),
            "errors": self.errors,
        }


class InvalidValueError(InvalidConditionError):
    """The value has the wrong shape or fails a type-specific check."""

    kind = "INVALID_VALUE"


class InvalidValueFormatError(InvalidValueError):
    """A compound value is missing required parts (e.g. a range end)."""

    kind = "INVALID_VALUE_FORMAT"


class EncodingError(ConditionError):
    """Raised when a condition cannot be encoded.

    Always a condition-type authoring bug: a comparator without an encoding
    rule, or an inverted comparator without a declared reverse.
    """

    kind = "ENCODING_ERROR"


class RegistryError(ConditionError):
    """Raised when a registry is built from conflicting or malformed types."""

    kind = "REGISTRY_ERROR"
