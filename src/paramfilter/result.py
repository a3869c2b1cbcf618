"""ParseResult: discriminated success/failure for parse operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, cast

if TYPE_CHECKING:
    from .exceptions import ConditionError

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Carries either a parsed value or the first error encountered.

    Usage::

        result = ParseResult.success(condition)
        result = ParseResult.failure(UnknownFilterKeyError("extra_key"))

        if result:
            use(result.value)
        else:
            respond(result.error.to_dict())
    """

    value: T | None = None
    error: ConditionError | None = None

    @property
    def is_ok(self) -> bool:
        return self.error is None

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls, value: T) -> ParseResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ConditionError) -> ParseResult[T]:
        return cls(error=error)

    # ── Access ───────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return cast("T", self.value)

    def __bool__(self) -> bool:
        return self.is_ok
