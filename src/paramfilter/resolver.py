"""Key resolver: params key -> (condition type, column, comparator)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from .condition import comparator_suffix
from .config import FilterConfig
from .exceptions import UnknownFilterKeyError
from .result import ParseResult

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .condition import ConditionType
    from .registry import ConditionTypeRegistry

logger = logging.getLogger("paramfilter.resolver")


class KeyMatch(NamedTuple):
    condition_type: ConditionType
    column: str
    comparator: str


def param_key_type(
    registry: ConditionTypeRegistry,
    config: FilterConfig | Mapping[str, Any],
    key: str,
) -> ParseResult[KeyMatch]:
    """
    Resolve a params key such as ``"title_contains"``.

    Types and their comparators are tried in registry order; the first
    suffix whose stripped key is in that type's allow-list wins.  A key
    with no matching suffix is then tried as a bare column, taking the
    type's default comparator.  Allow-list membership, not suffix text,
    decides between types: ``"date_column_contains"`` is rejected when
    ``date_column`` is not a text column.
    """
    config = FilterConfig.from_mapping(config)
    if not isinstance(key, str):
        logger.debug("Non-string filter key %r", key)
        return ParseResult.failure(
            UnknownFilterKeyError(str(key), _known_keys(registry, config))
        )

    for condition_type in registry:
        allowed = config.allowed_keys(condition_type.name)
        for comparator in condition_type.comparators:
            suffix = comparator_suffix(comparator)
            if not key.endswith(suffix):
                continue
            column = key[: -len(suffix)]
            if column in allowed:
                logger.debug(
                    "Resolved %r to %s %r %r",
                    key,
                    condition_type.name,
                    column,
                    comparator,
                )
                return ParseResult.success(KeyMatch(condition_type, column, comparator))

    for condition_type in registry:
        if key in config.allowed_keys(condition_type.name):
            comparator = condition_type.default_comparator
            logger.debug(
                "Resolved %r to %s %r with default comparator %r",
                key,
                condition_type.name,
                key,
                comparator,
            )
            return ParseResult.success(KeyMatch(condition_type, key, comparator))

    logger.debug("Unknown filter key %r", key)
    return ParseResult.failure(
        UnknownFilterKeyError(key, _known_keys(registry, config))
    )


def _known_keys(
    registry: ConditionTypeRegistry, config: FilterConfig
) -> Iterator[str]:
    for condition_type in registry:
        for column in config.allowed_keys(condition_type.name):
            yield column
            for comparator in condition_type.comparators:
                yield column + comparator_suffix(comparator)
