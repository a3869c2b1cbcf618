"""Batch parsing of flat filter params, e.g. a decoded query string."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import FilterConfig
from .parser import encode, parse
from .resolver import param_key_type
from .result import ParseResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .condition import Condition
    from .fragment import Fragment
    from .registry import ConditionTypeRegistry

logger = logging.getLogger("paramfilter.params")


def parse_conditions(
    registry: ConditionTypeRegistry,
    config: FilterConfig | Mapping[str, Any],
    params: Mapping[str, Any],
) -> ParseResult[list[Condition]]:
    """
    Parse ``{"title_contains": "blah", ...}`` into conditions.

    Fails fast: the first unresolved key or rejected value is returned and
    the remaining params are not examined.
    """
    config = FilterConfig.from_mapping(config)
    conditions: list[Condition] = []
    for key, value in params.items():
        match = param_key_type(registry, config, key)
        if not match:
            return ParseResult.failure(match.error)  # type: ignore[arg-type]
        condition_type, column, comparator = match.unwrap()
        parsed = parse(
            registry,
            config,
            {
                "type": condition_type.name,
                "column": column,
                "comparator": comparator,
                "value": value,
                "inverse": False,
            },
        )
        if not parsed:
            logger.debug("Rejected filter param %r: %s", key, parsed.error)
            return ParseResult.failure(parsed.error)  # type: ignore[arg-type]
        conditions.append(parsed.unwrap())
    return ParseResult.success(conditions)


def encode_conditions(
    registry: ConditionTypeRegistry, conditions: Iterable[Condition]
) -> list[Fragment]:
    """Encode each condition, preserving order."""
    return [encode(registry, condition) for condition in conditions]
