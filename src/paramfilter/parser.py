"""Dispatching parser: route raw condition options to their condition type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import FilterConfig
from .exceptions import EncodingError, UnknownConditionTypeError
from .result import ParseResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .condition import Condition
    from .fragment import Fragment
    from .registry import ConditionTypeRegistry

logger = logging.getLogger("paramfilter.parser")


def parse(
    registry: ConditionTypeRegistry,
    config: FilterConfig | Mapping[str, Any],
    options: Mapping[str, Any],
) -> ParseResult[Condition]:
    """
    Parse one condition by delegating to the type named in ``options["type"]``.

    Example::

        parse(registry, {"text": {"keys": ["title", "comments"]}}, {
            "type": "text",
            "column": "title",
            "comparator": "equals",
            "value": "Buy Milk",
            "inverse": False,
        })

    The delegate validates column, comparator and value; this function only
    resolves the type and strips the ``type`` field.
    """
    type_name = options.get("type")
    condition_type = registry.get(type_name) if type_name is not None else None
    if condition_type is None:
        logger.debug("Unknown condition type %r", type_name)
        return ParseResult.failure(
            UnknownConditionTypeError(str(type_name), registry.names)
        )

    sub_config = FilterConfig.from_mapping(config).get(condition_type.name)
    remaining = {k: v for k, v in options.items() if k != "type"}
    logger.debug(
        "Dispatching %s condition on %r",
        condition_type.name,
        remaining.get("column"),
    )
    return condition_type.parse(sub_config, remaining)


def encode(registry: ConditionTypeRegistry, condition: Condition) -> Fragment:
    """
    Encode *condition* with the type that produced it.

    Raises:
        EncodingError: If the condition's type is not registered, or its
            comparator cannot be encoded.
    """
    condition_type = registry.get(condition.type)
    if condition_type is None:
        raise EncodingError(f"No registered condition type {condition.type!r}")
    return condition_type.encode(condition)
