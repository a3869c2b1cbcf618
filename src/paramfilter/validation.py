"""
Shared helpers for condition-type ``parse`` implementations.

The ``validate_*`` helpers return the value when it passes and ``None``
otherwise, so a type can validate every field first and report afterwards.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

_MAX_RENDERED = 15


def validate_in(value: Any, allowed: Collection[Any] | None) -> Any | None:
    """Return *value* if it is a member of *allowed*."""
    if value is None or allowed is None:
        return None
    try:
        return value if value in allowed else None
    except TypeError:
        # unhashable values can never be members of a set allow-list
        return None


def validate_is_string(value: Any) -> str | None:
    """Return *value* if it is a ``str``."""
    return value if isinstance(value, str) else None


def parse_error(value: Any, what: str, filter_type: str) -> str:
    """Describe a generic parse error, e.g. ``Invalid text comparator 'x'``."""
    return f"Invalid {filter_type} {what} '{value}'"


def render_value(value: Any) -> str:
    """Quote a value for an error message, truncating long renderings."""
    rendered = value if isinstance(value, str) else repr(value)
    if len(rendered) <= _MAX_RENDERED:
        return f"'{rendered}'"
    return f"'{rendered[:13]}...{rendered[-3:]}'"


def parse_value_type_error(value: Any, column: str, filter_type: str) -> str:
    """Describe a rejected *value* for *column*, e.g.
    ``Invalid text value '42' for title``.
    """
    return f"Invalid {filter_type} value {render_value(value)} for {column}"
