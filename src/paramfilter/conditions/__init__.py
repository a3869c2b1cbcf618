"""Built-in condition types."""

from __future__ import annotations

from .date import DateCondition, DateRange
from .text import TextCondition

__all__ = [
    "DateCondition",
    "DateRange",
    "TextCondition",
]
