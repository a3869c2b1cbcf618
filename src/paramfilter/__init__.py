"""Declarative allow-listed filter params -> conditions -> query fragments."""

from __future__ import annotations

from .condition import (
    Condition,
    ConditionType,
    EncodingRule,
    canonical_name,
    collapse_inversion,
    comparator_suffix,
)
from .conditions import DateCondition, DateRange, TextCondition
from .config import ConditionConfig, FilterConfig
from .exceptions import (
    ConditionError,
    EncodingError,
    InvalidConditionError,
    InvalidValueError,
    InvalidValueFormatError,
    RegistryError,
    UnknownConditionTypeError,
    UnknownFilterKeyError,
)
from .fragment import PLACEHOLDER, Fragment
from .params import encode_conditions, parse_conditions
from .parser import encode, parse
from .registry import ConditionTypeRegistry, build_default_registry, build_registry
from .resolver import KeyMatch, param_key_type
from .result import ParseResult

__all__ = [
    # Core types
    "Condition",
    "ConditionType",
    "EncodingRule",
    "Fragment",
    "KeyMatch",
    "ParseResult",
    "PLACEHOLDER",
    # Built-in types
    "DateCondition",
    "DateRange",
    "TextCondition",
    # Configuration
    "ConditionConfig",
    "FilterConfig",
    # Registry
    "ConditionTypeRegistry",
    "build_default_registry",
    "build_registry",
    # Operations
    "encode",
    "encode_conditions",
    "param_key_type",
    "parse",
    "parse_conditions",
    # Helpers
    "canonical_name",
    "collapse_inversion",
    "comparator_suffix",
    # Exceptions
    "ConditionError",
    "EncodingError",
    "InvalidConditionError",
    "InvalidValueError",
    "InvalidValueFormatError",
    "RegistryError",
    "UnknownConditionTypeError",
    "UnknownFilterKeyError",
]
