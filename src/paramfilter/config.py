"""Allow-list configuration for condition types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fragment import PLACEHOLDER


class ConditionConfig(BaseModel):
    """Per-type sub-configuration.

    ``keys`` is the allow-list of filterable columns.  Extra fields are kept
    for the condition type to interpret (e.g. ``format`` for dates).
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    keys: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("keys")
    @classmethod
    def _keys_have_no_placeholder(cls, keys: frozenset[str]) -> frozenset[str]:
        # a column is substituted into fragment expressions verbatim
        bad = sorted(key for key in keys if PLACEHOLDER in key)
        if bad:
            raise ValueError(
                f"Column names must not contain {PLACEHOLDER!r}: {', '.join(bad)}"
            )
        return keys

    def option(self, name: str, default: Any = None) -> Any:
        """Return a type-specific extra field or *default*."""
        extra = self.model_extra or {}
        return extra.get(name, default)


class FilterConfig(BaseModel):
    """Mapping of condition-type name to :class:`ConditionConfig`.

    Usage::

        config = FilterConfig.from_mapping(
            {"text": {"keys": ["title"]}, "date": {"keys": ["date_column"]}}
        )
    """

    model_config = ConfigDict(frozen=True)

    conditions: dict[str, ConditionConfig] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: FilterConfig | Mapping[str, Any]) -> FilterConfig:
        if isinstance(data, FilterConfig):
            return data
        return cls(
            conditions={
                str(name): (
                    sub
                    if isinstance(sub, ConditionConfig)
                    else ConditionConfig.model_validate(sub or {})
                )
                for name, sub in data.items()
            }
        )

    def get(self, type_name: str) -> ConditionConfig:
        """Return the sub-configuration, empty when the type is unconfigured."""
        return self.conditions.get(type_name) or ConditionConfig()

    def allowed_keys(self, type_name: str) -> frozenset[str]:
        return self.get(type_name).keys
