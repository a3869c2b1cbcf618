"""
Registry of condition types.

The registry is built once (usually at application start-up) and passed
explicitly to the parsing entry points.  Order matters: key resolution
tries types, and each type's comparators, in declaration order.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from .condition import ConditionType, canonical_name
from .exceptions import RegistryError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger("paramfilter.registry")


class ConditionTypeRegistry:
    """
    Ordered, read-only collection of ``ConditionType`` instances.

    Usage::

        registry = ConditionTypeRegistry([TextCondition(), DateCondition()])
        text = registry.get("text")

    Raises:
        RegistryError: On duplicate names, a ``name`` that differs from
            ``canonical_name(name)``, or a type whose rules reference
            unknown comparators.
    """

    def __init__(self, types: Iterable[ConditionType] = ()) -> None:
        self._types: tuple[ConditionType, ...] = ()
        self._by_name: dict[str, ConditionType] = {}
        for condition_type in types:
            self._add(condition_type)

    def _add(self, condition_type: ConditionType) -> None:
        name = condition_type.name
        if name != canonical_name(name):
            raise RegistryError(
                f"Condition type name {name!r} is not canonical; "
                f"expected {canonical_name(name)!r}"
            )
        existing = self._by_name.get(name)
        if existing is not None:
            raise RegistryError(
                f"Duplicate condition type {name!r}: {existing!r} already "
                f"registered, cannot register {condition_type!r}"
            )
        _check_vocabulary(condition_type)
        self._by_name[name] = condition_type
        self._types = (*self._types, condition_type)
        logger.debug(
            "Registered condition type %s with comparators %s",
            name,
            ", ".join(condition_type.comparators),
        )

    # -- look-up -------------------------------------------------------------

    def get(self, name: str) -> ConditionType | None:
        """Return the type whose canonical name equals *name*, or ``None``."""
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self._types)

    def __iter__(self) -> Iterator[ConditionType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"ConditionTypeRegistry({list(self.names)!r})"


def _check_vocabulary(condition_type: ConditionType) -> None:
    comparators = condition_type.comparators
    if not comparators:
        raise RegistryError(
            f"Condition type {condition_type.name!r} has no comparators"
        )
    if condition_type.default_comparator not in comparators:
        raise RegistryError(
            f"Default comparator {condition_type.default_comparator!r} of "
            f"{condition_type.name!r} is not one of its comparators"
        )
    for comparator, rule in condition_type.rules.items():
        if rule.reverse is not None and rule.reverse not in comparators:
            raise RegistryError(
                f"Comparator {comparator!r} of {condition_type.name!r} "
                f"reverses to unknown comparator {rule.reverse!r}"
            )


def _load(entry: Any) -> ConditionType:
    """Resolve a registry entry: instance, class, or ``"module:Class"`` path."""
    if isinstance(entry, ConditionType):
        return entry
    if isinstance(entry, str):
        module_name, _, attr = entry.partition(":")
        if not attr:
            module_name, _, attr = entry.rpartition(".")
        if not module_name or not attr:
            raise RegistryError(f"Invalid condition type path: {entry!r}")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise RegistryError(f"Cannot import condition type {entry!r}: {e}") from e
        try:
            entry = getattr(module, attr)
        except AttributeError as e:
            raise RegistryError(f"Cannot import condition type {entry!r}: {e}") from e
    if isinstance(entry, type) and issubclass(entry, ConditionType):
        return entry()
    raise RegistryError(f"Not a condition type: {entry!r}")


def build_registry(types: Iterable[Any]) -> ConditionTypeRegistry:
    """
    Create a registry from an explicit list, replacing the defaults.

    Entries may be ``ConditionType`` instances, subclasses, or import paths
    (``"myapp.filters:NumberCondition"``), so the list can live in an
    application's own settings.
    """
    return ConditionTypeRegistry(_load(entry) for entry in types)


def build_default_registry() -> ConditionTypeRegistry:
    """
    Create a registry with the built-in text and date types.

    Returns:
        ConditionTypeRegistry: A new registry instance.

    Example:
        >>> registry = build_default_registry()
        >>> registry.names
        ('text', 'date')
    """
    from .conditions import DateCondition, TextCondition

    return ConditionTypeRegistry([TextCondition(), DateCondition()])
