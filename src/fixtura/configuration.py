# src/fixtura/configuration.py
"""Build configuration: the per-call accumulator of restrictions.

A BuildConfiguration is created fresh for each ``random_instance_of``
call, receives every restriction in argument order, and is then consumed
once by the populator. It has two states:

    ACCUMULATING --consume()--> CONSUMED

There is no way back. Applying a restriction to, or consuming, a
consumed configuration raises ConfigurationConsumedError.

Precedence when the populator asks about a field at ``path`` named ``name``:

    path value / path exclusion        (exact location)
    property value / property exclusion (name anywhere)
    default resolution by type

Within one scope key the last applied restriction wins, so
``exclude_path(p)`` followed by ``with_path(p, v)`` assigns ``v``.
Collection sizes resolve path > property > global > settings default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self, get_origin

import structlog

from fixtura.errors import ConfigurationConsumedError
from fixtura.factories import ValueFactory
from fixtura.restrictions import (
    CollectionSize,
    CustomFactory,
    ExcludePath,
    ExcludeProperty,
    PathCollectionSize,
    PathValue,
    PropertyCollectionSize,
    PropertyValue,
    Restriction,
    Subtype,
)
from fixtura.settings import DEFAULT_SETTINGS, PopulationSettings
from fixtura.sizes import SizeRange

logger = structlog.get_logger(__name__)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def root_segment(target: Any) -> str:
    """Snake-case name of a type, used as the first path segment.

    ``OrderLine`` becomes ``order_line`` and ``HTTPServer`` becomes
    ``http_server``.
    """
    target = get_origin(target) or target
    name = getattr(target, "__name__", None) or type(target).__name__
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    return _WORD_BOUNDARY.sub(r"\1_\2", name).lower()


class ConfigurationState(StrEnum):
    ACCUMULATING = "accumulating"
    CONSUMED = "consumed"


class FieldAction(StrEnum):
    """What the populator should do with one field."""

    ASSIGN = "assign"  # Use the rule's source factory
    EXCLUDE = "exclude"  # Leave default / None
    POPULATE = "populate"  # Resolve by declared type


@dataclass(frozen=True, slots=True)
class FieldRule:
    action: FieldAction
    source: ValueFactory[Any] | None = None


_POPULATE = FieldRule(FieldAction.POPULATE)
_EXCLUDE = FieldRule(FieldAction.EXCLUDE)


class BuildConfiguration:
    """Accumulates restrictions for one build and answers precedence queries."""

    def __init__(self, target: Any, *, settings: PopulationSettings | None = None) -> None:
        self._target = target
        self._settings = settings if settings is not None else DEFAULT_SETTINGS
        self._state = ConfigurationState.ACCUMULATING

        self._properties: dict[str, ValueFactory[Any]] = {}
        self._paths: dict[str, ValueFactory[Any]] = {}
        self._excluded_properties: set[str] = set()
        self._excluded_paths: set[str] = set()
        self._subtypes: dict[type, tuple[type, ...]] = {}
        self._factories: dict[type, ValueFactory[Any]] = {}
        self._collection_size: SizeRange | None = None
        self._path_sizes: dict[str, SizeRange] = {}
        self._property_sizes: dict[str, SizeRange] = {}

    @property
    def target(self) -> Any:
        return self._target

    @property
    def settings(self) -> PopulationSettings:
        return self._settings

    @property
    def state(self) -> ConfigurationState:
        return self._state

    @property
    def root_path(self) -> str:
        return root_segment(self._target)

    # -------------------------------------------------------------------------
    # Accumulating
    # -------------------------------------------------------------------------

    def apply(self, restriction: Restriction) -> Self:
        """Apply one restriction to its scope.

        Raises:
            ConfigurationConsumedError: If the configuration was consumed.
            TypeError: If ``restriction`` is not a Restriction variant.
        """
        if self._state is ConfigurationState.CONSUMED:
            raise ConfigurationConsumedError(self._target)

        match restriction:
            case PropertyValue(name=name, source=source):
                self._properties[name] = source
                self._excluded_properties.discard(name)
                scope: Any = name
            case ExcludeProperty(name=name):
                self._excluded_properties.add(name)
                self._properties.pop(name, None)
                scope = name
            case PathValue(path=path, source=source):
                self._paths[path] = source
                self._excluded_paths.discard(path)
                scope = path
            case ExcludePath(path=path):
                self._excluded_paths.add(path)
                self._paths.pop(path, None)
                scope = path
            case Subtype(super_type=super_type, sub_types=sub_types):
                self._subtypes[super_type] = sub_types
                scope = super_type.__name__
            case CustomFactory(target=target, factory=value_factory):
                self._factories[target] = value_factory
                scope = getattr(target, "__name__", repr(target))
            case CollectionSize(size=size):
                self._collection_size = size
                scope = None
            case PathCollectionSize(path=path, size=size):
                self._path_sizes[path] = size
                scope = path
            case PropertyCollectionSize(name=name, size=size):
                self._property_sizes[name] = size
                scope = name
            case _:
                raise TypeError(f"Not a restriction: {restriction!r}")

        logger.debug("restriction_applied", kind=restriction.kind.value, scope=scope)
        return self

    def apply_all(self, restrictions: tuple[Restriction, ...] | list[Restriction]) -> Self:
        for restriction in restrictions:
            self.apply(restriction)
        return self

    def consume(self) -> Self:
        """Hand the configuration off; no further restrictions are accepted.

        Raises:
            ConfigurationConsumedError: If already consumed.
        """
        if self._state is ConfigurationState.CONSUMED:
            raise ConfigurationConsumedError(self._target)
        self._state = ConfigurationState.CONSUMED
        return self

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def field_rule(self, path: str, name: str) -> FieldRule:
        """Decide how the field ``name`` at dotted ``path`` is populated."""
        if path in self._paths:
            return FieldRule(FieldAction.ASSIGN, self._paths[path])
        if path in self._excluded_paths:
            return _EXCLUDE
        if name in self._properties:
            return FieldRule(FieldAction.ASSIGN, self._properties[name])
        if name in self._excluded_properties:
            return _EXCLUDE
        return _POPULATE

    def factory_for(self, target: Any) -> ValueFactory[Any] | None:
        try:
            return self._factories.get(target)
        except TypeError:
            return None

    def subtypes_for(self, target: Any) -> tuple[type, ...] | None:
        try:
            return self._subtypes.get(target)
        except TypeError:
            return None

    def collection_size_for(self, path: str, name: str | None) -> SizeRange:
        if path in self._path_sizes:
            return self._path_sizes[path]
        if name is not None and name in self._property_sizes:
            return self._property_sizes[name]
        if self._collection_size is not None:
            return self._collection_size
        return self._settings.collection_size
