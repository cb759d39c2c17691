# src/fixtura/restrictions.py
"""Restrictions: declarative overrides for how an instance is populated.

Each restriction is an immutable record naming one scope and one effect.
``BuildConfiguration.apply`` dispatches on the variant with a ``match``
statement, so precedence lives in one place rather than being spread
across callbacks.

Scopes, most specific first:
    path       "person.address.street" - one exact location
    property   "street" - that field name anywhere in the graph
    type       Address - every occurrence of a type
    global     every unsized collection

Usage:
    from fixtura import random_instance_of, with_path, exclude_property, collection_size

    person = random_instance_of(
        Person,
        with_path("person.name", "Alice"),
        exclude_property("nickname"),
        collection_size(3),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from fixtura.factories import ValueFactory, as_factory, as_value_source
from fixtura.sizes import SizeRange


class RestrictionKind(StrEnum):
    """Discriminator for restriction variants."""

    PROPERTY_VALUE = "property_value"
    PATH_VALUE = "path_value"
    EXCLUDE_PROPERTY = "exclude_property"
    EXCLUDE_PATH = "exclude_path"
    SUBTYPE = "subtype"
    FACTORY = "factory"
    COLLECTION_SIZE = "collection_size"
    PATH_COLLECTION_SIZE = "path_collection_size"
    PROPERTY_COLLECTION_SIZE = "property_collection_size"


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """Force the value of every field with this name."""

    name: str
    source: ValueFactory[Any]
    kind: RestrictionKind = field(default=RestrictionKind.PROPERTY_VALUE, init=False)


@dataclass(frozen=True, slots=True)
class PathValue:
    """Force the value at one dotted path."""

    path: str
    source: ValueFactory[Any]
    kind: RestrictionKind = field(default=RestrictionKind.PATH_VALUE, init=False)


@dataclass(frozen=True, slots=True)
class ExcludeProperty:
    name: str
    kind: RestrictionKind = field(default=RestrictionKind.EXCLUDE_PROPERTY, init=False)


@dataclass(frozen=True, slots=True)
class ExcludePath:
    path: str
    kind: RestrictionKind = field(default=RestrictionKind.EXCLUDE_PATH, init=False)


@dataclass(frozen=True, slots=True)
class Subtype:
    """Instantiate one of ``sub_types`` wherever ``super_type`` is declared."""

    super_type: type
    sub_types: tuple[type, ...]
    kind: RestrictionKind = field(default=RestrictionKind.SUBTYPE, init=False)


@dataclass(frozen=True, slots=True)
class CustomFactory:
    """Use ``factory`` wherever ``target`` is declared."""

    target: type
    factory: ValueFactory[Any]
    kind: RestrictionKind = field(default=RestrictionKind.FACTORY, init=False)


@dataclass(frozen=True, slots=True)
class CollectionSize:
    size: SizeRange
    kind: RestrictionKind = field(default=RestrictionKind.COLLECTION_SIZE, init=False)


@dataclass(frozen=True, slots=True)
class PathCollectionSize:
    path: str
    size: SizeRange
    kind: RestrictionKind = field(default=RestrictionKind.PATH_COLLECTION_SIZE, init=False)


@dataclass(frozen=True, slots=True)
class PropertyCollectionSize:
    name: str
    size: SizeRange
    kind: RestrictionKind = field(default=RestrictionKind.PROPERTY_COLLECTION_SIZE, init=False)


# Discriminated union - BuildConfiguration.apply matches exhaustively
Restriction = (
    PropertyValue
    | PathValue
    | ExcludeProperty
    | ExcludePath
    | Subtype
    | CustomFactory
    | CollectionSize
    | PathCollectionSize
    | PropertyCollectionSize
)


def _check_name(name: str) -> str:
    if not name or "." in name:
        raise ValueError(f"Property name must be a non-empty name without dots, got {name!r}")
    return name


def _check_path(path: str) -> str:
    if not path or any(not segment for segment in path.split(".")):
        raise ValueError(f"Path must be a dotted path of non-empty segments, got {path!r}")
    return path


def _implements(sub_type: type, super_type: type) -> bool:
    if getattr(super_type, "_is_protocol", False):
        try:
            return issubclass(sub_type, super_type)
        except TypeError:
            # Plain Protocols refuse issubclass(); accept explicit implementations
            return super_type in sub_type.__mro__
    return issubclass(sub_type, super_type)


# =============================================================================
# Constructors
# =============================================================================


def with_property(name: str, value: Any) -> PropertyValue:
    """Assign a literal, or a ValueFactory's output, to every field called ``name``."""
    return PropertyValue(_check_name(name), as_value_source(value))


def exclude_property(name: str) -> ExcludeProperty:
    """Leave every field called ``name`` unpopulated."""
    return ExcludeProperty(_check_name(name))


def with_path(path: str, value: Any) -> PathValue:
    """Assign a literal, or a ValueFactory's output, at one dotted path.

    The first segment names the root type in snake_case, so for a root
    ``Person`` the name field is ``"person.name"``.
    """
    return PathValue(_check_path(path), as_value_source(value))


def exclude_path(path: str) -> ExcludePath:
    return ExcludePath(_check_path(path))


def subtype(super_type: type, *sub_types: type) -> Subtype:
    """Substitute a random choice of ``sub_types`` for ``super_type``.

    Raises:
        ValueError: If no subtypes are given.
        TypeError: If a subtype does not subclass ``super_type``.
    """
    if not sub_types:
        raise ValueError(f"subtype() needs at least one subtype for {super_type.__name__}")
    for sub_type in sub_types:
        if not isinstance(sub_type, type) or not _implements(sub_type, super_type):
            raise TypeError(f"{sub_type!r} is not a subclass of {super_type.__name__}")
    return Subtype(super_type, tuple(sub_types))


def factory(target: type, value_factory: Any) -> CustomFactory:
    """Generate every ``target`` with ``value_factory`` (a ValueFactory or zero-arg callable)."""
    return CustomFactory(target, as_factory(value_factory))


def collection_size(size_or_min: int, max_size: int | None = None) -> CollectionSize:
    """Bound every collection: ``collection_size(3)`` or ``collection_size(1, 5)``."""
    return CollectionSize(SizeRange.of(size_or_min, max_size))


def collection_size_for_path(path: str, size_or_min: int, max_size: int | None = None) -> PathCollectionSize:
    return PathCollectionSize(_check_path(path), SizeRange.of(size_or_min, max_size))


def collection_size_for_property(
    name: str,
    size_or_min: int,
    max_size: int | None = None,
) -> PropertyCollectionSize:
    return PropertyCollectionSize(_check_name(name), SizeRange.of(size_or_min, max_size))
