# tests/unit/test_restrictions.py
"""Unit tests for restriction constructors and variants."""

from __future__ import annotations

import pytest

from fixtura.factories import FixedValue, FromCallable
from fixtura.restrictions import (
    CollectionSize,
    CustomFactory,
    ExcludePath,
    ExcludeProperty,
    PathCollectionSize,
    PathValue,
    PropertyCollectionSize,
    PropertyValue,
    RestrictionKind,
    Subtype,
    collection_size,
    collection_size_for_path,
    collection_size_for_property,
    exclude_path,
    exclude_property,
    factory,
    subtype,
    with_path,
    with_property,
)
from fixtura.sizes import SizeRange
from tests.fixtures.models import Address, Circle, FriendlyGreeter, Greeter, Shape, Square


class TestConstructors:
    def test_with_property_literal(self) -> None:
        restriction = with_property("name", "Alice")
        assert isinstance(restriction, PropertyValue)
        assert restriction.name == "name"
        assert restriction.source == FixedValue("Alice")
        assert restriction.kind is RestrictionKind.PROPERTY_VALUE

    def test_with_property_factory(self) -> None:
        source = FixedValue(3)
        assert with_property("count", source).source is source

    def test_with_path(self) -> None:
        restriction = with_path("person.address.street", "High St")
        assert isinstance(restriction, PathValue)
        assert restriction.path == "person.address.street"

    def test_exclusions(self) -> None:
        assert exclude_property("name") == ExcludeProperty("name")
        assert exclude_path("person.name") == ExcludePath("person.name")

    def test_subtype_single(self) -> None:
        assert subtype(Shape, Circle) == Subtype(Shape, (Circle,))

    def test_subtype_many(self) -> None:
        assert subtype(Shape, Circle, Square).sub_types == (Circle, Square)

    def test_factory_wraps_callable(self) -> None:
        restriction = factory(Address, lambda: Address("x", "y", 1))
        assert isinstance(restriction, CustomFactory)
        assert isinstance(restriction.factory, FromCallable)
        assert restriction.kind is RestrictionKind.FACTORY

    def test_collection_sizes(self) -> None:
        assert collection_size(3) == CollectionSize(SizeRange(3, 3))
        assert collection_size(1, 4) == CollectionSize(SizeRange(1, 4))
        assert collection_size_for_path("a.b", 2) == PathCollectionSize("a.b", SizeRange(2, 2))
        assert collection_size_for_property("b", 0, 1) == PropertyCollectionSize("b", SizeRange(0, 1))

    def test_restrictions_are_immutable(self) -> None:
        restriction = exclude_property("name")
        with pytest.raises(AttributeError):
            restriction.name = "other"  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("name", ["", "a.b"])
    def test_bad_property_names(self, name: str) -> None:
        with pytest.raises(ValueError, match="Property name"):
            with_property(name, 1)

    @pytest.mark.parametrize("path", ["", "person..name", ".name", "person."])
    def test_bad_paths(self, path: str) -> None:
        with pytest.raises(ValueError, match="dotted path"):
            exclude_path(path)

    def test_subtype_needs_subtypes(self) -> None:
        with pytest.raises(ValueError, match="at least one subtype"):
            subtype(Shape)

    def test_subtype_must_subclass(self) -> None:
        with pytest.raises(TypeError, match="not a subclass"):
            subtype(Shape, Address)

    def test_plain_protocol_subtype_accepted(self) -> None:
        restriction = subtype(Greeter, FriendlyGreeter)
        assert restriction.sub_types == (FriendlyGreeter,)

    def test_plain_protocol_rejects_non_implementation(self) -> None:
        with pytest.raises(TypeError, match="not a subclass"):
            subtype(Greeter, Address)

    def test_collection_size_bounds_validated(self) -> None:
        with pytest.raises(ValueError):
            collection_size(5, 1)
        with pytest.raises(ValueError):
            collection_size_for_property("items", -1)

    def test_factory_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            factory(Address, "not a factory")
