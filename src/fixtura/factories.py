# src/fixtura/factories.py
"""Value factories: the single extension point for producing values.

A value factory is anything with a ``create_value()`` method. Callers
supply their own for fixture-specific types; fixtura composes its
built-in ones (scalar, fixed value, array-of, enum-of, one-of) to cover
collections, enums and literals.

Built-in factories derive from ``RandomFactory`` and accept an optional
``rng`` on ``create_value`` so the populator can thread its own RNG
through them. User factories are called with no arguments.

Usage:
    names = ArrayOf(ScalarFactory(random_string), SizeRange(3, 3))
    names.create_value()          # three independent random strings
    the_value("fixed").create_value()
"""

from __future__ import annotations

import random as random_module
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from fixtura.errors import FixturaError, ValueFactoryError
from fixtura.primitives import random_enum, resolve_rng
from fixtura.sizes import DEFAULT_COLLECTION_SIZE, SizeRange


@runtime_checkable
class ValueFactory[T](Protocol):
    """Produces one value of type T per call."""

    def create_value(self) -> T: ...


class RandomFactory[T](ABC):
    """Base for the built-in factories that draw from an RNG."""

    @abstractmethod
    def create_value(self, *, rng: random_module.Random | None = None) -> T: ...


def produce[T](factory: ValueFactory[T], rng: random_module.Random | None = None) -> T:
    """Invoke a factory, wrapping foreign failures in ValueFactoryError.

    fixtura's own errors pass through unchanged so callers still see
    e.g. EmptyDomainError from a nested enum factory.
    """
    try:
        if isinstance(factory, RandomFactory):
            return factory.create_value(rng=rng)
        return factory.create_value()
    except FixturaError:
        raise
    except Exception as e:
        raise ValueFactoryError(factory, e) from e


@dataclass(frozen=True, slots=True)
class FixedValue[T](RandomFactory[T]):
    """Always returns the same literal."""

    value: T

    def create_value(self, *, rng: random_module.Random | None = None) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class ScalarFactory[T](RandomFactory[T]):
    """Wraps a primitive generator that takes a keyword ``rng``.

    ``convert`` narrows the generated value to a declared width
    (e.g. ``numpy.int16``).
    """

    generator: Callable[..., T]
    convert: Callable[[Any], T] | None = None

    def create_value(self, *, rng: random_module.Random | None = None) -> T:
        value = self.generator(rng=rng)
        if self.convert is not None:
            return self.convert(value)
        return value


@dataclass(frozen=True, slots=True)
class EnumOf[E: Enum](RandomFactory[E]):
    """Picks a random member of an enum type."""

    enum_type: type[E]

    def create_value(self, *, rng: random_module.Random | None = None) -> E:
        return random_enum(self.enum_type, rng=rng)


@dataclass(frozen=True, slots=True)
class OneOf[T](RandomFactory[T]):
    """Picks one of a fixed, non-empty set of values."""

    values: tuple[T, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("OneOf requires at least one value")

    def create_value(self, *, rng: random_module.Random | None = None) -> T:
        source = resolve_rng(rng)
        return source.choice(self.values)


@dataclass(frozen=True, slots=True)
class ArrayOf[T](RandomFactory[list[T]]):
    """Builds a list by invoking an element factory once per slot.

    Elements are produced independently; nothing is shared or
    deduplicated. The size comes from ``size`` unless a hint is passed
    to ``create_value``.
    """

    element: ValueFactory[T]
    size: SizeRange = DEFAULT_COLLECTION_SIZE

    def create_value(
        self,
        size: int | None = None,
        *,
        rng: random_module.Random | None = None,
    ) -> list[T]:
        source = resolve_rng(rng)
        count = size if size is not None else self.size.resolve(source)
        if count < 0:
            raise ValueError(f"Array size must not be negative, got {count}")
        return [produce(self.element, rng) for _ in range(count)]


@dataclass(frozen=True, slots=True)
class FromCallable[T]:
    """Adapts a zero-argument callable to the ValueFactory protocol."""

    func: Callable[[], T]

    def create_value(self) -> T:
        return self.func()


def the_value[T](value: T) -> FixedValue[T]:
    return FixedValue(value)


def one_of_values[T](values: Sequence[T]) -> OneOf[T]:
    return OneOf(tuple(values))


def as_factory(candidate: Any) -> ValueFactory[Any]:
    """Coerce a factory argument: ValueFactory as-is, callables wrapped.

    Raises:
        TypeError: If candidate is neither a ValueFactory nor callable.
    """
    if isinstance(candidate, ValueFactory) and not isinstance(candidate, type):
        return candidate
    if callable(candidate):
        return FromCallable(candidate)
    raise TypeError(f"Expected a ValueFactory or zero-argument callable, got {type(candidate).__name__}")


def as_value_source(value: Any) -> ValueFactory[Any]:
    """Coerce a restriction value: ValueFactory as-is, anything else is a literal."""
    if isinstance(value, ValueFactory) and not isinstance(value, type):
        return value
    return FixedValue(value)
