# src/fixtura/builder.py
"""Entry points for building random instances, arrays and lists.

``random_instance_of`` is the heart of the façade:

1. Scalar types (see ``fixtura.registry``) go straight to their default
   factory. Restrictions are ignored for scalars.
2. Anything else gets a fresh BuildConfiguration; each restriction is
   applied in argument order, then the configuration is consumed.
3. The Populator builds the instance from the consumed configuration.
4. Any failure from population or from a value factory is re-raised as
   ConstructionError naming the target type, with the original chained.

Usage:
    order = random_instance_of(Order, with_property("currency", "GBP"), collection_size(1, 3))
    lines = random_list_of(OrderLine, 5, 5)
"""

from __future__ import annotations

import random as random_module
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from fixtura import registry
from fixtura.configuration import BuildConfiguration
from fixtura.errors import ConstructionError
from fixtura.factories import ArrayOf, EnumOf, RandomFactory, ValueFactory, produce
from fixtura.population import Populator
from fixtura.restrictions import Restriction
from fixtura.settings import DEFAULT_SETTINGS, PopulationSettings
from fixtura.sizes import SizeRange

logger = structlog.get_logger(__name__)


def random_instance_of[T](
    target: type[T],
    *restrictions: Restriction,
    settings: PopulationSettings | None = None,
    rng: random_module.Random | None = None,
) -> T:
    """Build a randomly populated instance of ``target``.

    Args:
        target: Type to build.
        *restrictions: Overrides, applied in order. Later restrictions on
            the same scope replace earlier ones.
        settings: Population defaults (collection sizes, depth).
        rng: RNG for reproducible draws in tests.

    Returns:
        A new instance. Each call builds a fresh object graph.

    Raises:
        ConstructionError: If the type cannot be built or a value factory fails.
    """
    scalar = registry.lookup(target)
    if scalar is not None:
        return produce(scalar, rng)

    configuration = BuildConfiguration(target, settings=settings).apply_all(restrictions)
    return build_instance(configuration, rng=rng)


@dataclass(frozen=True, slots=True)
class InstanceOf[T](RandomFactory[T]):
    """Factory that builds a fresh random instance per call."""

    target: type[T]
    restrictions: tuple[Restriction, ...] = ()
    settings: PopulationSettings | None = None

    def create_value(self, *, rng: random_module.Random | None = None) -> T:
        return random_instance_of(self.target, *self.restrictions, settings=self.settings, rng=rng)


def instance_factory_for[T](
    target: type[T],
    *restrictions: Restriction,
    settings: PopulationSettings | None = None,
) -> ValueFactory[T]:
    """Scalar default factory when one exists, otherwise an InstanceOf."""
    scalar = registry.lookup(target)
    if scalar is not None:
        return scalar
    if isinstance(target, type) and issubclass(target, Enum):
        return EnumOf(target)
    return InstanceOf(target, tuple(restrictions), settings)


def _size_range(min_size: int | None, max_size: int | None, settings: PopulationSettings | None) -> SizeRange:
    if min_size is None and max_size is None:
        return (settings if settings is not None else DEFAULT_SETTINGS).collection_size
    if min_size is None or max_size is None:
        raise TypeError("Pass both min_size and max_size, or neither")
    return SizeRange(min_size, max_size)


def random_array_of[T](
    target: type[T],
    min_size: int | None = None,
    max_size: int | None = None,
    *,
    settings: PopulationSettings | None = None,
    rng: random_module.Random | None = None,
) -> list[T]:
    """Build a list of independently generated ``target`` values.

    Without bounds the size falls in the settings' collection range
    (2 to 10 by default). ``min_size == max_size`` gives exactly that many.
    """
    factory = ArrayOf(instance_factory_for(target, settings=settings), _size_range(min_size, max_size, settings))
    return factory.create_value(rng=rng)


def random_array_of_enum[E: Enum](
    enum_type: type[E],
    min_size: int | None = None,
    max_size: int | None = None,
    *,
    rng: random_module.Random | None = None,
) -> list[E]:
    """List of random members of ``enum_type``.

    Raises:
        EmptyDomainError: If the enum has no members and the size is non-zero.
    """
    return ArrayOf(EnumOf(enum_type), _size_range(min_size, max_size, None)).create_value(rng=rng)


def random_list_of[T](
    target: type[T],
    min_size: int | None = None,
    max_size: int | None = None,
    *,
    settings: PopulationSettings | None = None,
    rng: random_module.Random | None = None,
) -> list[T]:
    return list(random_array_of(target, min_size, max_size, settings=settings, rng=rng))


def random_collection_of[T](
    target: type[T],
    min_size: int | None = None,
    max_size: int | None = None,
    *,
    settings: PopulationSettings | None = None,
    rng: random_module.Random | None = None,
) -> list[T]:
    return random_list_of(target, min_size, max_size, settings=settings, rng=rng)


def build_instance(configuration: BuildConfiguration, *, rng: random_module.Random | None = None) -> Any:
    """Consume a caller-assembled configuration and build from it.

    For callers who accumulate restrictions incrementally instead of
    passing them to ``random_instance_of``.

    Raises:
        ConfigurationConsumedError: If the configuration was already consumed.
        ConstructionError: If population fails.
    """
    configuration.consume()
    try:
        return Populator(configuration, rng=rng).build()
    except Exception as e:  # every build failure surfaces as ConstructionError
        logger.warning(
            "instance_construction_failed",
            target=getattr(configuration.target, "__name__", repr(configuration.target)),
            error=str(e),
        )
        raise ConstructionError(configuration.target, e) from e
