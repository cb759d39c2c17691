# src/fixtura/sizes.py
"""Size bounds for generated arrays and collections."""

from __future__ import annotations

import random as random_module
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SizeRange:
    """Inclusive bounds on the size of a generated collection.

    ``min_size == max_size`` is an exact size and resolves without
    drawing from the RNG.

    Attributes:
        min_size: Smallest allowed size (>= 0).
        max_size: Largest allowed size (>= min_size).
    """

    min_size: int
    max_size: int

    def __post_init__(self) -> None:
        if self.min_size < 0:
            raise ValueError(f"Collection size must not be negative, got min_size={self.min_size}")
        if self.min_size > self.max_size:
            raise ValueError(f"Collection min_size {self.min_size} exceeds max_size {self.max_size}")

    @classmethod
    def exactly(cls, size: int) -> SizeRange:
        return cls(size, size)

    @classmethod
    def of(cls, size_or_min: int, max_size: int | None = None) -> SizeRange:
        """Build from either ``(size)`` or ``(min, max)``."""
        if max_size is None:
            return cls.exactly(size_or_min)
        return cls(size_or_min, max_size)

    @property
    def is_exact(self) -> bool:
        return self.min_size == self.max_size

    def resolve(self, rng: random_module.Random) -> int:
        """Pick a concrete size within the bounds."""
        if self.is_exact:
            return self.min_size
        return rng.randint(self.min_size, self.max_size)


DEFAULT_MIN_SIZE = 2
DEFAULT_MAX_SIZE = 10
DEFAULT_COLLECTION_SIZE = SizeRange(DEFAULT_MIN_SIZE, DEFAULT_MAX_SIZE)
