# tests/property/test_primitives_properties.py
"""Property-based tests for the primitive generators.

Invariants:
- Bounded integer draws stay inside [min, max] for every width
- Equal bounds return min without consuming randomness
- Strings have exactly the requested length and are ASCII alphanumeric
- Decimals carry at most ten significant digits and a scale of 0 to 4
- one_of only ever returns one of its arguments
- The same seed reproduces the same value
"""

from __future__ import annotations

import random
import string

from hypothesis import given
from hypothesis import strategies as st

from fixtura.primitives import (
    LONG_MAX,
    LONG_MIN,
    SHORT_MAX,
    SHORT_MIN,
    one_of,
    random_decimal,
    random_double,
    random_int,
    random_long,
    random_short,
    random_string,
)
from tests.conftest import NoDrawRandom
from tests.property.conftest import int_bounds, ordered_pair, seeds
from tests.property.settings import DISTRIBUTION_SETTINGS, QUICK_SETTINGS, STANDARD_SETTINGS

_ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)


class TestBoundedIntegerProperties:
    @given(seed=seeds, bounds=int_bounds)
    @DISTRIBUTION_SETTINGS
    def test_int_within_bounds(self, seed: int, bounds: tuple[int, int]) -> None:
        low, high = bounds
        assert low <= random_int(low, high, rng=random.Random(seed)) <= high

    @given(seed=seeds, bounds=ordered_pair(SHORT_MIN, SHORT_MAX))
    @DISTRIBUTION_SETTINGS
    def test_short_within_bounds(self, seed: int, bounds: tuple[int, int]) -> None:
        low, high = bounds
        assert low <= random_short(low, high, rng=random.Random(seed)) <= high

    @given(seed=seeds, bounds=ordered_pair(LONG_MIN, LONG_MAX))
    @DISTRIBUTION_SETTINGS
    def test_long_within_bounds(self, seed: int, bounds: tuple[int, int]) -> None:
        low, high = bounds
        assert low <= random_long(low, high, rng=random.Random(seed)) <= high

    @given(value=st.integers(min_value=SHORT_MIN, max_value=SHORT_MAX))
    @STANDARD_SETTINGS
    def test_equal_bounds_never_draw(self, value: int) -> None:
        rng = NoDrawRandom()
        assert random_int(value, value, rng=rng) == value
        assert random_short(value, value, rng=rng) == value
        assert random_long(value, value, rng=rng) == value

    @given(seed=seeds, bounds=int_bounds)
    @QUICK_SETTINGS
    def test_same_seed_same_value(self, seed: int, bounds: tuple[int, int]) -> None:
        low, high = bounds
        assert random_int(low, high, rng=random.Random(seed)) == random_int(low, high, rng=random.Random(seed))


class TestOtherScalarProperties:
    @given(seed=seeds, length=st.integers(min_value=0, max_value=200))
    @STANDARD_SETTINGS
    def test_string_length_and_alphabet(self, seed: int, length: int) -> None:
        value = random_string(length, rng=random.Random(seed))
        assert len(value) == length
        assert set(value) <= _ALPHANUMERIC

    @given(seed=seeds)
    @DISTRIBUTION_SETTINGS
    def test_decimal_shape(self, seed: int) -> None:
        value = random_decimal(rng=random.Random(seed))
        sign, digits, exponent = value.as_tuple()
        assert sign == 0
        assert len(digits) <= 10
        assert isinstance(exponent, int)
        assert -4 <= exponent <= 0

    @given(
        seed=seeds,
        low=st.integers(min_value=-(10**6), max_value=10**6),
        span=st.integers(min_value=0, max_value=10**6),
    )
    @STANDARD_SETTINGS
    def test_double_within_bounds(self, seed: int, low: int, span: int) -> None:
        # Integral bounds keep the span exact in floating point
        low, high = float(low), float(low + span)
        assert low <= random_double(low, high, rng=random.Random(seed)) <= high

    @given(seed=seeds, values=st.lists(st.integers(), min_size=1, max_size=10))
    @STANDARD_SETTINGS
    def test_one_of_membership(self, seed: int, values: list[int]) -> None:
        assert one_of(*values, rng=random.Random(seed)) in values
