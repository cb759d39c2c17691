# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- rng: Seeded random.Random for reproducible draws
- no_draw_rng: RNG that fails the test if anything draws from it

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
import random
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings


class NoDrawRandom(random.Random):
    """Random that raises on every draw.

    Proves that a code path returns without consuming randomness.
    """

    def _fail(self, method: str) -> Any:
        raise AssertionError(f"unexpected RNG draw via {method}()")

    def random(self) -> float:
        return self._fail("random")

    def getrandbits(self, k: int) -> int:
        return self._fail("getrandbits")

    def randint(self, a: int, b: int) -> int:
        return self._fail("randint")

    def randrange(self, *args: Any, **kwargs: Any) -> int:
        return self._fail("randrange")

    def choice(self, seq: Any) -> Any:
        return self._fail("choice")

    def choices(self, *args: Any, **kwargs: Any) -> list[Any]:
        return self._fail("choices")

    def uniform(self, a: float, b: float) -> float:
        return self._fail("uniform")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def no_draw_rng() -> random.Random:
    return NoDrawRandom()


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
