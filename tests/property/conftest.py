# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import seeds, int_bounds

    @given(seed=seeds, bounds=int_bounds)
    def test_bounds_respected(seed: int, bounds: tuple[int, int]) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, BUILD_SETTINGS
#
# Tiers: DISTRIBUTION (300), STANDARD (100), BUILD (50), QUICK (20)
# =============================================================================

from __future__ import annotations

from hypothesis import strategies as st

from fixtura.primitives import INT_MAX, INT_MIN

# Seeds for random.Random; any int works, keep them readable in failure output
seeds = st.integers(min_value=0, max_value=2**32 - 1)


@st.composite
def ordered_pair(draw: st.DrawFn, lowest: int, highest: int) -> tuple[int, int]:
    """Two ints in [lowest, highest] with first <= second."""
    a = draw(st.integers(min_value=lowest, max_value=highest))
    b = draw(st.integers(min_value=lowest, max_value=highest))
    return (a, b) if a <= b else (b, a)


int_bounds = ordered_pair(INT_MIN, INT_MAX)

# Collection sizes small enough to build full object graphs quickly
size_bounds = ordered_pair(0, 6)

# Property names: identifier-like, never dotted
property_names = st.from_regex(r"[a-z][a-z0-9_]{0,15}", fullmatch=True)

# Dotted paths of one to four property names
paths = st.lists(property_names, min_size=1, max_size=4).map(".".join)
