# tests/property/settings.py
"""Standardized Hypothesis settings profiles for property tests.

Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_something(seed):
        ...

Tiers:
- DISTRIBUTION_SETTINGS: 300 examples - bounds and range properties of generators
- STANDARD_SETTINGS: 100 examples - regular property tests
- BUILD_SETTINGS: 50 examples - tests that populate whole object graphs
- QUICK_SETTINGS: 20 examples - simple input rejection
"""

from hypothesis import HealthCheck, settings

# Cheap scalar draws; many examples find off-by-one bounds
DISTRIBUTION_SETTINGS = settings(max_examples=300)

STANDARD_SETTINGS = settings(max_examples=100)

# Each example builds a nested instance; keep the count down
BUILD_SETTINGS = settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])

QUICK_SETTINGS = settings(max_examples=20)
