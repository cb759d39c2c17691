# tests/property/__init__.py
"""Property-based tests for fixtura.

Generators and restrictions are checked against invariants that must
hold for ALL seeds and bounds, not just the handful of examples in the
unit tests.
"""
