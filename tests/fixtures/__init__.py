# tests/fixtures/__init__.py
"""Shared test fixtures and sample build targets for fixtura tests."""
