# src/fixtura/errors.py
"""Exceptions raised by fixtura.

Callers of the façade only ever need to catch two of these:
``EmptyDomainError`` from ``random_enum`` and ``ConstructionError`` from
``random_instance_of``. The others are raised inside a build and are
wrapped into ``ConstructionError`` before they reach the caller.
"""

from __future__ import annotations

from typing import Any


def _type_name(target: Any) -> str:
    """Qualified name for a type, falling back to repr for annotations."""
    module = getattr(target, "__module__", None)
    qualname = getattr(target, "__qualname__", None)
    if qualname is None:
        return repr(target)
    if module in (None, "builtins"):
        return str(qualname)
    return f"{module}.{qualname}"


class FixturaError(Exception):
    """Base class for all fixtura errors."""


class EmptyDomainError(FixturaError):
    """Raised when a random member is requested from an enum with no members.

    Attributes:
        enum_type: The enum class that has no members
    """

    def __init__(self, enum_type: type) -> None:
        self.enum_type = enum_type
        super().__init__(f"Enumeration {_type_name(enum_type)} has no values")


class ValueFactoryError(FixturaError):
    """Raised when a value factory fails to produce a value.

    Attributes:
        factory: The factory that failed
        cause: The original exception
    """

    def __init__(self, factory: Any, cause: BaseException) -> None:
        self.factory = factory
        self.cause = cause
        super().__init__(f"Value factory {factory!r} failed: {cause}")


class PopulationError(FixturaError):
    """Raised when the populator cannot construct a value for a type.

    Attributes:
        target: The type (or annotation) that could not be built
        path: Dotted path of the location being populated
        message: Human-readable error description
    """

    def __init__(self, target: Any, path: str, message: str) -> None:
        self.target = target
        self.path = path
        self.message = message
        super().__init__(f"Cannot populate {_type_name(target)} at '{path}': {message}")


class ConstructionError(FixturaError):
    """Uniform failure raised by ``random_instance_of``.

    The original failure is available as ``cause`` and is also chained
    as ``__cause__``.

    Attributes:
        target: The requested type
        cause: The underlying error
    """

    def __init__(self, target: Any, cause: BaseException) -> None:
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to create a random instance of {_type_name(target)}")


class ConfigurationConsumedError(FixturaError):
    """Raised when a build configuration is used after it has been consumed."""

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(f"Build configuration for {_type_name(target)} has already been consumed")
