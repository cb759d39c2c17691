# src/fixtura/population.py
"""Reflective population of composite instances.

The Populator walks a type's constructor fields and builds a value for
each one, consulting a consumed BuildConfiguration for overrides. It
understands:

- dataclasses (init fields)
- pydantic models (model_fields, passed by alias when one is set)
- NamedTuples
- classes with annotated ``__init__`` parameters
- classes with a no-argument ``__init__`` and annotated attributes,
  which are set after construction
- generic aliases of the above (``Box[int]``), binding direct TypeVar fields

Type resolution order for one annotation:

    custom factory > subtype substitution > constrained scalar > scalar
    registry > Literal / Union / containers > Enum > NewType > composite
    construction

Length and bound constraints are honoured where they can be met by
drawing: ``min_length`` / ``max_length`` on strings and collections, and
``ge`` / ``gt`` / ``le`` / ``lt`` on ints and floats. They are read from
pydantic ``Field(...)`` declarations and from ``Annotated`` extras.
Other constraints (``pattern``, ``multiple_of``, decimal digits) are
not read, so a model that declares them may still reject the draw.

A pydantic model with an excluded required field is built with
``model_construct`` so the field can stay None without validation.

Recursion stops at a type already under construction in its own
ancestry, or past ``settings.max_depth``: the field is left as None,
or as an empty container when the container's element would recurse.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import math
import random as random_module
from dataclasses import dataclass
from enum import Enum
from types import UnionType
from typing import Annotated, Any, ClassVar, Literal, TypeVar, Union, get_args, get_origin, get_type_hints

import annotated_types
import structlog
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from fixtura import registry
from fixtura.configuration import BuildConfiguration, FieldAction
from fixtura.errors import PopulationError
from fixtura.factories import produce
from fixtura.primitives import DEFAULT_STRING_LENGTH, INT_MAX, INT_MIN, random_enum, random_string, resolve_rng

logger = structlog.get_logger(__name__)

_LIST_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)
_SET_ORIGINS: frozenset[Any] = frozenset({set, collections.abc.Set, collections.abc.MutableSet})
_MAPPING_ORIGINS: frozenset[Any] = frozenset({dict, collections.abc.Mapping, collections.abc.MutableMapping})
_CONTAINER_ORIGINS: frozenset[Any] = _LIST_ORIGINS | _SET_ORIGINS | _MAPPING_ORIGINS | {frozenset, tuple}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One constructor input of a composite type.

    Attributes:
        name: Field name, used for property matching and paths.
        annotation: Declared type.
        has_default: Whether the constructor can omit this field.
        keyword: Keyword used when calling the constructor (alias for pydantic).
        metadata: Constraint metadata declared outside the annotation
            (pydantic ``FieldInfo.metadata``).
    """

    name: str
    annotation: Any
    has_default: bool
    keyword: str
    metadata: tuple[Any, ...] = ()


def _split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated`` layers, returning the bare type and their extras."""
    current = annotation
    extras: list[Any] = []
    while get_origin(current) is Annotated:
        extras.extend(current.__metadata__)
        current = get_args(current)[0]
    return current, tuple(extras)


def _unwrap_annotated(annotation: Any) -> Any:
    return _split_annotated(annotation)[0]


@dataclass(frozen=True, slots=True)
class Constraints:
    """Length and bound constraints collected for one location."""

    min_length: int | None = None
    max_length: int | None = None
    ge: Any = None
    gt: Any = None
    le: Any = None
    lt: Any = None

    @property
    def has_length(self) -> bool:
        return self.min_length is not None or self.max_length is not None

    @property
    def has_bounds(self) -> bool:
        return any(v is not None for v in (self.ge, self.gt, self.le, self.lt))


_NO_CONSTRAINTS = Constraints()


def _flatten_metadata(items: tuple[Any, ...]) -> list[Any]:
    flat: list[Any] = []
    for item in items:
        if isinstance(item, FieldInfo):
            flat.extend(_flatten_metadata(tuple(item.metadata)))
        elif isinstance(item, annotated_types.GroupedMetadata):
            flat.extend(_flatten_metadata(tuple(item)))
        else:
            flat.append(item)
    return flat


def collect_constraints(metadata: tuple[Any, ...]) -> Constraints:
    """Read length and bound constraints from field and ``Annotated`` metadata.

    Unrecognised metadata is ignored. Later entries win when the same
    constraint appears twice.
    """
    if not metadata:
        return _NO_CONSTRAINTS

    found: dict[str, Any] = {}
    for item in _flatten_metadata(metadata):
        match item:
            case annotated_types.MinLen(min_length=value):
                found["min_length"] = value
            case annotated_types.MaxLen(max_length=value):
                found["max_length"] = value
            case annotated_types.Ge(ge=value):
                found["ge"] = value
            case annotated_types.Gt(gt=value):
                found["gt"] = value
            case annotated_types.Le(le=value):
                found["le"] = value
            case annotated_types.Lt(lt=value):
                found["lt"] = value
    return Constraints(**found) if found else _NO_CONSTRAINTS


def _is_union_type(t: Any) -> bool:
    origin = get_origin(t)
    return origin is Union or isinstance(t, UnionType)


def _is_abstract(cls: type) -> bool:
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def _resolve_hints(target: Any, owner: type, path: str) -> dict[str, Any]:
    try:
        return get_type_hints(target, include_extras=True)
    except Exception as e:  # NameError for unresolvable forward references
        raise PopulationError(owner, path, f"cannot resolve type hints: {e}") from e


def constructor_fields(cls: type, path: str) -> tuple[list[FieldSpec], bool]:
    """Describe how to construct ``cls``.

    Returns:
        (fields, set_after_init). When ``set_after_init`` is True the
        class is built with no arguments and fields are assigned as
        attributes afterwards.

    Raises:
        PopulationError: If hints cannot be resolved or the constructor
            takes variadic-only arguments.
    """
    if dataclasses.is_dataclass(cls):
        hints = _resolve_hints(cls, cls, path)
        specs = [
            FieldSpec(
                name=f.name,
                annotation=hints.get(f.name, Any),
                has_default=f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING,
                keyword=f.name,
            )
            for f in dataclasses.fields(cls)
            if f.init
        ]
        return specs, False

    if issubclass(cls, BaseModel):
        specs = [
            FieldSpec(
                name=name,
                annotation=info.annotation if info.annotation is not None else Any,
                has_default=not info.is_required(),
                keyword=info.alias or name,
                metadata=tuple(info.metadata),
            )
            for name, info in cls.model_fields.items()
        ]
        return specs, False

    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        hints = _resolve_hints(cls, cls, path)
        defaults = getattr(cls, "_field_defaults", {})
        specs = [
            FieldSpec(name=name, annotation=hints.get(name, Any), has_default=name in defaults, keyword=name)
            for name in cls._fields
        ]
        return specs, False

    if cls.__init__ is object.__init__:
        params: list[inspect.Parameter] = []
    else:
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as e:
            raise PopulationError(cls, path, f"cannot inspect constructor: {e}") from e
        params = [
            p
            for p in signature.parameters.values()
            if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]

    if not params:
        # Bean-style: construct bare, then assign annotated attributes
        hints = _resolve_hints(cls, cls, path)
        specs = [
            FieldSpec(name=name, annotation=annotation, has_default=hasattr(cls, name), keyword=name)
            for name, annotation in hints.items()
            if not name.startswith("_") and annotation is not ClassVar and get_origin(annotation) is not ClassVar
        ]
        return specs, True

    if any(p.kind is inspect.Parameter.POSITIONAL_ONLY for p in params):
        raise PopulationError(cls, path, "positional-only constructor parameters are not supported")

    hints = _resolve_hints(cls.__init__, cls, path)
    specs = [
        FieldSpec(
            name=p.name,
            annotation=hints.get(p.name, Any),
            has_default=p.default is not inspect.Parameter.empty,
            keyword=p.name,
        )
        for p in params
    ]
    return specs, False


class Populator:
    """Builds one instance from a consumed BuildConfiguration.

    Not thread-safe; create one per build.
    """

    def __init__(self, configuration: BuildConfiguration, *, rng: random_module.Random | None = None) -> None:
        self._config = configuration
        self._settings = configuration.settings
        self._rng = resolve_rng(rng)
        self._ancestry: list[type] = []

    def build(self) -> Any:
        return self.value_for(self._config.target, self._config.root_path, None, 0)

    def value_for(
        self,
        annotation: Any,
        path: str,
        name: str | None,
        depth: int,
        metadata: tuple[Any, ...] = (),
    ) -> Any:
        """Build a value for ``annotation`` at ``path``.

        Args:
            annotation: Declared type of the location.
            path: Dotted path of the location.
            name: Property name of the enclosing field (None at the root).
            depth: Composite nesting depth of the location.
            metadata: Constraint metadata declared on the field itself.
        """
        annotation, extras = _split_annotated(annotation)
        metadata = (*metadata, *extras)
        constraints = collect_constraints(metadata)

        if annotation is Any or annotation is object:
            return random_string(rng=self._rng)
        if annotation is None or annotation is type(None):
            return None

        custom = self._config.factory_for(annotation)
        if custom is not None:
            return produce(custom, self._rng)

        sub_types = self._config.subtypes_for(annotation)
        if sub_types:
            chosen = self._rng.choice(sub_types)
            if chosen is not annotation:
                logger.debug("subtype_substituted", declared=annotation.__name__, chosen=chosen.__name__, path=path)
                return self.value_for(chosen, path, name, depth, metadata)

        if annotation is str and constraints.has_length:
            return self._constrained_string(constraints, path)
        if annotation in (int, float) and constraints.has_bounds:
            return self._bounded_number(annotation, constraints, path)

        scalar = registry.lookup(annotation)
        if scalar is not None:
            return produce(scalar, self._rng)

        origin = get_origin(annotation)
        if origin is Literal:
            return self._rng.choice(get_args(annotation))
        if _is_union_type(annotation):
            return self._union_value(annotation, path, name, depth, metadata)
        if origin in _CONTAINER_ORIGINS or annotation in _CONTAINER_ORIGINS:
            return self._container_value(annotation, path, name, depth, constraints)

        if isinstance(annotation, type) and issubclass(annotation, Enum):
            return random_enum(annotation, rng=self._rng)
        if hasattr(annotation, "__supertype__"):
            # typing.NewType
            return self.value_for(annotation.__supertype__, path, name, depth, metadata)
        if isinstance(annotation, TypeVar):
            raise PopulationError(annotation, path, "unbound type variable")

        if isinstance(origin, type):
            typevars = dict(zip(getattr(origin, "__parameters__", ()), get_args(annotation), strict=False))
            return self._composite_value(origin, path, depth, typevars)
        if isinstance(annotation, type):
            return self._composite_value(annotation, path, depth, {})

        raise PopulationError(annotation, path, "unsupported annotation")

    # -------------------------------------------------------------------------
    # Constrained scalars
    # -------------------------------------------------------------------------

    def _constrained_string(self, constraints: Constraints, path: str) -> str:
        low = constraints.min_length or 0
        high = constraints.max_length
        if high is not None and low > high:
            raise PopulationError(str, path, f"min_length {low} exceeds max_length {high}")
        length = max(DEFAULT_STRING_LENGTH, low)
        if high is not None:
            length = min(length, high)
        return random_string(length, rng=self._rng)

    def _bounded_number(self, kind: type, constraints: Constraints, path: str) -> int | float:
        c = constraints
        if kind is int:
            low = math.ceil(c.ge) if c.ge is not None else (math.floor(c.gt) + 1 if c.gt is not None else None)
            high = math.floor(c.le) if c.le is not None else (math.ceil(c.lt) - 1 if c.lt is not None else None)
            if low is None:
                low = min(INT_MIN, high)
            if high is None:
                high = max(INT_MAX, low)
            if low > high:
                raise PopulationError(int, path, f"no integer satisfies bounds [{low}, {high}]")
            return self._rng.randint(low, high)

        low = c.ge if c.ge is not None else c.gt
        high = c.le if c.le is not None else c.lt
        if low is None:
            low = high - 1.0
        if high is None:
            high = low + 1.0
        exclusive = c.gt is not None or c.lt is not None
        if low > high or (low == high and exclusive):
            raise PopulationError(float, path, f"no float satisfies bounds [{low}, {high}]")
        value = self._rng.uniform(low, high)
        if (c.gt is not None and value <= c.gt) or (c.lt is not None and value >= c.lt):
            # uniform() may land on an endpoint
            value = (low + high) / 2
        return float(value)

    # -------------------------------------------------------------------------
    # Unions and containers
    # -------------------------------------------------------------------------

    def _union_value(
        self,
        annotation: Any,
        path: str,
        name: str | None,
        depth: int,
        metadata: tuple[Any, ...],
    ) -> Any:
        args = get_args(annotation)
        members = [a for a in args if a is not type(None)]
        nullable = len(members) < len(args)
        if not members:
            return None
        probability = self._settings.optional_none_probability
        if nullable and probability > 0 and self._rng.random() < probability:
            return None
        member = members[0] if len(members) == 1 else self._rng.choice(members)
        return self.value_for(member, path, name, depth, metadata)

    def _would_recurse(self, annotation: Any, depth: int) -> bool:
        """True if building ``annotation`` as a nested composite would stop at the cycle guard."""
        target = _unwrap_annotated(annotation)
        target = get_origin(target) or target
        if not isinstance(target, type) or registry.is_scalar(target) or issubclass(target, Enum):
            return False
        if self._config.factory_for(target) is not None:
            return False
        return target in self._ancestry or depth > self._settings.max_depth

    def _collection_count(self, path: str, name: str | None, constraints: Constraints) -> int:
        count = self._config.collection_size_for(path, name).resolve(self._rng)
        if constraints.min_length is not None:
            count = max(count, constraints.min_length)
        if constraints.max_length is not None:
            count = min(count, constraints.max_length)
        return count

    def _container_value(
        self,
        annotation: Any,
        path: str,
        name: str | None,
        depth: int,
        constraints: Constraints,
    ) -> Any:
        origin = get_origin(annotation) or annotation
        args = get_args(annotation)

        if origin is tuple:
            if annotation is tuple:
                args = (Any, ...)
            elif not args:
                # tuple[()]
                return ()
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._elements(args[0], path, name, depth, constraints))
            # Fixed-shape tuple: one value per position, size restrictions do not apply
            return tuple(self.value_for(arg, path, name, depth) for arg in args)

        if origin in _MAPPING_ORIGINS:
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            if self._would_recurse(key_type, depth) or self._would_recurse(value_type, depth):
                return {}
            count = self._collection_count(path, name, constraints)
            pairs = [
                (self.value_for(key_type, path, name, depth), self.value_for(value_type, path, name, depth))
                for _ in range(count)
            ]
            try:
                return dict(pairs)
            except TypeError as e:
                raise PopulationError(annotation, path, f"unhashable key type {key_type!r}: {e}") from e

        element_type = args[0] if args else Any
        elements = self._elements(element_type, path, name, depth, constraints)
        if origin in _SET_ORIGINS or origin is frozenset:
            try:
                return frozenset(elements) if origin is frozenset else set(elements)
            except TypeError as e:
                raise PopulationError(annotation, path, f"unhashable element type {element_type!r}: {e}") from e
        return elements

    def _elements(
        self,
        element_type: Any,
        path: str,
        name: str | None,
        depth: int,
        constraints: Constraints,
    ) -> list[Any]:
        if self._would_recurse(element_type, depth):
            logger.debug("cycle_detected", type=str(element_type), path=path)
            return []
        count = self._collection_count(path, name, constraints)
        return [self.value_for(element_type, path, name, depth) for _ in range(count)]

    # -------------------------------------------------------------------------
    # Composites
    # -------------------------------------------------------------------------

    def _composite_value(self, cls: type, path: str, depth: int, typevars: dict[Any, Any]) -> Any:
        if cls in self._ancestry or depth > self._settings.max_depth:
            logger.debug("cycle_detected", type=cls.__name__, path=path, depth=depth)
            return None
        if _is_abstract(cls):
            raise PopulationError(cls, path, "abstract type has no subtype restriction")

        fields, set_after_init = constructor_fields(cls, path)
        values: dict[str, Any] = {}
        excluded_required: list[str] = []

        self._ancestry.append(cls)
        try:
            for spec in fields:
                field_path = f"{path}.{spec.name}"
                rule = self._config.field_rule(field_path, spec.name)
                if rule.action is FieldAction.ASSIGN and rule.source is not None:
                    values[spec.keyword] = produce(rule.source, self._rng)
                elif rule.action is FieldAction.EXCLUDE:
                    if not spec.has_default:
                        values[spec.keyword] = None
                        excluded_required.append(spec.name)
                else:
                    annotation = spec.annotation
                    if isinstance(annotation, TypeVar) and annotation in typevars:
                        annotation = typevars[annotation]
                    values[spec.keyword] = self.value_for(
                        annotation, field_path, spec.name, depth + 1, spec.metadata
                    )
        finally:
            self._ancestry.pop()

        if excluded_required and issubclass(cls, BaseModel):
            # Validation would reject None for the excluded fields
            logger.debug("validation_skipped", type=cls.__name__, path=path, excluded=excluded_required)
            by_name = {spec.name: values[spec.keyword] for spec in fields if spec.keyword in values}
            return self._construct(cls.model_construct, cls, path, by_name)
        if set_after_init:
            return self._construct(None, cls, path, values)
        return self._construct(cls, cls, path, values)

    def _construct(self, factory: Any, cls: type, path: str, values: dict[str, Any]) -> Any:
        """Call ``factory(**values)``, or with no factory build bare and set attributes."""
        try:
            if factory is not None:
                return factory(**values)
            instance = cls()
            for attribute, value in values.items():
                setattr(instance, attribute, value)
            return instance
        except Exception as e:  # constructor and validator failures are data, not bugs
            raise PopulationError(cls, path, f"constructor rejected generated values: {e}") from e
