# src/fixtura/registry.py
"""Default value factories for scalar types.

Single source of truth for which types fixtura generates directly rather
than by constructing and populating an instance. The mapping is built
once at import and exposed read-only, so lookups need no locking.

Lookup is by exact type: ``bool`` does not fall back to ``int``, and a
subclass of ``str`` is treated as a composite type.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from types import MappingProxyType
from typing import Any

import numpy as np

from fixtura.factories import ScalarFactory
from fixtura.primitives import (
    random_boolean,
    random_byte,
    random_byte_array,
    random_date,
    random_decimal,
    random_double,
    random_float,
    random_int,
    random_local_date,
    random_local_time,
    random_long,
    random_short,
    random_string,
)

SCALAR_FACTORIES: MappingProxyType[type, ScalarFactory[Any]] = MappingProxyType(
    {
        int: ScalarFactory(random_int),
        bool: ScalarFactory(random_boolean),
        float: ScalarFactory(random_double),
        str: ScalarFactory(random_string),
        bytes: ScalarFactory(random_byte_array),
        Decimal: ScalarFactory(random_decimal),
        date: ScalarFactory(random_local_date),
        datetime: ScalarFactory(random_date),
        time: ScalarFactory(random_local_time),
        # Fixed-width numerics narrow the draw to the declared width
        np.int8: ScalarFactory(random_byte, np.int8),
        np.int16: ScalarFactory(random_short, np.int16),
        np.int32: ScalarFactory(random_int, np.int32),
        np.int64: ScalarFactory(random_long, np.int64),
        np.float32: ScalarFactory(random_float, np.float32),
        np.float64: ScalarFactory(random_double, np.float64),
        np.bool_: ScalarFactory(random_boolean, np.bool_),
    }
)


def lookup(target: Any) -> ScalarFactory[Any] | None:
    """Default factory for a scalar type, or None for anything else."""
    try:
        return SCALAR_FACTORIES.get(target)
    except TypeError:
        # Unhashable annotations are never scalars
        return None


def is_scalar(target: Any) -> bool:
    return lookup(target) is not None
