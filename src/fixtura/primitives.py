# src/fixtura/primitives.py
"""Primitive value generators.

Stateless functions that each produce one random scalar. Every generator
takes an optional ``rng`` so tests can inject a seeded ``random.Random``;
by default they share one module-level instance, whose methods are safe
to call from several threads.

Integer widths follow the signed two's complement ranges:

    short  16-bit   [-32768, 32767]
    int    32-bit   [-2**31, 2**31 - 1]
    long   64-bit   [-2**63, 2**63 - 1]

Bounded draws are inclusive on both ends. When ``min_value == max_value``
the generator returns ``min_value`` without touching the RNG.
"""

from __future__ import annotations

import decimal
import random as random_module
import string
from collections.abc import Sequence
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum

from fixtura.errors import EmptyDomainError

SHORT_MIN = -(2**15)
SHORT_MAX = 2**15 - 1
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
BYTE_MAX = 127

DEFAULT_STRING_LENGTH = 50
BYTE_ARRAY_MIN_LENGTH = 2
BYTE_ARRAY_MAX_LENGTH = 1000  # exclusive

SECONDS_PER_DAY = 24 * 60 * 60
DAYS_PER_YEAR = 365
SECONDS_PER_YEAR = DAYS_PER_YEAR * SECONDS_PER_DAY
SECONDS_IN_12_HOURS = 12 * 60 * 60

DECIMAL_SIGNIFICANT_DIGITS = 10
DECIMAL_MAX_SCALE = 5  # exclusive

ALPHABETIC = string.ascii_letters
ALPHANUMERIC = string.ascii_letters + string.digits

_DECIMAL_CONTEXT = decimal.Context(prec=DECIMAL_SIGNIFICANT_DIGITS, rounding=decimal.ROUND_HALF_UP)

_default_rng = random_module.Random()


def resolve_rng(rng: random_module.Random | None) -> random_module.Random:
    """The given RNG, or the shared module-level one."""
    return rng if rng is not None else _default_rng


def _bounded_int(
    kind: str,
    min_value: int | None,
    max_value: int | None,
    lowest: int,
    highest: int,
    rng: random_module.Random | None,
) -> int:
    """Draw an integer of a declared width, optionally within bounds.

    Raises:
        TypeError: If only one of the bounds is given.
        ValueError: If min_value > max_value or a bound is outside the width.
    """
    if min_value is None and max_value is None:
        return resolve_rng(rng).randint(lowest, highest)
    if min_value is None or max_value is None:
        raise TypeError(f"random_{kind} needs both min_value and max_value, or neither")
    if min_value > max_value:
        raise ValueError(f"random_{kind}: min_value {min_value} exceeds max_value {max_value}")
    if min_value < lowest or max_value > highest:
        raise ValueError(f"random_{kind}: bounds [{min_value}, {max_value}] outside [{lowest}, {highest}]")
    if min_value == max_value:
        return min_value
    return resolve_rng(rng).randint(min_value, max_value)


# =============================================================================
# Textual
# =============================================================================


def random_string(length: int = DEFAULT_STRING_LENGTH, *, rng: random_module.Random | None = None) -> str:
    """Random alphanumeric string of exactly ``length`` characters."""
    if length < 0:
        raise ValueError(f"String length must not be negative, got {length}")
    return "".join(resolve_rng(rng).choices(ALPHANUMERIC, k=length))


def random_char(*, rng: random_module.Random | None = None) -> str:
    """One random ASCII letter."""
    return resolve_rng(rng).choice(ALPHABETIC)


# =============================================================================
# Numeric
# =============================================================================


def random_int(
    min_value: int | None = None,
    max_value: int | None = None,
    *,
    rng: random_module.Random | None = None,
) -> int:
    return _bounded_int("int", min_value, max_value, INT_MIN, INT_MAX, rng)


def random_short(
    min_value: int | None = None,
    max_value: int | None = None,
    *,
    rng: random_module.Random | None = None,
) -> int:
    return _bounded_int("short", min_value, max_value, SHORT_MIN, SHORT_MAX, rng)


def random_long(
    min_value: int | None = None,
    max_value: int | None = None,
    *,
    rng: random_module.Random | None = None,
) -> int:
    return _bounded_int("long", min_value, max_value, LONG_MIN, LONG_MAX, rng)


def random_double(
    min_value: float | None = None,
    max_value: float | None = None,
    *,
    rng: random_module.Random | None = None,
) -> float:
    """Random float in ``[0, 1)``, or in ``[min_value, max_value]`` when bounded."""
    if min_value is None and max_value is None:
        return resolve_rng(rng).random()
    if min_value is None or max_value is None:
        raise TypeError("random_double needs both min_value and max_value, or neither")
    if min_value > max_value:
        raise ValueError(f"random_double: min_value {min_value} exceeds max_value {max_value}")
    if min_value == max_value:
        return min_value
    return resolve_rng(rng).uniform(min_value, max_value)


def random_float(
    min_value: float | None = None,
    max_value: float | None = None,
    *,
    rng: random_module.Random | None = None,
) -> float:
    # Python has a single float type; the 32-bit width only matters in the
    # registry, where numpy.float32 narrows the result.
    return random_double(min_value, max_value, rng=rng)


def random_boolean(*, rng: random_module.Random | None = None) -> bool:
    return bool(resolve_rng(rng).getrandbits(1))


def random_byte(*, rng: random_module.Random | None = None) -> int:
    """Random byte value in ``[0, 127]``."""
    return resolve_rng(rng).randint(0, BYTE_MAX)


def random_byte_array(*, rng: random_module.Random | None = None) -> bytes:
    """Random bytes of length in ``[2, 1000)``, each element in ``[0, 127]``."""
    source = resolve_rng(rng)
    length = source.randrange(BYTE_ARRAY_MIN_LENGTH, BYTE_ARRAY_MAX_LENGTH)
    return bytes(source.randint(0, BYTE_MAX) for _ in range(length))


def random_decimal(*, rng: random_module.Random | None = None) -> Decimal:
    """Random decimal with a randomized scale.

    Draws a non-negative 32-bit magnitude, rounds it half-up to 10
    significant digits, then moves the decimal point left by 0-4 places.
    """
    source = resolve_rng(rng)
    rounded = _DECIMAL_CONTEXT.plus(Decimal(source.randint(0, INT_MAX)))
    return rounded.scaleb(-source.randrange(0, DECIMAL_MAX_SCALE))


# =============================================================================
# Temporal
# =============================================================================


def random_date(*, rng: random_module.Random | None = None) -> datetime:
    """Naive datetime up to one year after now."""
    return datetime.now() + timedelta(seconds=resolve_rng(rng).randrange(0, SECONDS_PER_YEAR))


def random_local_date(*, rng: random_module.Random | None = None) -> date:
    return date.today() + timedelta(days=resolve_rng(rng).randrange(0, DAYS_PER_YEAR))


def random_local_datetime(*, rng: random_module.Random | None = None) -> datetime:
    return datetime.now() + timedelta(seconds=resolve_rng(rng).randrange(0, SECONDS_PER_YEAR))


def random_local_time(*, rng: random_module.Random | None = None) -> time:
    """Time of day up to twelve hours after now, wrapping past midnight."""
    return (datetime.now() + timedelta(seconds=resolve_rng(rng).randrange(0, SECONDS_IN_12_HOURS))).time()


def random_zoned_datetime(*, rng: random_module.Random | None = None) -> datetime:
    """Aware datetime in the local zone, up to one year after now."""
    return datetime.now().astimezone() + timedelta(seconds=resolve_rng(rng).randrange(0, SECONDS_PER_YEAR))


def random_instant(*, rng: random_module.Random | None = None) -> datetime:
    """Aware UTC datetime up to one year after now."""
    return datetime.now(tz=UTC) + timedelta(seconds=resolve_rng(rng).randrange(0, SECONDS_PER_YEAR))


# =============================================================================
# Choices
# =============================================================================


def one_of[T](*values: T, rng: random_module.Random | None = None) -> T | None:
    """Pick one of ``values`` uniformly, or None when given nothing."""
    if not values:
        return None
    return resolve_rng(rng).choice(values)


def random_enum[E: Enum](enum_type: type[E], *, rng: random_module.Random | None = None) -> E:
    """Pick one member of ``enum_type`` uniformly.

    Raises:
        EmptyDomainError: If the enum declares no members.
    """
    members: Sequence[E] = list(enum_type)
    if not members:
        raise EmptyDomainError(enum_type)
    return members[resolve_rng(rng).randrange(len(members))]
