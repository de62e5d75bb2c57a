"""Arbitrary-precision natural numbers (APN).

:class:`Natural` is an immutable, sign-free value object backed by
CPython's unbounded ``int``.  Its canonical digit form is a tuple of
radix-2**32 limbs, least significant first, with no trailing zero
limbs; zero is the empty tuple.  Because every primitive returns a
fresh ``Natural`` built from an exact ``int``, that normal form holds
after every call.

Primitives
----------
* ``from_native`` / ``from_limbs`` / ``from_decimal_string``
* ``compare`` / ``is_zero`` / ``is_odd`` / ``bit_length``
* ``succ`` / ``add`` / ``decrement`` / ``mul`` / ``pow`` / ``halve``
* ``to_decimal_string``

Guarantees
----------
* No operand is ever mutated.
* ``add``, ``mul`` and ``pow`` accept ``max_bits=`` and never return a
  result longer than it.  A lower bound on the result length is checked
  before any allocation, so hopeless requests fail immediately.
* A ``MemoryError`` inside any primitive surfaces as
  :class:`~hyperop.exceptions.ResourceExhaustedError`.
* ``decrement`` on zero raises :class:`~hyperop.exceptions.UnderflowError`.
"""

from __future__ import annotations

import enum
import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import ParamSpec, TypeVar

from hyperop.core.decimal_codec import format_decimal, parse_decimal
from hyperop.exceptions import ResourceExhaustedError, UnderflowError, resource_hint

LIMB_BITS: int = 32
"""Bits per limb in the canonical digit sequence."""

LIMB_RADIX: int = 1 << LIMB_BITS

_LIMB_BYTES: int = LIMB_BITS // 8
_REPR_MAX_BITS: int = 256

_P = ParamSpec("_P")
_R = TypeVar("_R")


class Ordering(enum.IntEnum):
    """Three-way comparison outcome."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


# ---------------------------------------------------------------------------
# Allocation guards
# ---------------------------------------------------------------------------

def _guard_allocation(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Re-raise ``MemoryError`` from *func* as ``ResourceExhaustedError``."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        try:
            return func(*args, **kwargs)
        except MemoryError as exc:
            raise ResourceExhaustedError(
                "Result too large to represent with available memory.",
                hint=resource_hint(),
            ) from exc

    return wrapper


def _check_bits(required: int, max_bits: int | None) -> None:
    """Refuse a result that needs at least *required* bits over the limit."""
    if max_bits is not None and required > max_bits:
        raise ResourceExhaustedError(
            f"Result needs at least {required} bits; the limit is {max_bits}.",
            hint=resource_hint("max-bits"),
        )


def _bounded(value: int, max_bits: int | None) -> Natural:
    """Wrap *value*, enforcing the limit on its exact bit length."""
    _check_bits(value.bit_length(), max_bits)
    return Natural(value)


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

@functools.total_ordering
@dataclass(frozen=True, slots=True, repr=False)
class Natural:
    """An exact non-negative integer of unbounded magnitude."""

    value: int
    """The represented integer; never negative."""

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"Natural expects an int, got {type(self.value).__name__}",
            )
        if self.value < 0:
            raise ValueError("Natural cannot hold a negative value")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_native(cls, value: int) -> Natural:
        """Build a natural from a native non-negative ``int``."""
        return cls(value)

    @classmethod
    def from_limbs(cls, limbs: Iterable[int]) -> Natural:
        """Build a natural from radix-2**32 limbs, least significant first.

        Trailing zero limbs are accepted and dropped.
        """
        raw = bytearray()
        for index, limb in enumerate(limbs):
            if isinstance(limb, bool) or not isinstance(limb, int):
                raise TypeError(f"limb {index} is not an int")
            if not 0 <= limb < LIMB_RADIX:
                raise ValueError(f"limb {index} is outside [0, 2**{LIMB_BITS})")
            raw += limb.to_bytes(_LIMB_BYTES, "little")
        return cls(int.from_bytes(raw, "little"))

    @classmethod
    @_guard_allocation
    def from_decimal_string(cls, text: str) -> Natural:
        """Parse a decimal literal of any length.

        Raises
        ------
        ParseError
            When *text* is not a non-negative integer literal.
        """
        return cls(parse_decimal(text))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def limbs(self) -> tuple[int, ...]:
        """Canonical limb sequence, least significant first; ``()`` for zero."""
        count = -(-self.value.bit_length() // LIMB_BITS)
        raw = self.value.to_bytes(count * _LIMB_BYTES, "little")
        return tuple(
            int.from_bytes(raw[offset:offset + _LIMB_BYTES], "little")
            for offset in range(0, len(raw), _LIMB_BYTES)
        )

    def bit_length(self) -> int:
        return self.value.bit_length()

    def is_zero(self) -> bool:
        return self.value == 0

    def is_odd(self) -> bool:
        return bool(self.value & 1)

    def compare(self, other: Natural) -> Ordering:
        """Three-way comparison consistent with integer value."""
        if self.value < other.value:
            return Ordering.LESS
        if self.value > other.value:
            return Ordering.GREATER
        return Ordering.EQUAL

    # ------------------------------------------------------------------
    # Arithmetic primitives
    # ------------------------------------------------------------------

    @_guard_allocation
    def succ(self) -> Natural:
        """Return ``self + 1``."""
        return Natural(self.value + 1)

    @_guard_allocation
    def add(self, other: Natural, *, max_bits: int | None = None) -> Natural:
        """Return ``self + other``."""
        _check_bits(max(self.bit_length(), other.bit_length()), max_bits)
        return _bounded(self.value + other.value, max_bits)

    def decrement(self) -> Natural:
        """Return ``self - 1``.

        Raises
        ------
        UnderflowError
            When ``self`` is zero.  Callers must rule that out first.
        """
        if self.value == 0:
            raise UnderflowError("decrement applied to zero")
        return Natural(self.value - 1)

    def halve(self) -> Natural:
        """Return ``self // 2`` (a one-bit right shift)."""
        return Natural(self.value >> 1)

    @_guard_allocation
    def mul(self, other: Natural, *, max_bits: int | None = None) -> Natural:
        """Return ``self * other``."""
        if self.value == 0 or other.value == 0:
            return ZERO
        _check_bits(self.bit_length() + other.bit_length() - 1, max_bits)
        return _bounded(self.value * other.value, max_bits)

    @_guard_allocation
    def pow(self, exponent: Natural, *, max_bits: int | None = None) -> Natural:
        """Return ``self ** exponent`` by repeated squaring.

        The exponent is consumed as a natural counter: each round tests
        its low bit and halves it, so exponents of any size are accepted.
        ``pow(0, 0)`` is 1.
        """
        if exponent.is_zero():
            return ONE
        if self.value <= 1:
            return self

        _check_bits(exponent.value * (self.bit_length() - 1) + 1, max_bits)

        result = 1
        square = self.value
        counter = exponent
        while True:
            if counter.is_odd():
                result *= square
            counter = counter.halve()
            if counter.is_zero():
                break
            square *= square
        return _bounded(result, max_bits)

    # ------------------------------------------------------------------
    # Decimal rendering
    # ------------------------------------------------------------------

    @_guard_allocation
    def to_decimal_string(self) -> str:
        """Return the decimal digits of this natural."""
        return format_decimal(self.value)

    # ------------------------------------------------------------------
    # Dunder protocol
    # ------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Natural):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        if self.bit_length() <= _REPR_MAX_BITS:
            return f"Natural({self.value})"
        return f"Natural(<{self.bit_length()} bits>)"


ZERO = Natural(0)
ONE = Natural(1)
TWO = Natural(2)
THREE = Natural(3)
FOUR = Natural(4)


def compare(a: Natural, b: Natural) -> Ordering:
    """Module-level spelling of :meth:`Natural.compare`."""
    return a.compare(b)


def coerce(value: Natural | int) -> Natural:
    """Accept a :class:`Natural` or a native ``int`` at API boundaries."""
    if isinstance(value, Natural):
        return value
    return Natural.from_native(value)
