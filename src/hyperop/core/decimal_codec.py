"""Decimal text conversion for naturals of any length.

CPython refuses ``int(str)`` and ``str(int)`` above
:func:`sys.get_int_max_str_digits` digits (4300 by default).  Both
directions here split the work in half around cached powers of ten
until every leaf chunk is comfortably below that limit, so the global
interpreter setting is never touched.

Every function in this module is a pure transformation on ``str`` and
``int``.  :mod:`hyperop.core.natural` wraps them.
"""

from __future__ import annotations

import functools
import re

from hyperop.exceptions import ParseError

_LEAF_DIGITS: int = 1000
"""Largest chunk converted with the builtin ``int``/``str`` directly."""

_LITERAL = re.compile(r"\+?[0-9]+(?:_[0-9]+)*", re.ASCII)


@functools.lru_cache(maxsize=64)
def _pow10(exponent: int) -> int:
    return 10**exponent


def _split_width(length: int) -> int:
    """Return the low-part width used to split a *length*-digit chunk."""
    width = _LEAF_DIGITS
    while width * 2 < length:
        width *= 2
    return width


# ---------------------------------------------------------------------------
# Text → int
# ---------------------------------------------------------------------------

def _digits_to_int(digits: str) -> int:
    if len(digits) <= _LEAF_DIGITS:
        return int(digits)
    width = _split_width(len(digits))
    high = _digits_to_int(digits[:-width])
    low = _digits_to_int(digits[-width:])
    return high * _pow10(width) + low


def parse_decimal(text: str) -> int:
    """Parse a non-negative decimal literal of arbitrary length.

    Accepted forms are ASCII digits with an optional leading ``+`` and
    single underscores between digit groups (``1_000_000``).

    Raises
    ------
    ParseError
        When *text* is not a valid literal.
    """
    if not isinstance(text, str) or _LITERAL.fullmatch(text) is None:
        raise ParseError(
            f"Not a non-negative integer literal: {text!r}",
            hint="Use decimal digits only, e.g. 42 or 1_000_000.",
        )
    return _digits_to_int(text.lstrip("+").replace("_", ""))


# ---------------------------------------------------------------------------
# int → text
# ---------------------------------------------------------------------------

def _int_to_digits(value: int, width: int) -> str:
    """Render *value*; when *width* is non-zero, left-pad with zeros to it."""
    if value < _pow10(_LEAF_DIGITS):
        text = str(value)
        return text.zfill(width) if width else text

    split = _LEAF_DIGITS
    while _pow10(split * 2) <= value:
        split *= 2
    high, low = divmod(value, _pow10(split))
    head = _int_to_digits(high, width - split if width else 0)
    return head + _int_to_digits(low, split)


def format_decimal(value: int) -> str:
    """Return the decimal digits of the non-negative integer *value*."""
    if value < 0:
        raise ValueError("format_decimal expects a non-negative value")
    return _int_to_digits(value, 0)
