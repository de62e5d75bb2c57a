"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: the result (or usage text) was printed."""

GENERAL_ERROR: int = 1
"""A known HyperopError was caught (bad literal, bad limit, bad usage)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

RESOURCE_EXHAUSTED: int = 3
"""The result or work stack outgrew the limits or available memory."""

INTERNAL_ERROR: int = 70
"""An engine invariant was violated.  Follows sysexits EX_SOFTWARE."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
