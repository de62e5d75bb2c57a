"""Custom exception hierarchy for hyperop.

User-facing error conditions inherit from :class:`HyperopError` so the
CLI error boundary can render a clean message and a hint.  Programming
errors inside the engine inherit from :class:`InvariantViolation`
instead.  They are never recovered: any recovery would yield a silently
wrong numeric result.

Hierarchy
---------
HyperopError
├── ParseError
├── ConfigError
├── ResourceExhaustedError
└── EnvironmentError
InvariantViolation (RuntimeError)
└── UnderflowError (also ArithmeticError)
"""

from __future__ import annotations


class HyperopError(Exception):
    """Base exception for all user-visible hyperop errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input -----------------------------------------------------------------

class ParseError(HyperopError):
    """Raised when an argument is not a valid non-negative integer literal."""


class ConfigError(HyperopError):
    """Raised when a resource limit from the environment or CLI is invalid."""


# --- Evaluation ------------------------------------------------------------

class ResourceExhaustedError(HyperopError):
    """Raised when a value or the work stack outgrows the available memory.

    This is the expected failure mode for all but the smallest inputs of
    rank 4 and above.
    """


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(HyperopError):
    """Raised when an optional runtime dependency is not available."""


# --- Internal invariants ---------------------------------------------------

class InvariantViolation(RuntimeError):
    """Raised when the engine reaches a state its construction rules out."""


class UnderflowError(InvariantViolation, ArithmeticError):
    """Raised when ``decrement`` is applied to zero."""


def resource_hint(limit_name: str | None = None) -> str:
    """Build the hint shown alongside a :class:`ResourceExhaustedError`."""
    if limit_name is None:
        return "The result cannot be held in the memory available to this process."
    return "\n".join(
        (
            f"The configured {limit_name} limit was reached.",
            "Raise it with the matching command-line flag or environment variable",
            "if the machine has memory to spare.",
        )
    )
