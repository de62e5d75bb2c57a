"""Domain models for the hyperoperation evaluator.

All models are **frozen** dataclasses, immutable value objects with no
behaviour beyond data access.  A frame is never updated in place; the
evaluator pushes a replacement instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hyperop.core.natural import Natural


# ---------------------------------------------------------------------------
# Work-stack frames
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CallFrame:
    """A pending ``H(rank, base, exponent)`` that is ready to run.

    Running it either yields a value straight away (closed form or
    shortcut) or replaces it with a :class:`FoldFrame`.
    """

    rank: Natural
    base: Natural
    exponent: Natural


@dataclass(frozen=True, slots=True)
class FoldFrame:
    """A rank-``rank`` evaluation waiting for its inner result.

    When the inner result arrives in the evaluator's result register,
    ``H(rank - 1, base, ·)`` still has to be applied to it ``remaining``
    more times.
    """

    rank: Natural
    base: Natural
    remaining: Natural


WorkItem = Union[CallFrame, FoldFrame]
"""Tagged variant held on the evaluator's explicit stack."""


# ---------------------------------------------------------------------------
# Progress snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EvaluationProgress:
    """Point-in-time view of a running evaluation."""

    steps: int
    """Work items processed so far."""

    depth: int
    """Current work-stack length."""

    peak_depth: int
    """Largest work-stack length seen so far."""

    result_bits: int
    """Bit length of the most recent intermediate result."""

    finished: bool = False
    """``True`` on the final snapshot only."""
