"""Core hyperoperation evaluator.

``H(n, a, b)`` is defined by the classical recurrence::

    H(0, a, b) = b + 1
    H(1, a, b) = a + b
    H(2, a, b) = a * b
    H(3, a, b) = a ** b
    H(n, a, 0) = 1                            (n >= 4)
    H(n, a, b) = H(n - 1, a, H(n, a, b - 1))  (n >= 4, b > 0)

Ranks 0-3 are answered by the closed-form :class:`Natural` primitives.
For rank 4 and above the recurrence is run on an explicit work stack
rather than the Python call stack:

* A :class:`CallFrame` ``(n, a, b)`` with ``b > 0`` becomes a
  :class:`FoldFrame` ``(n, a, remaining=b)`` and the result register is
  seeded with ``H(n, a, 0) = 1``.
* A :class:`FoldFrame` with ``remaining > 0`` pushes itself back with
  ``remaining - 1``, then a :class:`CallFrame` ``(n - 1, a, register)``
  on top.  Once ``remaining`` hits zero the register already holds its
  result.

Each rank level therefore holds at most one frame, so stack depth is
bounded by the rank while the step count grows with the exponent.

Guarantees
----------
* No Python recursion, whatever the rank or exponent.
* Exceeding :attr:`EvaluationLimits.max_bits`, exceeding
  :attr:`EvaluationLimits.max_frames`, or running out of memory raises
  :class:`~hyperop.exceptions.ResourceExhaustedError`.
* Internal invariant violations propagate unchanged.
"""

from __future__ import annotations

import logging

from hyperop.config import EvaluationLimits
from hyperop.core.models import CallFrame, EvaluationProgress, FoldFrame, WorkItem
from hyperop.core.natural import FOUR, ONE, THREE, TWO, ZERO, Natural, coerce
from hyperop.core.protocols import ProgressCallback
from hyperop.exceptions import InvariantViolation, ResourceExhaustedError, resource_hint

logger = logging.getLogger(__name__)


class HyperEvaluator:
    """Evaluates hyperoperations under a fixed set of resource limits.

    An instance holds only immutable configuration; every call to
    :meth:`evaluate` owns its own work stack, so one evaluator can be
    shared freely.

    Parameters
    ----------
    limits:
        Resource bounds.  Defaults to :meth:`EvaluationLimits.from_env`.
    shortcuts:
        Answer degenerate rank >= 4 inputs (``b <= 1``, ``a <= 1``,
        ``a = b = 2``) in O(1).  Disable only to cross-check them.
    progress_callback:
        Optional listener receiving :class:`EvaluationProgress` snapshots.
    """

    def __init__(
        self,
        limits: EvaluationLimits | None = None,
        *,
        shortcuts: bool = True,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self._limits: EvaluationLimits = (
            limits if limits is not None else EvaluationLimits.from_env()
        )
        self._shortcuts: bool = shortcuts
        self._progress_callback: ProgressCallback | None = progress_callback

    @property
    def limits(self) -> EvaluationLimits:
        return self._limits

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(
        self,
        rank: Natural | int,
        base: Natural | int,
        exponent: Natural | int,
    ) -> Natural:
        """Return ``H(rank, base, exponent)`` exactly.

        Raises
        ------
        ResourceExhaustedError
            When a value or the work stack outgrows the configured limits
            or the memory available to the process.
        """
        root = CallFrame(coerce(rank), coerce(base), coerce(exponent))
        logger.debug(
            "Evaluating H(%r, %r, %r)", root.rank, root.base, root.exponent,
        )
        try:
            return self._run(root)
        except MemoryError as exc:
            raise ResourceExhaustedError(
                "Result too large to represent with available memory.",
                hint=resource_hint(),
            ) from exc

    def ackermann(self, m: Natural | int, n: Natural | int) -> Natural:
        """Return the Ackermann-Péter function ``A(m, n)``.

        Uses the hyperoperation identity ``A(m, n) = H(m, 2, n + 3) - 3``.
        ``H(m, 2, n + 3)`` is at least 4 for every ``m``, so the three
        decrements cannot underflow.
        """
        shifted = coerce(n).add(THREE, max_bits=self._limits.max_bits)
        value = self.evaluate(coerce(m), TWO, shifted)
        for _ in range(3):
            value = value.decrement()
        return value

    # ------------------------------------------------------------------
    # Direct answers (closed forms and shortcuts)
    # ------------------------------------------------------------------

    def _direct(self, frame: CallFrame) -> Natural | None:
        """Answer *frame* without decomposition, or return ``None``."""
        rank, base, exponent = frame.rank, frame.base, frame.exponent
        max_bits = self._limits.max_bits

        if rank.is_zero():
            return exponent.succ()
        if rank == ONE:
            return base.add(exponent, max_bits=max_bits)
        if rank == TWO:
            return base.mul(exponent, max_bits=max_bits)
        if rank == THREE:
            return base.pow(exponent, max_bits=max_bits)

        if exponent.is_zero():
            return ONE
        if self._shortcuts:
            return _degenerate(base, exponent)
        return None

    # ------------------------------------------------------------------
    # Work-stack machine
    # ------------------------------------------------------------------

    def _run(self, root: CallFrame) -> Natural:
        limits = self._limits
        stack: list[WorkItem] = [root]
        register: Natural | None = None
        steps = 0
        peak = 1

        while stack:
            frame = stack.pop()
            steps += 1

            if isinstance(frame, CallFrame):
                value = self._direct(frame)
                if value is None:
                    # rank >= 4, exponent > 0: fold up from H(n, a, 0).
                    stack.append(FoldFrame(frame.rank, frame.base, frame.exponent))
                    value = ONE
                register = value
            else:
                if register is None:
                    raise InvariantViolation("fold frame popped with an empty register")
                if not frame.remaining.is_zero():
                    stack.append(
                        FoldFrame(frame.rank, frame.base, frame.remaining.decrement()),
                    )
                    stack.append(CallFrame(frame.rank.decrement(), frame.base, register))
                    register = None

            depth = len(stack)
            if depth > peak:
                peak = depth
                if peak > limits.max_frames:
                    raise ResourceExhaustedError(
                        f"Work stack exceeded {limits.max_frames} frames.",
                        hint=resource_hint("max-frames"),
                    )
            if steps % limits.progress_interval == 0:
                self._report(steps, depth, peak, register, finished=False)

        if register is None:
            raise InvariantViolation("evaluation finished without a result")

        self._report(steps, 0, peak, register, finished=True)
        logger.debug(
            "Evaluation finished: %d steps, peak depth %d, %d result bits",
            steps, peak, register.bit_length(),
        )
        return register

    def _report(
        self,
        steps: int,
        depth: int,
        peak: int,
        register: Natural | None,
        *,
        finished: bool,
    ) -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(
            EvaluationProgress(
                steps=steps,
                depth=depth,
                peak_depth=peak,
                result_bits=register.bit_length() if register is not None else 0,
                finished=finished,
            )
        )


# ---------------------------------------------------------------------------
# Rank >= 4 identities
# ---------------------------------------------------------------------------

def _degenerate(base: Natural, exponent: Natural) -> Natural | None:
    """Closed forms of ``H(n, a, b)`` valid for every ``n >= 4`` and ``b >= 1``.

    * ``H(n, a, 1) = a``
    * ``H(n, 1, b) = 1``
    * ``H(n, 0, b) = 1`` for even ``b``, ``0`` for odd ``b``
    * ``H(n, 2, 2) = 4``

    Each follows from the recurrence by induction on ``n``, starting
    from rank 3 with ``0 ** 0 = 1``.
    """
    if exponent == ONE:
        return base
    if base == ONE:
        return ONE
    if base.is_zero():
        return ZERO if exponent.is_odd() else ONE
    if base == TWO and exponent == TWO:
        return FOUR
    return None


# ---------------------------------------------------------------------------
# Convenience wrappers
# ---------------------------------------------------------------------------

def evaluate(
    rank: Natural | int,
    base: Natural | int,
    exponent: Natural | int,
    *,
    limits: EvaluationLimits | None = None,
) -> Natural:
    """Evaluate ``H(rank, base, exponent)`` with a throwaway evaluator."""
    return HyperEvaluator(limits).evaluate(rank, base, exponent)


def ackermann(
    m: Natural | int,
    n: Natural | int,
    *,
    limits: EvaluationLimits | None = None,
) -> Natural:
    """Evaluate the Ackermann-Péter function ``A(m, n)``."""
    return HyperEvaluator(limits).ackermann(m, n)
