"""Core layer: exact arithmetic and the hyperoperation evaluator.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli``.
* No Python recursion driven by rank or exponent.
"""

from hyperop.core.evaluator import HyperEvaluator, ackermann, evaluate
from hyperop.core.models import CallFrame, EvaluationProgress, FoldFrame, WorkItem
from hyperop.core.natural import Natural, Ordering, compare
from hyperop.core.protocols import ProgressCallback

__all__: list[str] = [
    "CallFrame",
    "EvaluationProgress",
    "FoldFrame",
    "HyperEvaluator",
    "Natural",
    "Ordering",
    "ProgressCallback",
    "WorkItem",
    "ackermann",
    "compare",
    "evaluate",
]
