"""Protocols (interfaces) consumed by the core layer.

The evaluator reports progress through these contracts only, so the
core never imports a concrete UI implementation.
"""

from __future__ import annotations

from typing import Protocol

from hyperop.core.models import EvaluationProgress


class ProgressCallback(Protocol):
    """Contract for progress listeners.

    Any callable accepting an :class:`EvaluationProgress` satisfies this
    protocol structurally (no explicit inheritance required).
    """

    def __call__(self, progress: EvaluationProgress) -> None:
        """Receive one progress snapshot.

        Implementations must return quickly and must not raise; they run
        inside the evaluation loop.
        """
        ...  # pragma: no cover
