"""Rich-based live status driven by evaluator progress snapshots.

This module bridges the evaluator's ``progress_callback`` with a Rich
:class:`~rich.progress.Progress` display.  It is used by the CLI layer;
the core only emits :class:`~hyperop.core.models.EvaluationProgress`
values.

Design
------
* The :class:`RichProgressHook` manages a Rich Progress context.
* :meth:`__call__` is the callback passed to the evaluator.
* Shutdown-safe: if the display is already stopped, calls are silently
  ignored.
* Hyperoperations have no meaningful total, so the display is an
  indeterminate spinner with step, depth and size counters.
"""

from __future__ import annotations

from typing import Any

from hyperop.cli.console import get_rich_console
from hyperop.core.models import EvaluationProgress
from hyperop.exceptions import EnvironmentError


class RichProgressHook:
    """Callable progress-hook adapter for Rich.

    Usage::

        with RichProgressHook("H(4, 3, 3)") as hook:
            HyperEvaluator(limits, progress_callback=hook).evaluate(4, 3, 3)
    """

    def __init__(self, description: str = "Evaluating") -> None:
        try:
            from rich.progress import (
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeElapsedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
                hint="Run again without --progress to skip the live display.",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            TextColumn("steps={task.fields[steps]}"),
            TextColumn("depth={task.fields[depth]}"),
            TextColumn("bits={task.fields[bits]}"),
            TimeElapsedColumn(),
            console=get_rich_console(),
            transient=True,
        )
        self._description: str = description
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Hook callback
    # ------------------------------------------------------------------

    def __call__(self, progress: EvaluationProgress) -> None:
        """Evaluator progress callback."""
        if not self._started:
            return

        if self._task_id is None:
            self._task_id = self._progress.add_task(
                self._description, total=None, steps=0, depth=0, bits=0,
            )

        self._progress.update(
            self._task_id,
            steps=progress.steps,
            depth=progress.depth,
            bits=progress.result_bits,
        )
        if progress.finished:
            self._handle_finished()

    # ------------------------------------------------------------------
    # Internal handlers
    # ------------------------------------------------------------------

    def _handle_finished(self) -> None:
        """Mark the current task as complete."""
        self._progress.update(self._task_id, total=1, completed=1)
