"""Tests for the Rich live status hook (cli/progress.py).

Rich renders to the captured stderr; assertions inspect task fields
rather than terminal output.
"""

from __future__ import annotations

from hyperop.cli.progress import RichProgressHook
from hyperop.config import EvaluationLimits
from hyperop.core.evaluator import HyperEvaluator
from hyperop.core.models import EvaluationProgress


def _snapshot(steps: int, *, finished: bool = False) -> EvaluationProgress:
    return EvaluationProgress(
        steps=steps, depth=2, peak_depth=3, result_bits=17, finished=finished,
    )


class TestLifecycle:
    def test_ignored_before_start(self) -> None:
        hook = RichProgressHook()
        hook(_snapshot(1))
        assert hook._progress.tasks == []

    def test_stop_is_idempotent(self) -> None:
        hook = RichProgressHook()
        hook.start()
        hook.stop()
        hook.stop()

    def test_context_manager_starts_and_stops(self) -> None:
        with RichProgressHook() as hook:
            assert hook._started
        assert not hook._started

    def test_ignored_after_stop(self) -> None:
        with RichProgressHook() as hook:
            hook(_snapshot(1))
        hook(_snapshot(99))
        assert hook._progress.tasks[0].fields["steps"] == 1


class TestUpdates:
    def test_fields_follow_snapshots(self) -> None:
        with RichProgressHook("H(4, 2, 3)") as hook:
            hook(_snapshot(5))
            hook(_snapshot(9))
            task = hook._progress.tasks[0]
            assert task.description == "H(4, 2, 3)"
            assert task.fields == {"steps": 9, "depth": 2, "bits": 17}
            assert len(hook._progress.tasks) == 1

    def test_finished_snapshot_completes_task(self) -> None:
        with RichProgressHook() as hook:
            hook(_snapshot(3, finished=True))
            task = hook._progress.tasks[0]
            assert task.total == 1
            assert task.completed == 1

    def test_driven_by_evaluator(self) -> None:
        limits = EvaluationLimits(progress_interval=1)
        with RichProgressHook() as hook:
            result = HyperEvaluator(limits, progress_callback=hook).evaluate(5, 2, 3)
            task = hook._progress.tasks[0]
            assert task.finished
            assert task.fields["bits"] == 17
        assert result.value == 65536
