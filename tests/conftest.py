"""Shared pytest fixtures and configuration for the hyperop test suite.

Guidelines
----------
* Core tests must be pure, with no side effects.
* Tests must not depend on OS state: limits are built explicitly and
  ``HYPEROP_*`` variables are cleared for every test.
* Anything that compares against ``str(int)`` beyond 4300 digits uses
  the ``unlimited_int_str`` fixture.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest

from hyperop.config import ENV_MAX_BITS, ENV_MAX_FRAMES, ENV_PROGRESS_INTERVAL, EvaluationLimits
from hyperop.core.evaluator import HyperEvaluator


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (ENV_MAX_BITS, ENV_MAX_FRAMES, ENV_PROGRESS_INTERVAL):
        monkeypatch.delenv(name, raising=False)
    yield
    package_logger = logging.getLogger("hyperop")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def limits() -> EvaluationLimits:
    return EvaluationLimits()


@pytest.fixture
def evaluator(limits: EvaluationLimits) -> HyperEvaluator:
    return HyperEvaluator(limits)


@pytest.fixture
def unlimited_int_str() -> Iterator[None]:
    """Lift CPython's int/str digit limit for the duration of a test."""
    getter = getattr(sys, "get_int_max_str_digits", None)
    if getter is None:
        yield
        return
    previous = getter()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(previous)
