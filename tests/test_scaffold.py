"""Smoke tests for package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from hyperop import __version__
from hyperop.cli import exit_codes
from hyperop.cli.app import main
from hyperop.exceptions import (
    ConfigError,
    EnvironmentError,
    HyperopError,
    InvariantViolation,
    ParseError,
    ResourceExhaustedError,
    UnderflowError,
    resource_hint,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [ParseError, ConfigError, ResourceExhaustedError, EnvironmentError],
    )
    def test_user_errors_inherit_from_base(
        self, exc_class: type[HyperopError]
    ) -> None:
        assert issubclass(exc_class, HyperopError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(HyperopError, Exception)

    def test_invariant_violations_are_not_user_errors(self) -> None:
        assert issubclass(InvariantViolation, RuntimeError)
        assert not issubclass(InvariantViolation, HyperopError)
        assert issubclass(UnderflowError, InvariantViolation)

    def test_hint_is_stored(self) -> None:
        err = HyperopError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = HyperopError("boom")
        assert err.hint is None

    def test_resource_hint_names_the_limit(self) -> None:
        assert "max-frames" in resource_hint("max-frames")
        assert "memory" in resource_hint()


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_resource_exhausted_is_three(self) -> None:
        assert exit_codes.RESOURCE_EXHAUSTED == 3

    def test_internal_error_is_seventy(self) -> None:
        assert exit_codes.INTERNAL_ERROR == 70

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing (skeleton)
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_evaluation_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["2", "6", "7"])
        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == "42\n"

    def test_package_is_runnable_as_module(self) -> None:
        import hyperop.__main__  # noqa: F401
