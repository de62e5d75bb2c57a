"""CLI application entry point and command routing for hyperop.

This module is the **sole error boundary** for the entire application.
It catches :class:`~hyperop.exceptions.HyperopError`, invariant
violations, ``MemoryError``, ``KeyboardInterrupt`` and any unexpected
``Exception``, rendering a message on stderr and returning a
well-defined exit code.

Architecture notes
------------------
* No arithmetic lives here; all work is delegated to the core layer.
* Only the decimal result is written to stdout.  Diagnostics go to
  stderr through the console proxy.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from hyperop.cli import exit_codes
from hyperop.cli.console import configure_logging, console, write_result
from hyperop.config import EvaluationLimits
from hyperop.core.evaluator import HyperEvaluator
from hyperop.core.natural import Natural
from hyperop.exceptions import (
    HyperopError,
    InvariantViolation,
    ParseError,
    ResourceExhaustedError,
)
from hyperop.version import __version__

_HELP_WORDS: frozenset[str] = frozenset({"help", "?"})
_ACKERMANN_WORDS: frozenset[str] = frozenset({"ack", "ackermann"})

_EPILOG = """\
commands:
  hyperop RANK BASE EXP   evaluate H(RANK, BASE, EXP)
  hyperop ack M N         evaluate the Ackermann-Peter function A(M, N)
  hyperop help | ?        show this message

All numbers are non-negative decimal literals of any length.
Ranks: 0 successor, 1 addition, 2 multiplication, 3 exponentiation,
4 tetration, 5 pentation, and so on.

examples:
  hyperop 3 2 10          -> 1024
  hyperop 4 2 4           -> 65536 (2^2^2^2)
  hyperop ack 3 3         -> 61
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _count(text: str) -> int:
    """``argparse`` type for non-negative integer limits."""
    try:
        value = int(text.replace("_", ""))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a non-negative integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"not a non-negative integer: {text!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are not used; the first operand selects the route:
    * ``hyperop RANK BASE EXP``: evaluate a hyperoperation
    * ``hyperop ack M N``: Ackermann-Péter function
    * ``hyperop help`` or ``?``: usage
    """
    parser = argparse.ArgumentParser(
        prog="hyperop",
        description="Exact hyperoperations on arbitrary-precision naturals.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log evaluator diagnostics to stderr.",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a live status display while evaluating (requires rich).",
    )
    parser.add_argument(
        "--max-bits",
        type=_count,
        default=None,
        metavar="N",
        help="Largest bit length of any value; 0 removes the limit.",
    )
    parser.add_argument(
        "--max-frames",
        type=_count,
        default=None,
        metavar="N",
        help="Largest number of pending work-stack frames.",
    )
    parser.add_argument(
        "operands",
        nargs="*",
        metavar="ARG",
        help="RANK BASE EXP, 'ack M N', or 'help'.",
    )
    return parser


# ---------------------------------------------------------------------------
# Operand parsing
# ---------------------------------------------------------------------------

def _parse_operands(values: Sequence[str], names: Sequence[str]) -> list[Natural]:
    """Parse *values* as naturals, one per entry of *names*.

    Raises
    ------
    ParseError
        On a count mismatch or an invalid literal.
    """
    if len(values) != len(names):
        raise ParseError(
            f"Expected {len(names)} arguments ({' '.join(names)}), got {len(values)}.",
            hint="Run 'hyperop help' for usage.",
        )
    parsed: list[Natural] = []
    for name, text in zip(names, values):
        try:
            parsed.append(Natural.from_decimal_string(text))
        except ParseError as exc:
            raise ParseError(f"Cannot parse {name}: {exc}", hint=exc.hint) from exc
    return parsed


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _run(
    description: str,
    limits: EvaluationLimits,
    call: Callable[[HyperEvaluator], Natural],
    *,
    progress: bool,
) -> int:
    """Build an evaluator, run *call* on it and print the result."""
    if progress:
        from hyperop.cli.progress import RichProgressHook

        with RichProgressHook(description) as hook:
            result = call(HyperEvaluator(limits, progress_callback=hook))
    else:
        result = call(HyperEvaluator(limits))

    write_result(result.to_decimal_string())
    return exit_codes.SUCCESS


def _handle_evaluate(
    operands: Sequence[str], limits: EvaluationLimits, *, progress: bool,
) -> int:
    """Dispatch ``hyperop RANK BASE EXP``."""
    rank, base, exponent = _parse_operands(operands, ("RANK", "BASE", "EXP"))
    return _run(
        f"H({rank!r}, {base!r}, {exponent!r})",
        limits,
        lambda evaluator: evaluator.evaluate(rank, base, exponent),
        progress=progress,
    )


def _handle_ackermann(
    operands: Sequence[str], limits: EvaluationLimits, *, progress: bool,
) -> int:
    """Dispatch ``hyperop ack M N``."""
    m, n = _parse_operands(operands, ("M", "N"))
    return _run(
        f"A({m!r}, {n!r})",
        limits,
        lambda evaluator: evaluator.ackermann(m, n),
        progress=progress,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the hyperop CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    operands: list[str] = args.operands
    if not operands:
        parser.print_help()
        return exit_codes.SUCCESS

    command = operands[0].lower()

    if command in _HELP_WORDS:
        if len(operands) != 1:
            raise ParseError(
                f"'{operands[0]}' takes no further arguments.",
                hint="Run 'hyperop help' on its own.",
            )
        parser.print_help()
        return exit_codes.SUCCESS

    limits = EvaluationLimits.from_env().with_overrides(
        max_bits=args.max_bits,
        max_frames=args.max_frames,
    )

    if command in _ACKERMANN_WORDS:
        return _handle_ackermann(operands[1:], limits, progress=args.progress)

    return _handle_evaluate(operands, limits, progress=args.progress)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ResourceExhaustedError as exc:
        console.print(
            "[bold red]Error:[/bold red] result too large to represent "
            "with available memory."
        )
        console.print(f"  {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.RESOURCE_EXHAUSTED)
    except HyperopError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except MemoryError:
        console.print(
            "[bold red]Error:[/bold red] result too large to represent "
            "with available memory."
        )
        sys.exit(exit_codes.RESOURCE_EXHAUSTED)
    except InvariantViolation as exc:
        console.print(
            "[bold red]Internal error.[/bold red] "
            "The evaluation was aborted; no result is trustworthy.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.INTERNAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
