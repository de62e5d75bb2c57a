"""CLI console, logging and result-output helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so
bootstrap paths (``--help``, ``--version``, plain evaluation) remain
functional even when Rich is not installed.

Diagnostics go to stderr through :data:`console`; the numeric result
alone goes to stdout through :func:`write_result`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from hyperop.exceptions import EnvironmentError

_LOG_FORMAT = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def write_result(text: str) -> None:
    """Write the decimal result to stdout, newline-terminated.

    Rich is bypassed here: results can run to millions of digits and
    must come out unwrapped and unstyled.
    """
    sys.stdout.write(text)
    sys.stdout.write("\n")
    sys.stdout.flush()


def configure_logging(verbose: bool) -> None:
    """Attach a stderr handler to the ``hyperop`` logger.

    ``verbose`` selects DEBUG, otherwise WARNING.  Uses
    ``rich.logging.RichHandler`` when Rich is installed.
    """
    package_logger = logging.getLogger("hyperop")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    else:
        handler = RichHandler(console=get_rich_console(), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
