"""Allow ``python -m hyperop`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m hyperop`` behaves identically to the ``hyperop``
console script.
"""

from __future__ import annotations

from hyperop.cli.app import cli

if __name__ == "__main__":
    cli()
