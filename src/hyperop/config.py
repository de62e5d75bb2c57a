"""Resource limits for an evaluation.

Limits come from three layers, later layers winning:

1. Built-in defaults on :class:`EvaluationLimits`.
2. Environment variables (:meth:`EvaluationLimits.from_env`).
3. Command-line flags (:meth:`EvaluationLimits.with_overrides`).

Environment variables
---------------------
``HYPEROP_MAX_BITS``
    Largest bit length any value may reach.  ``0`` disables the limit.
``HYPEROP_MAX_FRAMES``
    Largest work-stack length during one evaluation.
``HYPEROP_PROGRESS_INTERVAL``
    Evaluation steps between two progress snapshots.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass

from hyperop.exceptions import ConfigError

ENV_MAX_BITS: str = "HYPEROP_MAX_BITS"
ENV_MAX_FRAMES: str = "HYPEROP_MAX_FRAMES"
ENV_PROGRESS_INTERVAL: str = "HYPEROP_PROGRESS_INTERVAL"

DEFAULT_MAX_BITS: int = 1 << 32
"""512 MiB of magnitude per value."""

DEFAULT_MAX_FRAMES: int = 1_000_000
DEFAULT_PROGRESS_INTERVAL: int = 1024


@dataclass(frozen=True, slots=True)
class EvaluationLimits:
    """Bounds that turn runaway evaluations into a clean error."""

    max_bits: int | None = DEFAULT_MAX_BITS
    """Largest bit length of any value, or ``None`` for no limit."""

    max_frames: int = DEFAULT_MAX_FRAMES
    """Largest number of pending work items."""

    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    """Steps between two progress snapshots."""

    def __post_init__(self) -> None:
        if self.max_bits is not None and self.max_bits < 1:
            raise ConfigError(f"max_bits must be positive, got {self.max_bits}")
        if self.max_frames < 1:
            raise ConfigError(f"max_frames must be positive, got {self.max_frames}")
        if self.progress_interval < 1:
            raise ConfigError(
                f"progress_interval must be positive, got {self.progress_interval}",
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EvaluationLimits:
        """Build limits from ``HYPEROP_*`` variables in *environ*.

        *environ* defaults to :data:`os.environ`; passing a mapping keeps
        tests free of process state.
        """
        env = os.environ if environ is None else environ
        limits = cls()

        raw_bits = env.get(ENV_MAX_BITS)
        if raw_bits is not None:
            bits = _parse_count(ENV_MAX_BITS, raw_bits)
            limits = dataclasses.replace(limits, max_bits=bits or None)

        raw_frames = env.get(ENV_MAX_FRAMES)
        if raw_frames is not None:
            limits = dataclasses.replace(
                limits, max_frames=_parse_count(ENV_MAX_FRAMES, raw_frames),
            )

        raw_interval = env.get(ENV_PROGRESS_INTERVAL)
        if raw_interval is not None:
            limits = dataclasses.replace(
                limits,
                progress_interval=_parse_count(ENV_PROGRESS_INTERVAL, raw_interval),
            )
        return limits

    def with_overrides(
        self,
        *,
        max_bits: int | None = None,
        max_frames: int | None = None,
    ) -> EvaluationLimits:
        """Return a copy with the given limits replaced.

        ``None`` keeps the current value; ``max_bits=0`` removes the limit.
        """
        limits = self
        if max_bits is not None:
            limits = dataclasses.replace(limits, max_bits=max_bits or None)
        if max_frames is not None:
            limits = dataclasses.replace(limits, max_frames=max_frames)
        return limits


def _parse_count(name: str, raw: str) -> int:
    """Parse a non-negative integer setting or raise :class:`ConfigError`."""
    stripped = raw.strip().replace("_", "")
    if not stripped.isascii() or not stripped.isdigit():
        raise ConfigError(
            f"{name} must be a non-negative integer, got {raw!r}",
            hint=f"Unset {name} or give it a plain number such as 1000000.",
        )
    return int(stripped)
