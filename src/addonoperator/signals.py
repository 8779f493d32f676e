"""Flow-control values returned by reconciliation phases."""

from __future__ import annotations

__all__ = ("PhaseResult", "Signal")

import enum
from dataclasses import dataclass


class Signal(enum.Enum):
    """Whether the pipeline should run the next phase."""

    CONTINUE = "Continue"
    STOP = "StopPipeline"


@dataclass(frozen=True)
class PhaseResult:
    """The outcome of one phase.

    A non-`None` ``error`` aborts the pipeline whatever the signal is.
    """

    signal: Signal = Signal.CONTINUE
    error: Exception | None = None

    @classmethod
    def stop(cls) -> PhaseResult:
        return cls(signal=Signal.STOP)

    @classmethod
    def failed(cls, error: Exception) -> PhaseResult:
        return cls(signal=Signal.CONTINUE, error=error)
