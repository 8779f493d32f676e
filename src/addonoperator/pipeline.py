"""Sequential execution of the reconciliation phases for one Addon."""

from __future__ import annotations

__all__ = ("Pipeline", "PassState", "ReconcileOutcome")

import contextlib
import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.phases import DEFAULT_PHASES, Phase
from addonoperator.signals import Signal


class PassState(enum.Enum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


@dataclass(frozen=True)
class ReconcileOutcome:
    """The result of a reconciliation pass.

    ``phase`` names the phase that stopped or failed the pass, and is
    `None` when every phase ran.
    """

    state: PassState
    phase: str | None = None
    error: Exception | None = None
    stopped: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state is PassState.SUCCEEDED


class Pipeline:
    """Run a fixed, ordered list of phases.

    Parameters
    ----------
    phases : iterable of `addonoperator.phases.Phase`, optional
        The phases in execution order. Defaults to
        `addonoperator.phases.DEFAULT_PHASES`.
    """

    def __init__(self, phases: Iterable[Phase] | None = None) -> None:
        self.phases: tuple[Phase, ...] = tuple(
            DEFAULT_PHASES if phases is None else phases
        )

    def run(self, ctx: ReconcileContext, addon: Addon) -> ReconcileOutcome:
        """Run one reconciliation pass.

        A phase returning an error fails the pass immediately. A phase
        returning `Signal.STOP` ends the pass successfully without running
        the remaining phases.
        """
        logger = ctx.logger

        for phase in self.phases:
            try:
                ctx.check_cancelled()
                with _span(ctx.tracer, phase.name, addon):
                    result = phase.run(ctx, addon)
            except Exception as e:
                result_error: Exception | None = e
                result_signal = Signal.CONTINUE
            else:
                result_error = result.error
                result_signal = result.signal

            if result_error is not None:
                logger.warning(
                    f"Reconciling Addon {addon.name} failed in "
                    f"{phase.name}: {result_error}"
                )
                return ReconcileOutcome(
                    state=PassState.FAILED,
                    phase=phase.name,
                    error=result_error,
                )

            if result_signal is Signal.STOP:
                logger.info(
                    f"Reconciling Addon {addon.name} stopped at {phase.name}"
                )
                return ReconcileOutcome(
                    state=PassState.SUCCEEDED, phase=phase.name, stopped=True
                )

        logger.info(f"Reconciled Addon {addon.name}")
        return ReconcileOutcome(state=PassState.SUCCEEDED)


@contextlib.contextmanager
def _span(tracer: Any | None, name: str, addon: Addon) -> Iterator[None]:
    if tracer is None:
        yield
        return
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("addon.name", addon.name)
        yield
