"""Translate a reconcile outcome into the Addon's status."""

from __future__ import annotations

__all__ = ("build_status",)

from datetime import datetime, timezone
from typing import Any

from addonoperator.addon import Addon
from addonoperator.errors import NotOwnedByUsError, is_retryable
from addonoperator.pipeline import ReconcileOutcome


def build_status(
    addon: Addon,
    outcome: ReconcileOutcome,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the ``status`` of an Addon after a reconciliation pass.

    Parameters
    ----------
    addon : `addonoperator.addon.Addon`
        The reconciled Addon.
    outcome : `addonoperator.pipeline.ReconcileOutcome`
        The outcome of the pass.
    now : `datetime.datetime`, optional
        Transition time for the condition. Defaults to the current time.

    Returns
    -------
    status : `dict`
        The status with ``observedGeneration``, ``phase`` and an
        ``Available`` condition whose reason distinguishes a converged
        Addon, one waiting for configuration, one blocked on a foreign
        owner, and one that will be retried.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if outcome.error is None and not outcome.stopped:
        phase, available = "Ready", "True"
        reason, message = "FullyReconciled", "All resources are reconciled."
    elif outcome.error is None:
        phase, available = "Pending", "False"
        reason = "ConfigurationPending"
        message = (
            "Waiting for a complete install configuration "
            f"({outcome.phase})."
        )
    elif isinstance(outcome.error, NotOwnedByUsError):
        phase, available = "Error", "False"
        reason = "NotOwned"
        message = f"{outcome.phase}: {outcome.error}"
    elif is_retryable(outcome.error):
        phase, available = "Pending", "False"
        reason = "RetryableError"
        message = f"{outcome.phase}: {outcome.error}"
    else:
        phase, available = "Error", "False"
        reason = "ReconcileError"
        message = f"{outcome.phase}: {outcome.error}"

    return {
        "observedGeneration": addon.generation,
        "phase": phase,
        "conditions": [
            {
                "type": "Available",
                "status": available,
                "reason": reason,
                "message": message,
                "observedGeneration": addon.generation,
                "lastTransitionTime": now.strftime("%Y-%m-%dT%H:%M:%SZ"),
            }
        ],
    }
