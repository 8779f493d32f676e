"""Exceptions raised while reconciling an Addon and their classification
into kopf's retry semantics.
"""

from __future__ import annotations

__all__ = (
    "AddonOperatorError",
    "AlreadyExistsError",
    "NotFoundError",
    "NotOwnedByUsError",
    "PassCancelledError",
    "StoreError",
    "UnsupportedKindError",
    "VersionConflictError",
    "is_retryable",
    "to_kopf_error",
)

from typing import TYPE_CHECKING

import kopf

if TYPE_CHECKING:
    from addonoperator.pipeline import ReconcileOutcome


class AddonOperatorError(Exception):
    """Base class for errors raised by the addon-operator."""


class StoreError(AddonOperatorError):
    """An error reported by the cluster store for a specific object."""

    def __init__(
        self, *, kind: str, name: str, namespace: str | None = None
    ) -> None:
        self.kind = kind
        self.name = name
        self.namespace = namespace
        super().__init__(self._format())

    @property
    def key(self) -> str:
        if self.namespace:
            return f"{self.kind} {self.namespace}/{self.name}"
        return f"{self.kind} {self.name}"

    def _format(self) -> str:
        return f"{self.key}: store error"


class NotFoundError(StoreError):
    """The requested object does not exist."""

    def _format(self) -> str:
        return f"{self.key} not found"


class AlreadyExistsError(StoreError):
    """A create raced with another writer of the same object."""

    def _format(self) -> str:
        return f"{self.key} already exists"


class VersionConflictError(StoreError):
    """An update was rejected because the object changed since it was
    read.
    """

    def _format(self) -> str:
        return f"{self.key} was modified concurrently"


class NotOwnedByUsError(StoreError):
    """The object exists, is controlled by someone else, and the adoption
    strategy does not allow taking it over.
    """

    def _format(self) -> str:
        return f"{self.key} is not owned by this Addon"


class UnsupportedKindError(AddonOperatorError):
    """A resource kind was used that has no registered handler."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"unsupported resource kind: {kind}")


class PassCancelledError(AddonOperatorError):
    """The reconciliation pass was abandoned by its dispatcher."""


_TERMINAL_ERRORS = (NotOwnedByUsError, UnsupportedKindError)


def is_retryable(error: BaseException) -> bool:
    """Return `True` if re-running the pass may change the outcome.

    Ownership rejections and unsupported kinds need external remediation;
    every other error (network failures, conflicts, cancellations) is
    treated as transient.
    """
    return not isinstance(error, _TERMINAL_ERRORS)


def to_kopf_error(
    outcome: ReconcileOutcome, *, delay: float = 10
) -> kopf.PermanentError | kopf.TemporaryError:
    """Convert a failed reconcile outcome into the kopf exception that
    drives its retry behaviour.

    Parameters
    ----------
    outcome : `addonoperator.pipeline.ReconcileOutcome`
        A failed outcome (``outcome.error`` is set).
    delay : `float`
        Seconds kopf waits before retrying a transient failure.

    Returns
    -------
    error : `kopf.PermanentError` or `kopf.TemporaryError`
        The exception to raise from a kopf handler.
    """
    error = outcome.error
    if error is None:
        raise ValueError("outcome has no error to convert")
    message = f"phase {outcome.phase} failed: {error}"
    if is_retryable(error):
        return kopf.TemporaryError(message, delay=delay)
    return kopf.PermanentError(message)
