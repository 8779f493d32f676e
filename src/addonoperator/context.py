"""Dependencies threaded through one reconciliation pass."""

from __future__ import annotations

__all__ = ("ClusterStore", "ReconcileContext")

import threading
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from addonoperator.errors import PassCancelledError
from addonoperator.resources import DerivedResource


class ClusterStore(Protocol):
    """The cluster API as used by the reconciler.

    ``get`` raises `addonoperator.errors.NotFoundError` for missing
    objects, ``create`` raises `addonoperator.errors.AlreadyExistsError`
    and ``update`` raises `addonoperator.errors.VersionConflictError` when
    ``resource.resource_version`` is stale.
    """

    def get(
        self, kind: str, namespace: str | None, name: str
    ) -> DerivedResource: ...

    def create(self, resource: DerivedResource) -> DerivedResource: ...

    def update(self, resource: DerivedResource) -> DerivedResource: ...


@dataclass
class ReconcileContext:
    """Everything a phase needs besides the Addon itself.

    Parameters
    ----------
    store
        The cluster store client.
    logger : optional
        Logger for the pass; usually the kopf per-object logger.
    tracer : optional
        An OpenTelemetry tracer. When `None`, phases run without spans.
    cancelled : `threading.Event`, optional
        Set by the dispatcher to abandon the pass. It is checked before
        every phase and every store call.
    """

    store: ClusterStore
    logger: Any = field(default_factory=lambda: structlog.getLogger(__name__))
    tracer: Any | None = None
    cancelled: threading.Event | None = None

    def check_cancelled(self) -> None:
        """Raise `PassCancelledError` if the pass was abandoned."""
        if self.cancelled is not None and self.cancelled.is_set():
            raise PassCancelledError("reconciliation pass was cancelled")
