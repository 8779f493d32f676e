"""Kopf handlers reconciling an Addon resource."""

__all__ = (
    "build_context",
    "reconcile_addon",
    "run_reconcile",
    "startup",
)

from typing import Any

import kopf
from opentelemetry import trace

from addonoperator.addon import (
    ADDON_GROUP,
    ADDON_PLURAL,
    ADDON_VERSION,
    Addon,
)
from addonoperator.config import OperatorConfig, load_config
from addonoperator.context import ClusterStore, ReconcileContext
from addonoperator.errors import to_kopf_error
from addonoperator.k8s import KubernetesStore, create_k8sclient
from addonoperator.pipeline import Pipeline
from addonoperator.startup import start_operator
from addonoperator.status import build_status

TRACER_NAME = "addonoperator.reconcile"


@kopf.on.startup()
def startup(
    settings: kopf.OperatorSettings,
    memo: kopf.Memo,
    logger: Any,
    **kwargs: Any,
) -> None:
    start_operator(settings=settings, memo=memo, logger=logger)
    memo.store = KubernetesStore(create_k8sclient())


@kopf.on.resume(ADDON_GROUP, ADDON_VERSION, ADDON_PLURAL)  # type: ignore[arg-type]
@kopf.on.create(ADDON_GROUP, ADDON_VERSION, ADDON_PLURAL)  # type: ignore[arg-type]
@kopf.on.update(ADDON_GROUP, ADDON_VERSION, ADDON_PLURAL)  # type: ignore[arg-type]
def reconcile_addon(
    *,
    body: kopf.Body,
    patch: kopf.Patch,
    memo: kopf.Memo,
    logger: Any,
    **kwargs: Any,
) -> None:
    """Handle creation, update or resumption of an Addon by running a
    reconciliation pass over its derived resources.

    Parameters
    ----------
    body : `kopf.Body`
        The full body of the ``Addon`` as a read-only dict.
    patch : `kopf.Patch`
        Patch applied by kopf after the handler; used to write status.
    memo : `kopf.Memo`
        Operator-wide memo holding the `addonoperator.config.OperatorConfig`
        and the `addonoperator.k8s.KubernetesStore` created at start-up.
    logger : `Any`
        The kopf logger for this Addon.
    **kwargs : Any
        Additional keyword arguments provided by kopf.

    Raises
    ------
    kopf.TemporaryError
        Raised if the pass failed in a way a later pass may fix.
    kopf.PermanentError
        Raised if the pass failed in a way only an external change fixes,
        such as an object owned by another controller.
    """
    config = getattr(memo, "config", None) or load_config()
    store = getattr(memo, "store", None) or KubernetesStore(
        create_k8sclient()
    )
    ctx = build_context(store=store, config=config, logger=logger)
    run_reconcile(
        ctx=ctx, body=body, patch=patch, config=config, pipeline=Pipeline()
    )


def build_context(
    *, store: ClusterStore, config: OperatorConfig, logger: Any
) -> ReconcileContext:
    """Assemble the reconcile context for one pass."""
    tracer = trace.get_tracer(TRACER_NAME) if config.enable_tracing else None
    return ReconcileContext(store=store, logger=logger, tracer=tracer)


def run_reconcile(
    *,
    ctx: ReconcileContext,
    body: Any,
    patch: Any,
    config: OperatorConfig,
    pipeline: Pipeline,
) -> None:
    """Run the pipeline for an Addon body, write its status to ``patch``
    and raise the kopf error matching a failed pass.
    """
    addon = Addon.from_body(body)
    outcome = pipeline.run(ctx, addon)
    patch.status.update(build_status(addon, outcome))
    if not outcome.succeeded:
        raise to_kopf_error(outcome, delay=config.retry_delay)
