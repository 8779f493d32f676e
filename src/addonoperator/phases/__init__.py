"""Reconciliation phases, one per kind of derived resource."""

__all__ = (
    "DEFAULT_PHASES",
    "Phase",
    "ensure_catalog_source",
    "ensure_namespaces",
    "ensure_operator_group",
    "ensure_subscription",
)

from collections.abc import Callable
from dataclasses import dataclass

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.phases.catalogsource import ensure_catalog_source
from addonoperator.phases.namespaces import ensure_namespaces
from addonoperator.phases.operatorgroup import ensure_operator_group
from addonoperator.phases.subscription import ensure_subscription
from addonoperator.signals import PhaseResult


@dataclass(frozen=True)
class Phase:
    """A named reconciliation step."""

    name: str
    run: Callable[[ReconcileContext, Addon], PhaseResult]


DEFAULT_PHASES: tuple[Phase, ...] = (
    Phase("ensureNamespaces", ensure_namespaces),
    Phase("ensureOperatorGroup", ensure_operator_group),
    Phase("ensureCatalogSource", ensure_catalog_source),
    Phase("ensureSubscription", ensure_subscription),
)
"""Phases in execution order: a namespace must exist before anything is
created in it, and the catalog source and subscription depend on the
operator group's scope.
"""
