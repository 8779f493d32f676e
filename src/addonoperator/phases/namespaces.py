"""Phase ensuring the namespaces an Addon installs into."""

from __future__ import annotations

__all__ = ("build_desired_namespaces", "ensure_namespaces")

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.desiredstate import parse_install_config
from addonoperator.ensure import ensure_resource
from addonoperator.kinds import NAMESPACE
from addonoperator.ownership import add_common_labels, controller_reference
from addonoperator.resources import DerivedResource
from addonoperator.signals import PhaseResult, Signal


def build_desired_namespaces(
    addon: Addon, install_namespace: str | None
) -> list[DerivedResource]:
    """Build a Namespace for each entry of ``spec.namespaces`` followed by
    the install namespace, without duplicates.
    """
    names = list(addon.namespaces)
    if install_namespace:
        names.append(install_namespace)

    namespaces = []
    for name in dict.fromkeys(names):
        namespace = DerivedResource(
            kind=NAMESPACE.kind,
            name=name,
            owner_references=(controller_reference(addon),),
        )
        add_common_labels(namespace, addon)
        namespaces.append(namespace)
    return namespaces


def ensure_namespaces(ctx: ReconcileContext, addon: Addon) -> PhaseResult:
    """Ensure every namespace of the Addon exists and is owned by it.

    ``spec.namespaces`` are ensured even while the install configuration
    is incomplete; the install namespace is added once it is known.
    """
    target, signal = parse_install_config(addon, ctx.logger)
    install_namespace = target.namespace if signal is Signal.CONTINUE else None

    for desired in build_desired_namespaces(addon, install_namespace):
        try:
            ensure_resource(ctx, desired, addon.adoption_strategy)
        except Exception as e:
            return PhaseResult.failed(e)
    return PhaseResult()
