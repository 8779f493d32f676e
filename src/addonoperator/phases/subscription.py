"""Phase ensuring the Subscription that installs an Addon's operator."""

from __future__ import annotations

__all__ = (
    "build_desired_subscription",
    "ensure_subscription",
    "subscription_name",
)

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.desiredstate import DesiredTarget, parse_install_config
from addonoperator.ensure import ensure_resource
from addonoperator.kinds import SUBSCRIPTION
from addonoperator.ownership import add_common_labels, controller_reference
from addonoperator.phases.catalogsource import catalog_source_name
from addonoperator.resources import DerivedResource
from addonoperator.signals import PhaseResult, Signal


def subscription_name(addon: Addon) -> str:
    return f"addon-{addon.name}"


def build_desired_subscription(
    addon: Addon, target: DesiredTarget
) -> DerivedResource:
    """Build the Subscription pointing at the Addon's CatalogSource."""
    subscription = DerivedResource(
        kind=SUBSCRIPTION.kind,
        name=subscription_name(addon),
        namespace=target.namespace,
        spec={
            "name": target.package_name,
            "channel": target.channel,
            "source": catalog_source_name(addon),
            "sourceNamespace": target.namespace,
        },
        owner_references=(controller_reference(addon),),
    )
    add_common_labels(subscription, addon)
    return subscription


def ensure_subscription(ctx: ReconcileContext, addon: Addon) -> PhaseResult:
    target, signal = parse_install_config(addon, ctx.logger)
    if signal is Signal.STOP:
        return PhaseResult.stop()

    # A subscription needs both a package and a channel to resolve.
    if not target.package_name or not target.channel:
        ctx.logger.warning(
            f"Addon {addon.name} has no packageName or channel configured"
        )
        return PhaseResult.stop()

    desired = build_desired_subscription(addon, target)
    try:
        ensure_resource(ctx, desired, addon.adoption_strategy)
    except Exception as e:
        return PhaseResult.failed(e)
    return PhaseResult()
