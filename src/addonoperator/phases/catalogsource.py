"""Phase ensuring the CatalogSource that serves an Addon's bundle."""

from __future__ import annotations

__all__ = (
    "CATALOG_SOURCE_PUBLISHER",
    "build_desired_catalog_source",
    "catalog_source_name",
    "ensure_catalog_source",
)

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.desiredstate import DesiredTarget, parse_install_config
from addonoperator.ensure import ensure_resource
from addonoperator.kinds import CATALOG_SOURCE
from addonoperator.ownership import add_common_labels, controller_reference
from addonoperator.resources import DerivedResource
from addonoperator.signals import PhaseResult, Signal

CATALOG_SOURCE_PUBLISHER = "OSD Red Hat Addons"


def catalog_source_name(addon: Addon) -> str:
    return f"addon-{addon.name}-catalog"


def build_desired_catalog_source(
    addon: Addon, target: DesiredTarget
) -> DerivedResource:
    catalog_source = DerivedResource(
        kind=CATALOG_SOURCE.kind,
        name=catalog_source_name(addon),
        namespace=target.namespace,
        spec={
            "sourceType": "grpc",
            "image": target.catalog_source_image,
            "displayName": addon.display_name or addon.name,
            "publisher": CATALOG_SOURCE_PUBLISHER,
        },
        owner_references=(controller_reference(addon),),
    )
    add_common_labels(catalog_source, addon)
    return catalog_source


def ensure_catalog_source(
    ctx: ReconcileContext, addon: Addon
) -> PhaseResult:
    target, signal = parse_install_config(addon, ctx.logger)
    if signal is Signal.STOP:
        return PhaseResult.stop()

    desired = build_desired_catalog_source(addon, target)
    try:
        ensure_resource(ctx, desired, addon.adoption_strategy)
    except Exception as e:
        return PhaseResult.failed(e)
    return PhaseResult()
