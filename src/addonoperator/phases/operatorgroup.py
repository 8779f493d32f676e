"""Phase ensuring the OperatorGroup that scopes an Addon's operator."""

from __future__ import annotations

__all__ = (
    "DEFAULT_OPERATOR_GROUP_NAME",
    "build_desired_operator_group",
    "ensure_operator_group",
)

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.desiredstate import DesiredTarget, parse_install_config
from addonoperator.ensure import ensure_resource
from addonoperator.kinds import OPERATOR_GROUP
from addonoperator.ownership import add_common_labels, controller_reference
from addonoperator.resources import DerivedResource
from addonoperator.signals import PhaseResult, Signal

DEFAULT_OPERATOR_GROUP_NAME = "redhat-layered-product-og"
"""There is one OperatorGroup per managed namespace, always with this
name.
"""


def build_desired_operator_group(
    addon: Addon, target: DesiredTarget
) -> DerivedResource:
    """Build the OperatorGroup for an Addon's install target.

    Own-namespace installs watch only the target namespace; all-namespaces
    installs leave ``spec.targetNamespaces`` unset so the operator watches
    the whole cluster.
    """
    spec = {}
    if target.target_namespaces is not None:
        spec["targetNamespaces"] = list(target.target_namespaces)

    operator_group = DerivedResource(
        kind=OPERATOR_GROUP.kind,
        name=DEFAULT_OPERATOR_GROUP_NAME,
        namespace=target.namespace,
        spec=spec,
        owner_references=(controller_reference(addon),),
    )
    add_common_labels(operator_group, addon)
    return operator_group


def ensure_operator_group(
    ctx: ReconcileContext, addon: Addon
) -> PhaseResult:
    """Ensure the OperatorGroup matching the Addon's install type exists."""
    target, signal = parse_install_config(addon, ctx.logger)
    if signal is Signal.STOP:
        return PhaseResult.stop()

    desired = build_desired_operator_group(addon, target)
    try:
        ensure_resource(ctx, desired, addon.adoption_strategy)
    except Exception as e:
        return PhaseResult.failed(e)
    return PhaseResult()
