"""Owner references, common labels, and the policy deciding whether an
existing object may be written.
"""

from __future__ import annotations

__all__ = (
    "COMMON_INSTANCE_LABEL",
    "COMMON_MANAGED_BY_LABEL",
    "OwnershipDecision",
    "add_common_labels",
    "authorize",
    "common_labels",
    "controller_reference",
    "has_equal_controller_reference",
    "merge_labels",
)

import enum
from collections.abc import Mapping

from addonoperator.addon import Addon, AdoptionStrategy
from addonoperator.resources import DerivedResource, OwnerReference

COMMON_MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
COMMON_INSTANCE_LABEL = "addons.managed.openshift.io/instance"


class OwnershipDecision(enum.Enum):
    ALLOW = "allow"
    REJECT = "reject"


def controller_reference(addon: Addon) -> OwnerReference:
    """Build the controller owner reference pointing at an Addon."""
    return OwnerReference(
        api_version=addon.api_version,
        kind=addon.kind,
        name=addon.name,
        uid=addon.uid,
        controller=True,
        block_owner_deletion=True,
    )


def has_equal_controller_reference(
    current: DerivedResource, desired: DerivedResource
) -> bool:
    """Return `True` if both objects are controlled by the same owner.

    Owners are compared by API group (not version), kind, name and uid.
    An object without a controller reference is never considered equal.
    """
    current_ref = current.controller_reference()
    desired_ref = desired.controller_reference()
    if current_ref is None or desired_ref is None:
        return False
    return (
        current_ref.group == desired_ref.group
        and current_ref.kind == desired_ref.kind
        and current_ref.name == desired_ref.name
        and current_ref.uid == desired_ref.uid
    )


def common_labels(addon: Addon) -> dict[str, str]:
    """Labels identifying objects managed for a given Addon."""
    return {
        COMMON_MANAGED_BY_LABEL: "addon-operator",
        COMMON_INSTANCE_LABEL: addon.name,
    }


def add_common_labels(resource: DerivedResource, addon: Addon) -> None:
    resource.labels = merge_labels(resource.labels, common_labels(addon))


def merge_labels(
    current: Mapping[str, str], desired: Mapping[str, str]
) -> dict[str, str]:
    """Merge two label sets into a new dict.

    Desired values win on key collisions, including empty-string values.
    Keys only present in ``current`` are kept.
    """
    merged = dict(current)
    merged.update(desired)
    return merged


def authorize(
    current: DerivedResource,
    desired: DerivedResource,
    strategy: AdoptionStrategy,
) -> OwnershipDecision:
    """Decide whether ``current`` may be overwritten with ``desired``.

    Objects without owner references, or already controlled by the
    desired owner, may always be written. Anything else is only written
    under `AdoptionStrategy.ADOPT_ALL`, in which case the write replaces
    its owner references and the object is adopted.
    """
    if not current.owner_references:
        return OwnershipDecision.ALLOW
    if has_equal_controller_reference(current, desired):
        return OwnershipDecision.ALLOW
    if strategy is AdoptionStrategy.ADOPT_ALL:
        return OwnershipDecision.ALLOW
    return OwnershipDecision.REJECT
