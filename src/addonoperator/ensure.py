"""The get / compare / create-or-update routine shared by every phase."""

from __future__ import annotations

__all__ = ("EnsureAction", "ensure_resource")

import enum

from addonoperator.addon import AdoptionStrategy
from addonoperator.context import ReconcileContext
from addonoperator.errors import NotFoundError, NotOwnedByUsError
from addonoperator.ownership import (
    OwnershipDecision,
    authorize,
    has_equal_controller_reference,
    merge_labels,
)
from addonoperator.resources import DerivedResource


class EnsureAction(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def ensure_resource(
    ctx: ReconcileContext,
    desired: DerivedResource,
    strategy: AdoptionStrategy,
) -> EnsureAction:
    """Create ``desired`` or bring the stored object in line with it.

    Parameters
    ----------
    ctx : `addonoperator.context.ReconcileContext`
        Store, logger and cancellation flag for the pass.
    desired : `addonoperator.resources.DerivedResource`
        The fully-formed object, including its controller reference and
        labels. It is not modified.
    strategy : `addonoperator.addon.AdoptionStrategy`
        Whether an object controlled by someone else may be adopted.

    Returns
    -------
    action : `EnsureAction`
        What was done to the stored object.

    Raises
    ------
    addonoperator.errors.NotOwnedByUsError
        Raised, before anything is written, if the object is controlled by
        another owner and ``strategy`` is `AdoptionStrategy.STRICT`.
    addonoperator.errors.VersionConflictError
        Raised if the object changed between the read and the update. The
        whole pass should be retried.

    Notes
    -----
    Store errors other than a missing object are raised unmodified so the
    caller can classify them.
    """
    logger = ctx.logger
    kind, namespace, name = desired.key

    ctx.check_cancelled()
    try:
        current = ctx.store.get(kind, namespace, name)
    except NotFoundError:
        ctx.check_cancelled()
        ctx.store.create(desired.clone())
        logger.info(f"Created {kind} {_display(namespace, name)}")
        return EnsureAction.CREATED

    new_labels = merge_labels(current.labels, desired.labels)
    owned = has_equal_controller_reference(current, desired)
    spec_changed = current.spec != desired.spec

    if not spec_changed and owned and new_labels == current.labels:
        logger.debug(f"{kind} {_display(namespace, name)} is up to date")
        return EnsureAction.UNCHANGED

    if authorize(current, desired, strategy) is OwnershipDecision.REJECT:
        logger.error(
            f"{kind} {_display(namespace, name)} exists and is not owned "
            f"by this Addon; resourceAdoptionStrategy is {strategy.value}"
        )
        raise NotOwnedByUsError(kind=kind, namespace=namespace, name=name)

    updated = current.clone()
    updated.spec = desired.clone().spec
    updated.owner_references = desired.owner_references
    updated.labels = new_labels

    ctx.check_cancelled()
    ctx.store.update(updated)
    if owned:
        logger.info(f"Updated {kind} {_display(namespace, name)}")
    else:
        logger.info(f"Adopted {kind} {_display(namespace, name)}")
    return EnsureAction.UPDATED


def _display(namespace: str | None, name: str) -> str:
    return f"{namespace}/{name}" if namespace else name
