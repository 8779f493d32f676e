"""Normalize an Addon's install configuration into the target the phases
reconcile towards.
"""

from __future__ import annotations

__all__ = ("DesiredTarget", "parse_install_config")

from dataclasses import dataclass
from typing import Any

import structlog

from addonoperator.addon import Addon, InstallType
from addonoperator.signals import Signal


@dataclass(frozen=True)
class DesiredTarget:
    """The normalized install target of an Addon.

    ``target_namespaces`` is ``[namespace]`` for own-namespace installs and
    `None` for all-namespaces installs, which watch the whole cluster.
    """

    namespace: str = ""
    install_type: InstallType | None = None
    catalog_source_image: str = ""
    package_name: str = ""
    channel: str = ""
    target_namespaces: tuple[str, ...] | None = None


def parse_install_config(
    addon: Addon, logger: Any | None = None
) -> tuple[DesiredTarget, Signal]:
    """Build the `DesiredTarget` for an Addon.

    Parameters
    ----------
    addon : `addonoperator.addon.Addon`
        The Addon being reconciled.
    logger : optional
        Logger for the reasons a configuration is not actionable. Defaults
        to a structlog logger for this module.

    Returns
    -------
    target : `DesiredTarget`
        The normalized target, or an empty target when ``signal`` is
        `Signal.STOP`.
    signal : `addonoperator.signals.Signal`
        `Signal.STOP` when the install configuration is incomplete. This
        is not an error: the Addon simply has nothing to reconcile yet.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    if addon.install_type is None:
        logger.warning(f"Addon {addon.name} has no install type set")
        return DesiredTarget(), Signal.STOP

    config = addon.install_config()
    if config is None:
        logger.warning(
            f"Addon {addon.name} is missing the install configuration for "
            f"{addon.install_type.value}"
        )
        return DesiredTarget(), Signal.STOP

    if not config.namespace:
        logger.warning(
            f"Addon {addon.name} has no namespace configured for "
            f"{addon.install_type.value}"
        )
        return DesiredTarget(), Signal.STOP

    if not config.catalog_source_image:
        logger.warning(
            f"Addon {addon.name} has no catalogSourceImage configured for "
            f"{addon.install_type.value}"
        )
        return DesiredTarget(), Signal.STOP

    if addon.install_type is InstallType.OWN_NAMESPACE:
        target_namespaces: tuple[str, ...] | None = (config.namespace,)
    else:
        target_namespaces = None

    target = DesiredTarget(
        namespace=config.namespace,
        install_type=addon.install_type,
        catalog_source_image=config.catalog_source_image,
        package_name=config.package_name,
        channel=config.channel,
        target_namespaces=target_namespaces,
    )
    return target, Signal.CONTINUE
