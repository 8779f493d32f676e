"""The Addon custom resource as seen by the reconciler."""

from __future__ import annotations

__all__ = (
    "ADDON_GROUP",
    "ADDON_PLURAL",
    "ADDON_VERSION",
    "AdoptionStrategy",
    "Addon",
    "InstallType",
    "OlmInstallConfig",
)

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

ADDON_GROUP = "addons.managed.openshift.io"
ADDON_VERSION = "v1alpha1"
ADDON_PLURAL = "addons"


class InstallType(str, enum.Enum):
    """How the add-on's operator is installed through OLM."""

    OWN_NAMESPACE = "OLMOwnNamespace"
    ALL_NAMESPACES = "OLMAllNamespaces"


class AdoptionStrategy(str, enum.Enum):
    """Whether existing objects not controlled by the Addon may be taken
    over.
    """

    STRICT = "Strict"
    ADOPT_ALL = "AdoptAll"

    @classmethod
    def parse(cls, value: str | None) -> AdoptionStrategy:
        """Parse ``spec.resourceAdoptionStrategy``; anything unknown or
        unset is `STRICT`.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.STRICT


@dataclass(frozen=True)
class OlmInstallConfig:
    """One of ``spec.install.olmOwnNamespace`` or
    ``spec.install.olmAllNamespaces``.
    """

    namespace: str = ""
    catalog_source_image: str = ""
    package_name: str = ""
    channel: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OlmInstallConfig:
        return cls(
            namespace=data.get("namespace") or "",
            catalog_source_image=data.get("catalogSourceImage") or "",
            package_name=data.get("packageName") or "",
            channel=data.get("channel") or "",
        )


@dataclass(frozen=True)
class Addon:
    """An immutable snapshot of an Addon resource."""

    name: str
    uid: str
    generation: int = 0
    display_name: str = ""
    namespaces: tuple[str, ...] = ()
    install_type: InstallType | None = None
    olm_own_namespace: OlmInstallConfig | None = None
    olm_all_namespaces: OlmInstallConfig | None = None
    adoption_strategy: AdoptionStrategy = AdoptionStrategy.STRICT
    labels: Mapping[str, str] = field(default_factory=dict)

    api_version = f"{ADDON_GROUP}/{ADDON_VERSION}"
    kind = "Addon"

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> Addon:
        """Parse an Addon from its manifest (for example a kopf ``body``).

        An unrecognized ``spec.install.type`` is kept as `None`, which the
        desired-state builder treats as "not configured yet".
        """
        metadata = body.get("metadata", {})
        spec = body.get("spec") or {}
        install = spec.get("install") or {}

        try:
            install_type: InstallType | None = InstallType(install["type"])
        except (KeyError, ValueError):
            install_type = None

        own = install.get("olmOwnNamespace")
        all_ns = install.get("olmAllNamespaces")

        return cls(
            name=metadata["name"],
            uid=metadata.get("uid", ""),
            generation=metadata.get("generation", 0),
            display_name=spec.get("displayName", ""),
            namespaces=tuple(
                ns["name"]
                for ns in spec.get("namespaces") or []
                if ns.get("name")
            ),
            install_type=install_type,
            olm_own_namespace=(
                OlmInstallConfig.from_dict(own) if own is not None else None
            ),
            olm_all_namespaces=(
                OlmInstallConfig.from_dict(all_ns)
                if all_ns is not None
                else None
            ),
            adoption_strategy=AdoptionStrategy.parse(
                spec.get("resourceAdoptionStrategy")
            ),
            labels=dict(metadata.get("labels") or {}),
        )

    def install_config(self) -> OlmInstallConfig | None:
        """Return the install block matching ``install_type``."""
        if self.install_type is InstallType.OWN_NAMESPACE:
            return self.olm_own_namespace
        if self.install_type is InstallType.ALL_NAMESPACES:
            return self.olm_all_namespaces
        return None
