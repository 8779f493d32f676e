"""Registry of the resource kinds the operator manages."""

from __future__ import annotations

__all__ = (
    "CATALOG_SOURCE",
    "NAMESPACE",
    "OPERATOR_GROUP",
    "SUBSCRIPTION",
    "ResourceKind",
    "get_kind",
    "register_kind",
)

from dataclasses import dataclass

from addonoperator.errors import UnsupportedKindError


@dataclass(frozen=True)
class ResourceKind:
    """How to address one kind of object in the Kubernetes API."""

    kind: str
    group: str
    version: str
    plural: str
    namespaced: bool = True
    has_spec: bool = True

    @property
    def api_version(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version


NAMESPACE = ResourceKind(
    kind="Namespace",
    group="",
    version="v1",
    plural="namespaces",
    namespaced=False,
    has_spec=False,
)

OPERATOR_GROUP = ResourceKind(
    kind="OperatorGroup",
    group="operators.coreos.com",
    version="v1",
    plural="operatorgroups",
)

CATALOG_SOURCE = ResourceKind(
    kind="CatalogSource",
    group="operators.coreos.com",
    version="v1alpha1",
    plural="catalogsources",
)

SUBSCRIPTION = ResourceKind(
    kind="Subscription",
    group="operators.coreos.com",
    version="v1alpha1",
    plural="subscriptions",
)

_registry: dict[str, ResourceKind] = {}


def register_kind(resource_kind: ResourceKind) -> None:
    """Make a kind available to `get_kind`."""
    _registry[resource_kind.kind] = resource_kind


def get_kind(kind: str) -> ResourceKind:
    """Look up a registered kind.

    Raises
    ------
    addonoperator.errors.UnsupportedKindError
        Raised if the kind is not registered.
    """
    try:
        return _registry[kind]
    except KeyError:
        raise UnsupportedKindError(kind) from None


for _kind in (NAMESPACE, OPERATOR_GROUP, CATALOG_SOURCE, SUBSCRIPTION):
    register_kind(_kind)
