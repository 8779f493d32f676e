"""Value types for the objects the operator derives from an Addon."""

from __future__ import annotations

__all__ = ("DerivedResource", "OwnerReference")

import copy
from dataclasses import dataclass, field, replace
from typing import Any

from addonoperator.kinds import get_kind


@dataclass(frozen=True)
class OwnerReference:
    """An entry of ``metadata.ownerReferences``.

    This is a plain value; resolving it to the owning object is done by
    key lookup through the store, never by holding the owner itself.
    """

    api_version: str
    kind: str
    name: str
    uid: str
    controller: bool = False
    block_owner_deletion: bool = False

    @property
    def group(self) -> str:
        group, _, _ = self.api_version.rpartition("/")
        return group

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OwnerReference:
        return cls(
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
            name=data.get("name", ""),
            uid=data.get("uid", ""),
            controller=bool(data.get("controller", False)),
            block_owner_deletion=bool(data.get("blockOwnerDeletion", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "uid": self.uid,
            "controller": self.controller,
            "blockOwnerDeletion": self.block_owner_deletion,
        }


@dataclass
class DerivedResource:
    """A cluster object identified by (kind, namespace, name).

    ``resource_version`` is the store's opaque version token; it is `None`
    for objects that have not been read from the store. ``raw`` is the
    manifest the object was read from; it is not compared.
    """

    kind: str
    name: str
    namespace: str | None = None
    spec: dict[str, Any] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    owner_references: tuple[OwnerReference, ...] = ()
    resource_version: str | None = None
    raw: dict[str, Any] | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def api_version(self) -> str:
        return get_kind(self.kind).api_version

    @property
    def key(self) -> tuple[str, str | None, str]:
        return (self.kind, self.namespace, self.name)

    def controller_reference(self) -> OwnerReference | None:
        """Return the owner reference flagged as controller, if any."""
        for ref in self.owner_references:
            if ref.controller:
                return ref
        return None

    def clone(self) -> DerivedResource:
        """Return a deep copy that shares no mutable state with this
        object.
        """
        return replace(
            self,
            spec=copy.deepcopy(self.spec),
            labels=dict(self.labels),
            raw=copy.deepcopy(self.raw),
        )

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> DerivedResource:
        """Build a resource from a Kubernetes manifest.

        The full manifest is kept on ``raw`` so that fields the operator
        does not manage (annotations, finalizers, status, ...) survive a
        round trip through `to_body`.
        """
        metadata = body.get("metadata", {})
        kind = body["kind"]
        spec = body.get("spec") if get_kind(kind).has_spec else None
        return cls(
            kind=kind,
            name=metadata["name"],
            namespace=metadata.get("namespace"),
            spec=copy.deepcopy(spec) if spec else {},
            labels=dict(metadata.get("labels") or {}),
            owner_references=tuple(
                OwnerReference.from_dict(ref)
                for ref in metadata.get("ownerReferences") or []
            ),
            resource_version=metadata.get("resourceVersion"),
            raw=copy.deepcopy(dict(body)),
        )

    def to_body(self) -> dict[str, Any]:
        """Render the resource as a Kubernetes manifest.

        Managed fields are laid over the manifest the resource was read
        from, if any; everything else in that manifest is kept as is.
        """
        body: dict[str, Any] = copy.deepcopy(self.raw) if self.raw else {}
        body["apiVersion"] = self.api_version
        body["kind"] = self.kind

        metadata: dict[str, Any] = body.setdefault("metadata", {})
        metadata["name"] = self.name
        if self.namespace is not None:
            metadata["namespace"] = self.namespace
        else:
            metadata.pop("namespace", None)
        if self.labels:
            metadata["labels"] = dict(self.labels)
        else:
            metadata.pop("labels", None)
        if self.owner_references:
            metadata["ownerReferences"] = [
                ref.to_dict() for ref in self.owner_references
            ]
        else:
            metadata.pop("ownerReferences", None)
        if self.resource_version is not None:
            metadata["resourceVersion"] = self.resource_version
        else:
            metadata.pop("resourceVersion", None)

        if get_kind(self.kind).has_spec:
            body["spec"] = copy.deepcopy(self.spec)
        return body
