"""Shared fixtures: an in-memory cluster store and sample Addons."""

from __future__ import annotations

import copy
import itertools
from typing import Any

import pytest
import structlog
import yaml

from addonoperator.addon import Addon
from addonoperator.context import ReconcileContext
from addonoperator.errors import (
    AlreadyExistsError,
    NotFoundError,
    VersionConflictError,
)
from addonoperator.resources import DerivedResource


class FakeStore:
    """In-memory cluster store that records every write."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str | None, str], dict[str, Any]] = {}
        self.writes: list[tuple[str, DerivedResource]] = []
        self._versions = itertools.count(1)

    def put(self, body: dict[str, Any]) -> None:
        """Seed an object without recording a write."""
        body = copy.deepcopy(body)
        body["metadata"]["resourceVersion"] = str(next(self._versions))
        metadata = body["metadata"]
        key = (body["kind"], metadata.get("namespace"), metadata["name"])
        self.objects[key] = body

    def body(
        self, kind: str, namespace: str | None, name: str
    ) -> dict[str, Any]:
        return self.objects[(kind, namespace, name)]

    def writes_of(self, kind: str) -> list[tuple[str, DerivedResource]]:
        return [w for w in self.writes if w[1].kind == kind]

    def get(
        self, kind: str, namespace: str | None, name: str
    ) -> DerivedResource:
        try:
            body = self.objects[(kind, namespace, name)]
        except KeyError:
            raise NotFoundError(
                kind=kind, namespace=namespace, name=name
            ) from None
        return DerivedResource.from_body(copy.deepcopy(body))

    def create(self, resource: DerivedResource) -> DerivedResource:
        if resource.key in self.objects:
            raise AlreadyExistsError(
                kind=resource.kind,
                namespace=resource.namespace,
                name=resource.name,
            )
        self.writes.append(("create", resource.clone()))
        body = resource.to_body()
        body["metadata"]["resourceVersion"] = str(next(self._versions))
        self.objects[resource.key] = body
        return DerivedResource.from_body(copy.deepcopy(body))

    def update(self, resource: DerivedResource) -> DerivedResource:
        stored = self.objects.get(resource.key)
        if stored is None:
            raise NotFoundError(
                kind=resource.kind,
                namespace=resource.namespace,
                name=resource.name,
            )
        if stored["metadata"]["resourceVersion"] != resource.resource_version:
            raise VersionConflictError(
                kind=resource.kind,
                namespace=resource.namespace,
                name=resource.name,
            )
        self.writes.append(("update", resource.clone()))
        body = resource.to_body()
        body["metadata"]["resourceVersion"] = str(next(self._versions))
        self.objects[resource.key] = body
        return DerivedResource.from_body(copy.deepcopy(body))


ADDON_MANIFEST = """
apiVersion: addons.managed.openshift.io/v1alpha1
kind: Addon
metadata:
  name: addon-x
  uid: 6b3a2e1c-0d4f-4c3e-9a51-2f9c1f0d7e11
  generation: 2
spec:
  displayName: Addon X
  install:
    type: OLMOwnNamespace
    olmOwnNamespace:
      namespace: ns-a
      catalogSourceImage: quay.io/osd-addons/addon-x-index:v1.0.0
      packageName: addon-x
      channel: stable
"""


@pytest.fixture
def addon_body() -> dict[str, Any]:
    return yaml.safe_load(ADDON_MANIFEST)


@pytest.fixture
def addon(addon_body: dict[str, Any]) -> Addon:
    return Addon.from_body(addon_body)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def ctx(store: FakeStore) -> ReconcileContext:
    return ReconcileContext(store=store, logger=structlog.getLogger("tests"))


def foreign_owner_reference() -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "name": "someone-else",
        "uid": "00000000-0000-0000-0000-000000000001",
        "controller": True,
        "blockOwnerDeletion": True,
    }


@pytest.fixture
def foreign_owner() -> dict[str, Any]:
    return foreign_owner_reference()
