"""Helpers for interacting with Kubernetes APIs."""

__all__ = ("KubernetesStore", "create_k8sclient")

import json
from typing import Any

import kubernetes
from kubernetes.client.exceptions import ApiException

from addonoperator.errors import (
    AlreadyExistsError,
    NotFoundError,
    VersionConflictError,
)
from addonoperator.kinds import NAMESPACE, ResourceKind, get_kind
from addonoperator.resources import DerivedResource


def create_k8sclient() -> kubernetes.client:
    """Get a Kubernetes client configured with available cluster
    authentication.

    If in-cluster authentication is available, that is used. Otherwise
    this function falls-back to using a kubectl config file, which is
    appropriate for development.
    """
    try:
        kubernetes.config.load_incluster_config()
    except kubernetes.config.ConfigException:
        kubernetes.config.load_kube_config()
    return kubernetes.client


class KubernetesStore:
    """Cluster store backed by the Kubernetes API.

    Namespaces go through ``CoreV1Api``; every other registered kind is a
    custom resource served through ``CustomObjectsApi``. Responses are
    read raw and parsed as JSON.

    Parameters
    ----------
    k8s_client
        A Kubernetes client (see `create_k8sclient`).
    """

    def __init__(self, k8s_client: Any) -> None:
        self._core_api = k8s_client.CoreV1Api()
        self._custom_api = k8s_client.CustomObjectsApi()

    def get(
        self, kind: str, namespace: str | None, name: str
    ) -> DerivedResource:
        resource_kind = get_kind(kind)
        try:
            if resource_kind == NAMESPACE:
                result = self._core_api.read_namespace(
                    name=name, _preload_content=False
                )
            else:
                result = self._custom_api.get_namespaced_custom_object(
                    **self._address(resource_kind, namespace),
                    name=name,
                    _preload_content=False,
                )
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(
                    kind=kind, namespace=namespace, name=name
                ) from e
            raise
        return DerivedResource.from_body(json.loads(result.data))

    def create(self, resource: DerivedResource) -> DerivedResource:
        resource_kind = get_kind(resource.kind)
        body = resource.to_body()
        body["metadata"].pop("resourceVersion", None)
        try:
            if resource_kind == NAMESPACE:
                result = self._core_api.create_namespace(
                    body=body, _preload_content=False
                )
            else:
                result = self._custom_api.create_namespaced_custom_object(
                    **self._address(resource_kind, resource.namespace),
                    body=body,
                    _preload_content=False,
                )
        except ApiException as e:
            if e.status == 409:
                raise AlreadyExistsError(
                    kind=resource.kind,
                    namespace=resource.namespace,
                    name=resource.name,
                ) from e
            raise
        return DerivedResource.from_body(json.loads(result.data))

    def update(self, resource: DerivedResource) -> DerivedResource:
        """Replace the stored object.

        ``resource.resource_version`` is sent with the body, so the API
        server rejects the write with a 409 if the object changed since it
        was read.
        """
        resource_kind = get_kind(resource.kind)
        body = resource.to_body()
        try:
            if resource_kind == NAMESPACE:
                result = self._core_api.replace_namespace(
                    name=resource.name, body=body, _preload_content=False
                )
            else:
                result = self._custom_api.replace_namespaced_custom_object(
                    **self._address(resource_kind, resource.namespace),
                    name=resource.name,
                    body=body,
                    _preload_content=False,
                )
        except ApiException as e:
            if e.status == 409:
                raise VersionConflictError(
                    kind=resource.kind,
                    namespace=resource.namespace,
                    name=resource.name,
                ) from e
            raise
        return DerivedResource.from_body(json.loads(result.data))

    @staticmethod
    def _address(
        resource_kind: ResourceKind, namespace: str | None
    ) -> dict[str, Any]:
        return {
            "group": resource_kind.group,
            "version": resource_kind.version,
            "namespace": namespace,
            "plural": resource_kind.plural,
        }
