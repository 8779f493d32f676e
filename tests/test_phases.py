"""Tests for the addonoperator.phases package."""

from __future__ import annotations

from typing import Any

import yaml

from addonoperator.addon import Addon
from addonoperator.desiredstate import parse_install_config
from addonoperator.errors import NotOwnedByUsError
from addonoperator.ownership import common_labels, controller_reference
from addonoperator.phases import (
    DEFAULT_PHASES,
    ensure_catalog_source,
    ensure_namespaces,
    ensure_operator_group,
    ensure_subscription,
)
from addonoperator.phases.catalogsource import build_desired_catalog_source
from addonoperator.phases.namespaces import build_desired_namespaces
from addonoperator.phases.operatorgroup import (
    DEFAULT_OPERATOR_GROUP_NAME,
    build_desired_operator_group,
)
from addonoperator.phases.subscription import build_desired_subscription
from addonoperator.signals import Signal


def test_phase_order() -> None:
    assert [phase.name for phase in DEFAULT_PHASES] == [
        "ensureNamespaces",
        "ensureOperatorGroup",
        "ensureCatalogSource",
        "ensureSubscription",
    ]


def test_operator_group_own_namespace(addon: Addon) -> None:
    target, _ = parse_install_config(addon)
    operator_group = build_desired_operator_group(addon, target)

    assert operator_group.name == DEFAULT_OPERATOR_GROUP_NAME
    assert operator_group.namespace == "ns-a"
    assert operator_group.spec == {"targetNamespaces": ["ns-a"]}
    assert operator_group.labels == common_labels(addon)
    assert operator_group.owner_references == (controller_reference(addon),)


def test_operator_group_all_namespaces(addon_body: dict[str, Any]) -> None:
    install = addon_body["spec"]["install"]
    install["type"] = "OLMAllNamespaces"
    install["olmAllNamespaces"] = install.pop("olmOwnNamespace")
    addon = Addon.from_body(addon_body)

    target, _ = parse_install_config(addon)
    operator_group = build_desired_operator_group(addon, target)

    assert operator_group.namespace == "ns-a"
    assert "targetNamespaces" not in operator_group.spec


def test_catalog_source(addon: Addon) -> None:
    target, _ = parse_install_config(addon)
    catalog_source = build_desired_catalog_source(addon, target)

    assert catalog_source.name == "addon-addon-x-catalog"
    assert catalog_source.namespace == "ns-a"
    assert catalog_source.spec == {
        "sourceType": "grpc",
        "image": "quay.io/osd-addons/addon-x-index:v1.0.0",
        "displayName": "Addon X",
        "publisher": "OSD Red Hat Addons",
    }


def test_subscription(addon: Addon) -> None:
    target, _ = parse_install_config(addon)
    subscription = build_desired_subscription(addon, target)

    assert subscription.name == "addon-addon-x"
    assert subscription.spec == {
        "name": "addon-x",
        "channel": "stable",
        "source": "addon-addon-x-catalog",
        "sourceNamespace": "ns-a",
    }


def test_namespaces_are_deduplicated(addon_body: dict[str, Any]) -> None:
    addon_body["spec"]["namespaces"] = [
        {"name": "ns-monitoring"},
        {"name": "ns-a"},
    ]
    addon = Addon.from_body(addon_body)

    namespaces = build_desired_namespaces(addon, "ns-a")
    assert [ns.name for ns in namespaces] == ["ns-monitoring", "ns-a"]
    assert all(ns.namespace is None for ns in namespaces)


def test_namespaces_ensured_without_install_config(
    ctx, store, addon_body: dict[str, Any]
) -> None:
    addon_body["spec"]["namespaces"] = [{"name": "ns-monitoring"}]
    del addon_body["spec"]["install"]
    addon = Addon.from_body(addon_body)

    result = ensure_namespaces(ctx, addon)

    assert result.signal is Signal.CONTINUE
    assert result.error is None
    assert [w[1].name for w in store.writes] == ["ns-monitoring"]


def test_phases_stop_without_install_config(
    ctx, store, addon_body: dict[str, Any]
) -> None:
    del addon_body["spec"]["install"]
    addon = Addon.from_body(addon_body)

    for phase in (
        ensure_operator_group,
        ensure_catalog_source,
        ensure_subscription,
    ):
        result = phase(ctx, addon)
        assert result.signal is Signal.STOP
        assert result.error is None
    assert store.writes == []


def test_subscription_stops_without_channel(
    ctx, store, addon_body: dict[str, Any]
) -> None:
    del addon_body["spec"]["install"]["olmOwnNamespace"]["channel"]
    addon = Addon.from_body(addon_body)

    result = ensure_subscription(ctx, addon)
    assert result.signal is Signal.STOP
    assert store.writes == []


def test_operator_group_phase_returns_error(
    ctx, store, addon: Addon, foreign_owner: dict[str, Any]
) -> None:
    manifest = """
apiVersion: operators.coreos.com/v1
kind: OperatorGroup
metadata:
  name: redhat-layered-product-og
  namespace: ns-a
spec: {}
"""
    body = yaml.safe_load(manifest)
    body["metadata"]["ownerReferences"] = [foreign_owner]
    store.put(body)

    result = ensure_operator_group(ctx, addon)

    assert result.signal is Signal.CONTINUE
    assert isinstance(result.error, NotOwnedByUsError)
    assert store.writes == []
