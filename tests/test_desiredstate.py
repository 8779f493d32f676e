"""Tests for the addonoperator.desiredstate module."""

from __future__ import annotations

from typing import Any

import pytest
import yaml

from addonoperator.addon import Addon, AdoptionStrategy, InstallType
from addonoperator.desiredstate import DesiredTarget, parse_install_config
from addonoperator.signals import Signal


def test_parse_addon_manifest(addon: Addon) -> None:
    assert addon.name == "addon-x"
    assert addon.generation == 2
    assert addon.install_type is InstallType.OWN_NAMESPACE
    assert addon.adoption_strategy is AdoptionStrategy.STRICT
    assert addon.olm_all_namespaces is None


def test_unknown_adoption_strategy_is_strict(
    addon_body: dict[str, Any],
) -> None:
    addon_body["spec"]["resourceAdoptionStrategy"] = "Whatever"
    assert Addon.from_body(addon_body).adoption_strategy is (
        AdoptionStrategy.STRICT
    )

    addon_body["spec"]["resourceAdoptionStrategy"] = "AdoptAll"
    assert Addon.from_body(addon_body).adoption_strategy is (
        AdoptionStrategy.ADOPT_ALL
    )


def test_own_namespace_target(addon: Addon) -> None:
    target, signal = parse_install_config(addon)
    assert signal is Signal.CONTINUE
    assert target.namespace == "ns-a"
    assert target.target_namespaces == ("ns-a",)
    assert target.catalog_source_image == (
        "quay.io/osd-addons/addon-x-index:v1.0.0"
    )
    assert target.package_name == "addon-x"
    assert target.channel == "stable"


def test_all_namespaces_target() -> None:
    manifest = """
apiVersion: addons.managed.openshift.io/v1alpha1
kind: Addon
metadata:
  name: addon-y
  uid: 2c7d3f4e-0000-4000-8000-000000000002
spec:
  install:
    type: OLMAllNamespaces
    olmAllNamespaces:
      namespace: ns-a
      catalogSourceImage: quay.io/osd-addons/addon-y-index:v2
"""
    addon = Addon.from_body(yaml.safe_load(manifest))

    target, signal = parse_install_config(addon)
    assert signal is Signal.CONTINUE
    assert target.namespace == "ns-a"
    assert target.install_type is InstallType.ALL_NAMESPACES
    assert target.target_namespaces is None


@pytest.mark.parametrize(
    "install",
    [
        {},
        {"type": "SomethingElse"},
        {"type": "OLMOwnNamespace"},
        {"type": "OLMAllNamespaces", "olmOwnNamespace": {"namespace": "a"}},
        {
            "type": "OLMOwnNamespace",
            "olmOwnNamespace": {"catalogSourceImage": "quay.io/x:1"},
        },
        {"type": "OLMOwnNamespace", "olmOwnNamespace": {"namespace": "a"}},
    ],
)
def test_incomplete_config_stops(
    addon_body: dict[str, Any], install: dict[str, Any]
) -> None:
    """Incomplete install configuration is not an error, it stops."""
    addon_body["spec"]["install"] = install
    addon = Addon.from_body(addon_body)

    target, signal = parse_install_config(addon)
    assert signal is Signal.STOP
    assert target == DesiredTarget()
