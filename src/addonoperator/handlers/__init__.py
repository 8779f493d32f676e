"""Kopf handlers for the addon-operator."""

__all__ = (
    "reconcile_addon",
    "startup",
)

from addonoperator.handlers.reconcileaddon import reconcile_addon, startup
