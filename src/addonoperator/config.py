"""Operator configuration read from the environment."""

from __future__ import annotations

__all__ = ("OperatorConfig", "load_config")

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class OperatorConfig:
    """Settings for one operator process."""

    log_level: str = "INFO"
    """Log level for the operator's structlog loggers."""

    retry_delay: float = 10.0
    """Seconds before kopf retries a pass that failed transiently."""

    enable_tracing: bool = False
    """Wrap each phase in an OpenTelemetry span."""


def load_config(environ: Mapping[str, str] | None = None) -> OperatorConfig:
    """Build an `OperatorConfig` from ``ADDON_OPERATOR_*`` environment
    variables.

    Parameters
    ----------
    environ : `dict`, optional
        Mapping to read instead of `os.environ`.
    """
    if environ is None:
        environ = os.environ

    return OperatorConfig(
        log_level=environ.get("ADDON_OPERATOR_LOG_LEVEL", "INFO").upper(),
        retry_delay=float(environ.get("ADDON_OPERATOR_RETRY_DELAY", "10")),
        enable_tracing=(
            environ.get("ADDON_OPERATOR_ENABLE_TRACING", "false").lower()
            in _TRUTHY
        ),
    )
