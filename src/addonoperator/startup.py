"""Code intended to run on start-up, before running any handlers."""

__all__ = ("configure_logging", "start_operator")

import logging
from typing import Any

import kopf
import structlog

from addonoperator.config import OperatorConfig, load_config
from addonoperator.version import get_version


def configure_logging(config: OperatorConfig) -> None:
    """Configure structlog for the operator's module loggers."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def start_operator(
    settings: kopf.OperatorSettings,
    memo: kopf.Memo,
    logger: Any | None = None,
) -> OperatorConfig:
    """Start up the operator: load its configuration, set up logging and
    tune kopf.

    The configuration is stored on ``memo.config`` so that handlers
    receive it explicitly.
    """
    config = load_config()
    configure_logging(config)
    if logger is None:
        logger = structlog.getLogger(__name__)

    # Status is written by the handlers; kopf's own progress goes to
    # annotations so it never collides with it.
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage(
        prefix="addons.managed.openshift.io"
    )
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage(
        prefix="addons.managed.openshift.io"
    )

    memo.config = config
    logger.info(
        f"Starting addon-operator {get_version()} (tracing "
        f"{'enabled' if config.enable_tracing else 'disabled'})"
    )
    return config
