"""Tests for the addonoperator.errors module."""

from __future__ import annotations

import kopf
import pytest

from addonoperator.errors import (
    NotOwnedByUsError,
    PassCancelledError,
    UnsupportedKindError,
    VersionConflictError,
    is_retryable,
    to_kopf_error,
)
from addonoperator.pipeline import PassState, ReconcileOutcome


def test_error_messages() -> None:
    error = NotOwnedByUsError(
        kind="OperatorGroup", namespace="ns-a", name="og"
    )
    assert str(error) == "OperatorGroup ns-a/og is not owned by this Addon"

    error = VersionConflictError(kind="Namespace", name="ns-a")
    assert str(error) == "Namespace ns-a was modified concurrently"


def test_is_retryable() -> None:
    assert is_retryable(VersionConflictError(kind="Namespace", name="a"))
    assert is_retryable(PassCancelledError())
    assert is_retryable(ConnectionError())
    assert not is_retryable(
        NotOwnedByUsError(kind="OperatorGroup", namespace="a", name="b")
    )
    assert not is_retryable(UnsupportedKindError("Deployment"))


def test_to_kopf_error_permanent() -> None:
    outcome = ReconcileOutcome(
        state=PassState.FAILED,
        phase="ensureOperatorGroup",
        error=NotOwnedByUsError(
            kind="OperatorGroup", namespace="ns-a", name="og"
        ),
    )
    error = to_kopf_error(outcome)
    assert isinstance(error, kopf.PermanentError)
    assert "ensureOperatorGroup" in str(error)


def test_to_kopf_error_temporary() -> None:
    outcome = ReconcileOutcome(
        state=PassState.FAILED,
        phase="ensureSubscription",
        error=VersionConflictError(
            kind="Subscription", namespace="ns-a", name="addon-x"
        ),
    )
    error = to_kopf_error(outcome, delay=30)
    assert isinstance(error, kopf.TemporaryError)
    assert error.delay == 30


def test_to_kopf_error_requires_error() -> None:
    with pytest.raises(ValueError):
        to_kopf_error(ReconcileOutcome(state=PassState.SUCCEEDED))
