"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from expiry_mailer.domain.entities import Application, ApplicationCredentials, Credential
from expiry_mailer.domain.value_objects import CredentialType, ExpirationWindow


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant."""
    return datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def default_window() -> ExpirationWindow:
    """Default alert window: 30 days ahead, 10 days back."""
    return ExpirationWindow(threshold_days=30, grace_days=10)


@pytest.fixture
def make_application() -> Callable[..., Application]:
    """Factory for applications with predictable identifiers."""

    def _make(name: str = "Test App", index: int = 1) -> Application:
        return Application(
            id=f"object-{index}",
            display_name=name,
            app_id=f"00000000-0000-0000-0000-{index:012d}",
        )

    return _make


@pytest.fixture
def make_entry(
    make_application: Callable[..., Application],
) -> Callable[..., ApplicationCredentials]:
    """Factory for an application with secrets and certificates expiring at given instants."""

    def _make(
        name: str = "Test App",
        index: int = 1,
        secrets: list[datetime | None] | None = None,
        certificates: list[datetime | None] | None = None,
    ) -> ApplicationCredentials:
        app = make_application(name, index)
        return ApplicationCredentials(
            application=app,
            secrets=[
                Credential(CredentialType.SECRET, expiry, app, key_id=f"secret-{i}")
                for i, expiry in enumerate(secrets or [])
            ],
            certificates=[
                Credential(CredentialType.CERTIFICATE, expiry, app, key_id=f"cert-{i}")
                for i, expiry in enumerate(certificates or [])
            ],
        )

    return _make
