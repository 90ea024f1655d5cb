"""Tests for MSAL-backed token providers."""

from __future__ import annotations

from typing import Any

import pytest

from expiry_mailer.application.exceptions import AuthenticationError
from expiry_mailer.infrastructure.adapters.identity import (
    ClientSecretTokenProvider,
    ManagedIdentityTokenProvider,
)


class FakeMsalClient:
    def __init__(self, result: dict[str, Any]) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    def acquire_token_for_client(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        return self.result


class TestManagedIdentityTokenProvider:
    """Tests for ManagedIdentityTokenProvider."""

    async def test_acquires_graph_token(self) -> None:
        provider = ManagedIdentityTokenProvider()
        fake = FakeMsalClient({"access_token": "mi-token", "expires_in": 3600})
        provider._client = fake  # type: ignore[assignment]

        token = await provider.get_token()

        assert token.token == "mi-token"
        assert fake.calls == [{"resource": "https://graph.microsoft.com"}]

    async def test_token_is_cached_until_expiry(self) -> None:
        provider = ManagedIdentityTokenProvider()
        fake = FakeMsalClient({"access_token": "mi-token", "expires_in": 3600})
        provider._client = fake  # type: ignore[assignment]

        await provider.get_token()
        await provider.get_token()
        assert len(fake.calls) == 1

    async def test_error_result_raises(self) -> None:
        provider = ManagedIdentityTokenProvider()
        provider._client = FakeMsalClient({"error": "invalid_request", "error_description": "No identity"})  # type: ignore[assignment]
        with pytest.raises(AuthenticationError, match="No identity"):
            await provider.get_token()


class TestClientSecretTokenProvider:
    """Tests for ClientSecretTokenProvider."""

    async def test_acquires_token_with_default_scope(self) -> None:
        provider = ClientSecretTokenProvider("tenant", "client", "secret")
        fake = FakeMsalClient({"access_token": "cc-token", "expires_in": 3600})
        provider._msal_app = fake  # type: ignore[assignment]

        token = await provider.get_token()

        assert token.token == "cc-token"
        assert fake.calls == [{"scopes": ["https://graph.microsoft.com/.default"]}]
        assert "cc-token" not in repr(token)

    async def test_error_result_raises(self) -> None:
        provider = ClientSecretTokenProvider("tenant", "client", "secret")
        provider._msal_app = FakeMsalClient({"error": "unauthorized_client"})  # type: ignore[assignment]
        with pytest.raises(AuthenticationError, match="unauthorized_client"):
            await provider.get_token()
