"""Entra ID directory client implementation."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any

from ....application.ports import AccessToken, TokenProvider
from ....domain.entities import Application, Credential
from ....domain.value_objects import CredentialType
from .graph_client import GraphClient, GraphClientConfig

logger = logging.getLogger(__name__)


class EntraIdDirectoryClient:
    """
    Directory client implementation using Microsoft Graph API.

    Implements the DirectoryClient port for Entra ID app registrations.
    """

    APPLICATIONS_ENDPOINT = "/applications?$select=id,appId,displayName"

    def __init__(
        self,
        token_provider: TokenProvider,
        config: GraphClientConfig | None = None,
        *,
        client: GraphClient | None = None,
    ) -> None:
        """
        Initialize the directory client.

        Args:
            token_provider: Source of Graph bearer tokens.
            config: Configuration for the Graph API client.
            client: Preconfigured Graph client, mainly for tests.
        """
        self._client = client or GraphClient(token_provider, config)

    async def authenticate(self) -> AccessToken:
        """Authenticate to Graph; failures raise DirectoryAuthError."""
        token = await self._client.authenticate()
        logger.info("Authenticated to Microsoft Graph")
        return token

    async def list_applications(self) -> AsyncIterator[Application]:
        """Enumerate all application registrations page by page."""
        logger.info("Fetching application registrations from Entra ID...")
        count = 0
        async for raw in self._client.iter_pages(self.APPLICATIONS_ENDPOINT):
            count += 1
            yield Application(
                id=raw.get("id", ""),
                display_name=raw.get("displayName") or "Unknown",
                app_id=raw.get("appId", ""),
            )
        logger.info("Found %d application registrations", count)

    async def list_credentials(
        self, application: Application, kind: CredentialType
    ) -> list[Credential]:
        """Fetch secrets or certificates of one application."""
        endpoint = f"/applications/{application.id}/{kind.graph_property}"
        raw_credentials = await self._client.get_collection(endpoint)
        return [self._map_credential(raw, kind, application) for raw in raw_credentials]

    def _map_credential(
        self,
        raw: dict[str, Any],
        kind: CredentialType,
        application: Application,
    ) -> Credential:
        """
        Map raw Graph API credential data to domain entity.

        A missing or unparsable ``endDateTime`` is kept as ``None`` so the
        scanner can skip that single credential.
        """
        expiry_str = raw.get("endDateTime")
        expires_at = self._parse_datetime(expiry_str) if expiry_str else None
        if expires_at is None:
            logger.warning(
                "Credential %s in %s has no usable expiry date",
                raw.get("keyId", "unknown"),
                application.display_name,
            )

        return Credential(
            kind=kind,
            expires_at=expires_at,
            application=application,
            key_id=raw.get("keyId") or "",
            display_name=raw.get("displayName"),
        )

    @staticmethod
    def _parse_datetime(dt_string: str) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        try:
            # Handle various formats from Graph API
            dt_string = dt_string.replace("Z", "+00:00")
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None
