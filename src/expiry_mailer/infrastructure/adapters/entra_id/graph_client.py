"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from ....application.exceptions import (
    AuthenticationError,
    DirectoryAccessDeniedError,
    DirectoryAuthError,
    DirectoryError,
)
from ....application.ports import AccessToken, TokenProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    base_url: str = "https://graph.microsoft.com/v1.0"
    timeout: float = 30.0


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication and paginated requests to the Graph API.
    """

    DENIED_STATUSES: ClassVar[frozenset[int]] = frozenset({403, 404})

    def __init__(
        self,
        token_provider: TokenProvider,
        config: GraphClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Graph client."""
        self._token_provider = token_provider
        self._config = config or GraphClientConfig()
        self._transport = transport

    async def authenticate(self) -> AccessToken:
        """Acquire a bearer token for Graph."""
        try:
            return await self._token_provider.get_token()
        except AuthenticationError as e:
            msg = f"Directory authentication failed: {e}"
            raise DirectoryAuthError(msg) from e

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    def _full_url(self, url: str) -> str:
        # Handle both relative and absolute URLs
        return url if url.startswith("http") else f"{self._config.base_url}{url}"

    async def iter_pages(self, endpoint: str) -> AsyncIterator[dict[str, Any]]:
        """
        Yield every item of a paginated endpoint.

        Follows ``@odata.nextLink`` until a page has none. Each call starts
        again from the first page.

        Raises:
            DirectoryError: If any page request fails.
        """
        url: str | None = endpoint

        async with self._client() as client:
            while url:
                data = await self._get_json(client, url)
                for item in data.get("value", []):
                    yield item
                url = data.get("@odata.nextLink")

    async def get_collection(self, endpoint: str) -> list[dict[str, Any]]:
        """
        Retrieve a collection, translating access errors.

        Raises:
            DirectoryAuthError: If Graph rejects the bearer token.
            DirectoryAccessDeniedError: If the resource is forbidden or missing.
            DirectoryError: For any other failure.
        """
        return [item async for item in self.iter_pages(endpoint)]

    async def _get_json(self, client: httpx.AsyncClient, url: str) -> dict[str, Any]:
        """Perform one authenticated GET."""
        token = await self.authenticate()
        headers = {**token.authorization_header, "Content-Type": "application/json"}

        try:
            response = await client.get(self._full_url(url), headers=headers)
        except httpx.HTTPError as e:
            msg = f"Graph request to {url} failed: {e}"
            raise DirectoryError(msg) from e

        if response.status_code == 401:
            msg = f"Graph rejected the bearer token for {url}: HTTP 401"
            raise DirectoryAuthError(msg)
        if response.status_code in self.DENIED_STATUSES:
            msg = f"Graph denied {url}: HTTP {response.status_code}"
            raise DirectoryAccessDeniedError(msg)
        if response.is_error:
            msg = f"Graph request to {url} failed: HTTP {response.status_code} {response.text[:200]}"
            raise DirectoryError(msg)

        try:
            return response.json()
        except ValueError as e:
            msg = f"Graph returned a non-JSON body for {url}"
            raise DirectoryError(msg) from e
