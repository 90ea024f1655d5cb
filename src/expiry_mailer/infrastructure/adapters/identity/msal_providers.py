"""Token providers backed by MSAL."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import msal
import requests

from ....application.exceptions import AuthenticationError
from ....application.ports import AccessToken

logger = logging.getLogger(__name__)


def _token_from_result(result: dict[str, Any]) -> AccessToken:
    """Convert an MSAL result dictionary to an AccessToken."""
    if "access_token" not in result:
        error = result.get("error_description", result.get("error", "Unknown error"))
        msg = f"Failed to acquire access token: {error}"
        raise AuthenticationError(msg)

    expires_in = int(result.get("expires_in", 3600))
    # Refresh 5 minutes before expiry
    expires_at = datetime.now(UTC) + timedelta(seconds=max(expires_in - 300, 0))
    return AccessToken(token=result["access_token"], expires_at=expires_at)


class ManagedIdentityTokenProvider:
    """
    Acquire Graph tokens from the host's managed identity.

    Uses the system-assigned identity unless a client id is given, in which
    case the matching user-assigned identity is used. No secret is involved.
    """

    RESOURCE: ClassVar[str] = "https://graph.microsoft.com"

    def __init__(self, client_id: str = "") -> None:
        """Initialize the provider."""
        self._client_id = client_id
        self._client: msal.ManagedIdentityClient | None = None
        self._token: AccessToken | None = None

    def _get_client(self) -> msal.ManagedIdentityClient:
        """Get or create the MSAL managed identity client."""
        if self._client is None:
            identity = (
                msal.UserAssignedManagedIdentity(client_id=self._client_id)
                if self._client_id
                else msal.SystemAssignedManagedIdentity()
            )
            self._client = msal.ManagedIdentityClient(identity, http_client=requests.Session())
        return self._client

    async def get_token(self) -> AccessToken:
        """Acquire a token for Microsoft Graph."""
        if self._token and not self._token.is_expired:
            return self._token

        try:
            result = self._get_client().acquire_token_for_client(resource=self.RESOURCE)
        except Exception as e:
            msg = f"Managed identity token request failed: {e}"
            raise AuthenticationError(msg) from e

        self._token = _token_from_result(result)
        logger.debug("Acquired Graph token from managed identity")
        return self._token


class ClientSecretTokenProvider:
    """Acquire Graph tokens with the client credentials flow."""

    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    SCOPE: ClassVar[list[str]] = ["https://graph.microsoft.com/.default"]

    def __init__(self, tenant_id: str, client_id: str, client_secret: str) -> None:
        """Initialize the provider."""
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._msal_app: msal.ConfidentialClientApplication | None = None
        self._token: AccessToken | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._client_id,
                client_credential=self._client_secret,
                authority=authority,
            )
        return self._msal_app

    async def get_token(self) -> AccessToken:
        """Acquire a token for Microsoft Graph."""
        if self._token and not self._token.is_expired:
            return self._token

        try:
            result = self._get_msal_app().acquire_token_for_client(scopes=self.SCOPE)
        except Exception as e:
            msg = f"Client credentials token request failed: {e}"
            raise AuthenticationError(msg) from e

        self._token = _token_from_result(result)
        logger.debug("Acquired Graph token for client %s", self._client_id)
        return self._token
