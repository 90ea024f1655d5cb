"""Email notification sender using the Gmail API."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from email.mime.text import MIMEText
from typing import ClassVar

import httpx

from ....application.exceptions import MailAuthError, MailSendError
from ....application.ports import AccessToken


@dataclass(frozen=True, slots=True)
class GmailConfig:
    """Gmail API offline credentials."""

    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    refresh_token: str = field(default="", repr=False)
    timeout: float = 30.0

    @property
    def is_complete(self) -> bool:
        """Check that all three offline credentials are set."""
        return bool(self.client_id and self.client_secret and self.refresh_token)


def encode_raw_message(message: MIMEText) -> str:
    """Encode a MIME message as unpadded base64url, as the send endpoint expects."""
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")


class GmailNotificationSender:
    """Send one HTML message via the Gmail API."""

    TOKEN_URL: ClassVar[str] = "https://oauth2.googleapis.com/token"
    SEND_URL: ClassVar[str] = "https://gmail.googleapis.com/gmail/v1/users/me/messages/send"

    def __init__(
        self,
        timeout: float = 30.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Gmail sender."""
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(self.__class__.__name__)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def refresh_access_token(
        self, client_id: str, client_secret: str, refresh_token: str
    ) -> AccessToken:
        """
        Exchange the offline refresh token for a short-lived bearer token.

        Raises:
            MailAuthError: If the token endpoint rejects the request.
        """
        data = {
            "client_id": client_id,
            "client_secret": client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        try:
            async with self._client() as client:
                response = await client.post(self.TOKEN_URL, data=data)
        except httpx.HTTPError as e:
            msg = f"Mail token request failed: {e}"
            raise MailAuthError(msg) from e

        if response.is_error:
            msg = f"Mail token refresh failed: HTTP {response.status_code} {response.text}"
            raise MailAuthError(msg)

        try:
            payload = response.json()
        except ValueError as e:
            msg = f"Mail token endpoint returned a non-JSON body: {response.text[:200]}"
            raise MailAuthError(msg) from e

        if "access_token" not in payload:
            error = payload.get("error_description", payload.get("error", "Unknown error"))
            msg = f"Mail token refresh failed: {error}"
            raise MailAuthError(msg)

        expires_in = int(payload.get("expires_in", 3600))
        self._logger.debug("Refreshed mail provider access token")
        return AccessToken(
            token=payload["access_token"],
            expires_at=datetime.now(UTC) + timedelta(seconds=expires_in),
        )

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
        token: AccessToken,
    ) -> None:
        """
        Send an HTML message.

        Raises:
            MailSendError: With the provider's response body when rejected.
        """
        message = self.build_message(sender, recipient, subject, body)
        envelope = {"raw": encode_raw_message(message)}

        try:
            async with self._client() as client:
                response = await client.post(self.SEND_URL, headers=token.authorization_header, json=envelope)
        except httpx.HTTPError as e:
            msg = f"Mail send request failed: {e}"
            raise MailSendError(msg) from e

        if response.is_error:
            raise MailSendError(
                f"Mail provider rejected message: HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        self._logger.info("Email sent to %s", recipient)

    @staticmethod
    def build_message(sender: str, recipient: str, subject: str, body: str) -> MIMEText:
        """Build a single-part UTF-8 HTML message."""
        message = MIMEText(body, "html", "utf-8")
        message["From"] = sender
        message["To"] = ", ".join(addr.strip() for addr in recipient.split(",") if addr.strip())
        message["Subject"] = subject
        return message


class RefreshTokenProvider:
    """TokenProvider exchanging stored Gmail offline credentials."""

    def __init__(self, sender: GmailNotificationSender, config: GmailConfig) -> None:
        self._sender = sender
        self._config = config

    async def get_token(self) -> AccessToken:
        """Refresh a mail provider token; failures raise MailAuthError."""
        return await self._sender.refresh_access_token(
            self._config.client_id,
            self._config.client_secret,
            self._config.refresh_token,
        )
