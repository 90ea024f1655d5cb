"""Tests for the Gmail notification sender."""

from __future__ import annotations

import base64
import json
from email import message_from_bytes
from urllib.parse import parse_qs

import httpx
import pytest

from expiry_mailer.application.exceptions import MailAuthError, MailSendError
from expiry_mailer.application.ports import AccessToken
from expiry_mailer.infrastructure.adapters.notifications import (
    GmailConfig,
    GmailNotificationSender,
    RefreshTokenProvider,
    encode_raw_message,
)


def _decode(raw: str) -> bytes:
    return base64.urlsafe_b64decode(raw + "=" * (-len(raw) % 4))


class TestGmailConfig:
    """Tests for GmailConfig."""

    def test_secrets_hidden_from_repr(self) -> None:
        config = GmailConfig(client_id="id", client_secret="s3cret", refresh_token="r3fresh")
        assert "s3cret" not in repr(config)
        assert "r3fresh" not in repr(config)
        assert config.is_complete is True

    def test_incomplete_without_refresh_token(self) -> None:
        assert GmailConfig(client_id="id", client_secret="secret").is_complete is False


class TestEncodeRawMessage:
    """Tests for base64url encoding of raw MIME."""

    def test_uses_url_safe_alphabet_without_padding(self) -> None:
        message = GmailNotificationSender.build_message("a@example.com", "b@example.com", "?>?>?", "<p>ÿÿ?</p>")
        raw = encode_raw_message(message)

        assert "+" not in raw
        assert "/" not in raw
        assert not raw.endswith("=")
        assert _decode(raw) == message.as_bytes()


class TestGmailNotificationSender:
    """Tests for GmailNotificationSender."""

    def test_build_message_headers(self) -> None:
        message = GmailNotificationSender.build_message(
            "alerts@example.com", "ops@example.com, sec@example.com", "Subject (1)", "<p>hi</p>"
        )
        assert message["From"] == "alerts@example.com"
        assert message["To"] == "ops@example.com, sec@example.com"
        assert message["Subject"] == "Subject (1)"
        assert message.get_content_type() == "text/html"
        assert message.get_content_charset() == "utf-8"

    async def test_refresh_access_token_posts_form(self) -> None:
        """Refresh grant is form-encoded and returns the bearer token."""
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"access_token": "ya29.token", "expires_in": 3599})

        sender = GmailNotificationSender(transport=httpx.MockTransport(handler))
        token = await sender.refresh_access_token("cid", "csecret", "rtoken")

        assert token.token == "ya29.token"
        assert token.expires_at is not None
        assert seen["url"] == GmailNotificationSender.TOKEN_URL
        assert seen["form"] == {
            "client_id": ["cid"],
            "client_secret": ["csecret"],
            "refresh_token": ["rtoken"],
            "grant_type": ["refresh_token"],
        }

    async def test_refresh_failure_raises_mail_auth_error(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))
        sender = GmailNotificationSender(transport=transport)
        with pytest.raises(MailAuthError, match="invalid_grant"):
            await sender.refresh_access_token("cid", "csecret", "rtoken")

    async def test_refresh_non_json_body_raises_mail_auth_error(self) -> None:
        """A 2xx HTML page from the token endpoint is an auth failure, not a config error."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>Service Unavailable</html>"))
        sender = GmailNotificationSender(transport=transport)
        with pytest.raises(MailAuthError, match="non-JSON"):
            await sender.refresh_access_token("cid", "csecret", "rtoken")

    async def test_send_posts_raw_envelope(self) -> None:
        """The envelope holds one base64url field with the MIME message."""
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg-1"})

        sender = GmailNotificationSender(transport=httpx.MockTransport(handler))
        await sender.send("alerts@example.com", "ops@example.com", "Subject (2)", "<b>hi</b>", AccessToken("tok"))

        assert seen["url"] == GmailNotificationSender.SEND_URL
        assert seen["auth"] == "Bearer tok"
        body = seen["body"]
        assert isinstance(body, dict) and list(body) == ["raw"]
        parsed = message_from_bytes(_decode(body["raw"]))
        assert parsed["Subject"] == "Subject (2)"
        assert parsed.get_payload(decode=True).decode("utf-8") == "<b>hi</b>"

    async def test_send_failure_carries_response_body(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(403, text='{"error": {"message": "Insufficient Permission"}}')
        )
        sender = GmailNotificationSender(transport=transport)

        with pytest.raises(MailSendError) as exc_info:
            await sender.send("a@example.com", "b@example.com", "s", "b", AccessToken("tok"))

        assert exc_info.value.status_code == 403
        assert "Insufficient Permission" in exc_info.value.response_body


class TestRefreshTokenProvider:
    """Tests for RefreshTokenProvider."""

    async def test_uses_configured_credentials(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            form = parse_qs(request.content.decode())
            assert form["refresh_token"] == ["stored-refresh"]
            return httpx.Response(200, json={"access_token": "fresh"})

        sender = GmailNotificationSender(transport=httpx.MockTransport(handler))
        provider = RefreshTokenProvider(
            sender, GmailConfig(client_id="cid", client_secret="cs", refresh_token="stored-refresh")
        )
        assert (await provider.get_token()).token == "fresh"
