"""Tests for the composition root and run modes."""

from __future__ import annotations

import pytest

from expiry_mailer.application.exceptions import DirectoryAuthError, MailSendError
from expiry_mailer.application.use_cases import CheckExpiringCredentials, CheckResult
from expiry_mailer.domain.entities import ScanResult
from expiry_mailer.infrastructure.adapters import ClientSecretTokenProvider, ManagedIdentityTokenProvider
from expiry_mailer.infrastructure.config import Settings
from expiry_mailer.main import Application, ApplicationContainer


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "directory_auth_mode": "managed_identity",
        "azure_tenant_id": "",
        "azure_client_id": "",
        "azure_client_secret": "",
        "threshold_days": 30,
        "grace_days": 10,
        "mail_from": "alerts@example.com",
        "mail_to": "ops@example.com",
        "gmail_client_id": "cid",
        "gmail_client_secret": "cs",
        "gmail_refresh_token": "rt",
        "run_mode": "once",
        "dry_run": False,
        "api_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class StubUseCase:
    def __init__(self, error: Exception | None = None, denied: list[str] | None = None) -> None:
        self._error = error
        self._denied = denied or []

    async def execute(self) -> CheckResult:
        if self._error:
            raise self._error
        return CheckResult(
            result=ScanResult(), notification_sent=False, dry_run=False, denied_applications=self._denied
        )


def _app(settings: Settings, use_case: StubUseCase, monkeypatch: pytest.MonkeyPatch) -> Application:
    app = Application(settings)
    monkeypatch.setattr(app._container, "create_check_use_case", lambda: use_case)
    return app


class TestApplicationContainer:
    """Tests for ApplicationContainer."""

    def test_managed_identity_by_default(self) -> None:
        provider = ApplicationContainer(_settings()).create_directory_token_provider()
        assert isinstance(provider, ManagedIdentityTokenProvider)

    def test_client_secret_mode(self) -> None:
        settings = _settings(
            directory_auth_mode="client_secret",
            azure_tenant_id="t",
            azure_client_id="c",
            azure_client_secret="s",
        )
        provider = ApplicationContainer(settings).create_directory_token_provider()
        assert isinstance(provider, ClientSecretTokenProvider)

    def test_creates_use_case(self) -> None:
        assert isinstance(ApplicationContainer(_settings()).create_check_use_case(), CheckExpiringCredentials)


class TestApplication:
    """Tests for Application run modes."""

    async def test_once_success_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        app = _app(_settings(), StubUseCase(), monkeypatch)
        assert await app.run() == 0

    async def test_fatal_auth_error_exits_one(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = _app(_settings(), StubUseCase(DirectoryAuthError("no identity")), monkeypatch)
        assert await app.run() == 1
        assert "no identity" in caplog.text

    async def test_send_failure_logs_provider_body(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        error = MailSendError("rejected", status_code=400, response_body='{"error": "invalid raw"}')
        app = _app(_settings(), StubUseCase(error), monkeypatch)
        assert await app.run() == 1
        assert "invalid raw" in caplog.text

    async def test_invalid_run_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        app = _app(_settings(run_mode="hourly"), StubUseCase(), monkeypatch)
        assert await app.run() == 1

    async def test_denied_applications_are_reported(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = _app(_settings(), StubUseCase(denied=["Payroll"]), monkeypatch)
        assert await app.run() == 0
        assert "Payroll" in caplog.text

    async def test_scheduled_mode_is_not_supported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Recurring runs come from the hosting timer, not an in-process loop."""
        app = _app(_settings(run_mode="scheduled"), StubUseCase(), monkeypatch)
        assert await app.run() == 1
