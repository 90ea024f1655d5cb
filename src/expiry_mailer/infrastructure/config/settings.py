"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...domain.value_objects import ExpirationWindow
from ..adapters.entra_id.graph_client import GraphClientConfig
from ..adapters.notifications.gmail import GmailConfig

AUTH_MODES = ("managed_identity", "client_secret")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Directory authentication
    directory_auth_mode: str = field(default_factory=lambda: _env_str("DIRECTORY_AUTH_MODE", "managed_identity"))
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"), repr=False)

    # Alert window
    threshold_days: int = field(default_factory=lambda: _env_int("THRESHOLD_DAYS", 30))
    grace_days: int = field(default_factory=lambda: _env_int("GRACE_DAYS", 10))

    # Mail
    mail_from: str = field(default_factory=lambda: _env_str("MAIL_FROM"))
    mail_to: str = field(default_factory=lambda: _env_str("MAIL_TO"))
    gmail_client_id: str = field(default_factory=lambda: _env_str("GMAIL_CLIENT_ID"))
    gmail_client_secret: str = field(default_factory=lambda: _env_str("GMAIL_CLIENT_SECRET"), repr=False)
    gmail_refresh_token: str = field(default_factory=lambda: _env_str("GMAIL_REFRESH_TOKEN"), repr=False)

    # Run configuration
    http_timeout_seconds: int = field(default_factory=lambda: _env_int("HTTP_TIMEOUT_SECONDS", 30))
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    dry_run: bool = field(default_factory=lambda: _env_bool("DRY_RUN"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def validate(self) -> None:
        """Validate required settings."""
        missing: list[str] = []

        if self.directory_auth_mode not in AUTH_MODES:
            msg = f"Invalid DIRECTORY_AUTH_MODE: {self.directory_auth_mode} (use {' or '.join(AUTH_MODES)})"
            raise ValueError(msg)

        if self.directory_auth_mode == "client_secret":
            if not self.azure_tenant_id:
                missing.append("AZURE_TENANT_ID")
            if not self.azure_client_id:
                missing.append("AZURE_CLIENT_ID")
            if not self.azure_client_secret:
                missing.append("AZURE_CLIENT_SECRET")

        if not self.dry_run:
            if not self.mail_from:
                missing.append("MAIL_FROM")
            if not self.mail_to:
                missing.append("MAIL_TO")
            if not self.gmail_client_id:
                missing.append("GMAIL_CLIENT_ID")
            if not self.gmail_client_secret:
                missing.append("GMAIL_CLIENT_SECRET")
            if not self.gmail_refresh_token:
                missing.append("GMAIL_REFRESH_TOKEN")

        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise ValueError(msg)

        # Raises InvalidWindowError (a ValueError) on negative bounds
        _ = self.window

    @cached_property
    def window(self) -> ExpirationWindow:
        """Get the alert window."""
        return ExpirationWindow(
            threshold_days=self.threshold_days,
            grace_days=self.grace_days,
        )

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(timeout=float(self.http_timeout_seconds))

    @cached_property
    def gmail_config(self) -> GmailConfig:
        """Get Gmail offline credential configuration."""
        return GmailConfig(
            client_id=self.gmail_client_id,
            client_secret=self.gmail_client_secret,
            refresh_token=self.gmail_refresh_token,
            timeout=float(self.http_timeout_seconds),
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
