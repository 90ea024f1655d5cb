#!/usr/bin/env python3
"""
Entra ID Credential Expiry Mailer

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from . import __version__
from .application.exceptions import ApplicationError, MailSendError
from .application.use_cases import CheckExpiringCredentials
from .infrastructure.adapters import (
    ClientSecretTokenProvider,
    EntraIdDirectoryClient,
    GmailNotificationSender,
    HtmlReportFormatter,
    ManagedIdentityTokenProvider,
    RefreshTokenProvider,
)
from .infrastructure.config import Settings, load_settings

if TYPE_CHECKING:
    from .application.ports import TokenProvider
    from .application.use_cases import CheckResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_directory_token_provider(self) -> TokenProvider:
        """Create the Graph token provider for the configured auth mode."""
        if self._settings.directory_auth_mode == "client_secret":
            return ClientSecretTokenProvider(
                tenant_id=self._settings.azure_tenant_id,
                client_id=self._settings.azure_client_id,
                client_secret=self._settings.azure_client_secret,
            )
        return ManagedIdentityTokenProvider(client_id=self._settings.azure_client_id)

    def create_directory_client(self) -> EntraIdDirectoryClient:
        """Create the directory adapter."""
        return EntraIdDirectoryClient(
            self.create_directory_token_provider(),
            self._settings.graph_config,
        )

    def create_check_use_case(self) -> CheckExpiringCredentials:
        """Create the main use case with all dependencies."""
        gmail_config = self._settings.gmail_config
        mail_sender = GmailNotificationSender(timeout=gmail_config.timeout)

        return CheckExpiringCredentials(
            directory=self.create_directory_client(),
            renderer=HtmlReportFormatter(),
            mail_sender=mail_sender,
            mail_token_provider=RefreshTokenProvider(mail_sender, gmail_config),
            sender=self._settings.mail_from,
            recipient=self._settings.mail_to,
            window=self._settings.window,
            dry_run=self._settings.dry_run,
        )


class Application:
    """
    Process-level driver around the check use case.

    A run is either one check (the hosting timer decides when the next one
    happens) or the HTTP API, where checks are triggered on request.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._container = ApplicationContainer(settings)

    async def run_once(self) -> CheckResult:
        """Execute a single credential check."""
        use_case = self._container.create_check_use_case()
        return await use_case.execute()

    async def run_guarded(self) -> bool:
        """Run once, logging fatal errors instead of raising them."""
        try:
            outcome = await self.run_once()
        except MailSendError as e:
            logger.error("Sending report failed (HTTP %s): %s", e.status_code, e.response_body or e)
            return False
        except ApplicationError as e:
            logger.error("Credential check aborted: %s", e)
            return False

        if outcome.denied_applications:
            logger.warning(
                "Credentials of %d application(s) were not readable: %s",
                len(outcome.denied_applications),
                ", ".join(outcome.denied_applications),
            )
        return True

    async def run_api(self) -> None:
        """Serve the HTTP API until the server is stopped."""
        import uvicorn

        from .infrastructure.adapters.api import create_app

        logger.info(
            "Starting API server on %s:%d",
            self._settings.api_host,
            self._settings.api_port,
        )
        config = uvicorn.Config(
            create_app(check_func=self.run_once, version=__version__),
            host=self._settings.api_host,
            port=self._settings.api_port,
            log_level=self._settings.log_level.lower(),
        )
        await uvicorn.Server(config).serve()

    async def run(self) -> int:
        """
        Run the configured mode and return the process exit code.

        ``API_ENABLED`` wins over ``RUN_MODE``. The only other mode is
        ``once``: recurring checks are left to the hosting timer (cron job,
        Functions timer trigger, Kubernetes CronJob).
        """
        if self._settings.api_enabled:
            await self.run_api()
            return 0

        if self._settings.run_mode.lower() != "once":
            logger.error(
                "Invalid RUN_MODE: %s (use 'once' or set API_ENABLED=true)",
                self._settings.run_mode,
            )
            return 1

        logger.info("Running in single-execution mode")
        return 0 if await self.run_guarded() else 1


async def async_main() -> int:
    """Async entry point."""
    try:
        logger.info("Entra ID Credential Expiry Mailer starting...")

        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        app = Application(settings)
        return await app.run()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
