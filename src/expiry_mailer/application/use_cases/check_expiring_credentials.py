"""Use case for checking and reporting expiring credentials."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ...domain.entities import ApplicationCredentials, ScanResult
from ...domain.services import ExpirationScanner
from ...domain.value_objects import CredentialType, ExpirationWindow
from ..exceptions import DirectoryAccessDeniedError
from ..ports import DirectoryClient, MailSender, ReportRenderer, TokenProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of the credential check use case."""

    result: ScanResult
    notification_sent: bool
    dry_run: bool
    denied_applications: list[str] = field(default_factory=list)


class CheckExpiringCredentials:
    """
    Use case for checking expiring credentials and mailing one report.

    Runs strictly sequentially: directory authentication, per-application
    credential fetches, scan, mail authentication, one send.
    """

    def __init__(
        self,
        directory: DirectoryClient,
        renderer: ReportRenderer,
        mail_sender: MailSender,
        mail_token_provider: TokenProvider,
        *,
        sender: str,
        recipient: str,
        window: ExpirationWindow | None = None,
        dry_run: bool = False,
    ) -> None:
        """
        Initialize the use case.

        Args:
            directory: Adapter for reading applications and credentials.
            renderer: Turns the scan result into subject and body.
            mail_sender: Adapter delivering the message.
            mail_token_provider: Supplies the mail provider bearer token.
            sender: From address.
            recipient: To address(es), comma-separated.
            window: Alert window; defaults to 30 days ahead, 10 days back.
            dry_run: If True, log the report instead of sending it.
        """
        self._directory = directory
        self._renderer = renderer
        self._mail_sender = mail_sender
        self._mail_token_provider = mail_token_provider
        self._sender = sender
        self._recipient = recipient
        self._scanner = ExpirationScanner(window)
        self._dry_run = dry_run

    async def execute(self, now: datetime | None = None) -> CheckResult:
        """
        Execute the credential check use case.

        Raises:
            DirectoryAuthError: If the directory cannot be authenticated to.
            DirectoryError: If enumeration fails outside the per-application
                access tolerance.
            MailAuthError: If the mail token exchange fails.
            MailSendError: If the provider rejects the message.
        """
        logger.info("Starting credential expiration check...")

        await self._directory.authenticate()
        inventory, denied = await self._collect_inventory()

        result = self._scanner.scan(inventory, now)
        logger.info("Analysis complete: %s", result.get_summary())

        if result.is_empty:
            logger.info("No credentials require notification")
            return CheckResult(result=result, notification_sent=False, dry_run=self._dry_run, denied_applications=denied)

        report = self._renderer.render(result)

        if self._dry_run:
            logger.info("DRY RUN: Would send '%s' to %s", report.subject, self._recipient)
            self._log_dry_run_report(result)
            return CheckResult(result=result, notification_sent=False, dry_run=True, denied_applications=denied)

        token = await self._mail_token_provider.get_token()
        await self._mail_sender.send(self._sender, self._recipient, report.subject, report.body, token)
        logger.info("Report with %d findings sent to %s", result.count, self._recipient)

        return CheckResult(result=result, notification_sent=True, dry_run=False, denied_applications=denied)

    async def _collect_inventory(self) -> tuple[list[ApplicationCredentials], list[str]]:
        """Fetch secrets then certificates for every application, one at a time."""
        inventory: list[ApplicationCredentials] = []
        denied: list[str] = []

        async for application in self._directory.list_applications():
            entry = ApplicationCredentials(application)
            try:
                entry.secrets = await self._directory.list_credentials(application, CredentialType.SECRET)
                entry.certificates = await self._directory.list_credentials(
                    application, CredentialType.CERTIFICATE
                )
            except DirectoryAccessDeniedError as e:
                logger.warning("Access denied for %s, treating as no credentials: %s", application.display_name, e)
                entry.secrets = []
                entry.certificates = []
                denied.append(application.display_name)
            inventory.append(entry)

        logger.info(
            "Retrieved credentials for %d applications (%d denied)",
            len(inventory),
            len(denied),
        )
        return inventory, denied

    def _log_dry_run_report(self, result: ScanResult) -> None:
        """Log result details in dry run mode."""
        logger.info("  Summary: %s", result.get_summary())
        logger.info("  Applications affected: %d", result.affected_applications_count)
        for finding in result.findings:
            logger.info(
                "  [%s] %s - %s: %d days",
                finding.severity,
                finding.application_name,
                finding.kind.label,
                finding.days_left,
            )
