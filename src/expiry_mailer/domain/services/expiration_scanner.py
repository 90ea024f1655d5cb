"""Domain service classifying credentials against the alert window."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from ..entities import ApplicationCredentials, Finding, ScanResult
from ..exceptions import MissingExpirationError
from ..value_objects import ExpirationWindow

logger = logging.getLogger(__name__)


class ExpirationScanner:
    """Pure scanner turning fetched credentials into findings."""

    def __init__(self, window: ExpirationWindow | None = None) -> None:
        """Initialize scanner with the alert window."""
        self._window = window or ExpirationWindow()

    @property
    def window(self) -> ExpirationWindow:
        return self._window

    def scan(
        self,
        inventory: Iterable[ApplicationCredentials],
        now: datetime | None = None,
    ) -> ScanResult:
        """
        Scan every credential of every application.

        Args:
            inventory: Applications with their secrets and certificates, in
                directory enumeration order.
            now: Reference instant. Defaults to the current UTC time.

        Returns:
            ScanResult with findings in enumeration order, secrets before
            certificates within each application.
        """
        now = now or datetime.now(UTC)
        result = ScanResult(window=self._window, generated_at=now)

        for entry in inventory:
            result.applications_scanned += 1
            app = entry.application
            logger.debug("Scanning %s (%s)", app.display_name, app.app_id)

            for credential in entry:
                try:
                    days_left = credential.days_left(now)
                except MissingExpirationError as e:
                    logger.warning("Skipping credential: %s", e)
                    result.skipped_credentials += 1
                    continue

                if not self._window.contains(days_left):
                    continue

                result.findings.append(
                    Finding(
                        application_name=app.display_name,
                        application_id=app.app_id,
                        object_id=app.id,
                        kind=credential.kind,
                        expires_at=credential.expires_at_utc,
                        days_left=days_left,
                        credential_name=credential.display_name,
                        key_id=credential.key_id,
                    )
                )

        logger.info(
            "Scanned %d applications: %d findings, %d credentials skipped",
            result.applications_scanned,
            result.count,
            result.skipped_credentials,
        )
        return result
