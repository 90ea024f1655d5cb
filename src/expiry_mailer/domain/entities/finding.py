"""Finding entity - a credential inside the alert window."""

from dataclasses import dataclass
from datetime import datetime

from ..value_objects import CredentialType, Severity


@dataclass(frozen=True, slots=True)
class Finding:
    """A credential flagged for notification."""

    application_name: str
    application_id: str
    object_id: str
    kind: CredentialType
    expires_at: datetime
    days_left: int
    credential_name: str | None = None
    key_id: str = ""

    @property
    def severity(self) -> Severity:
        """Presentation severity derived from days left."""
        return Severity.for_days_left(self.days_left)

    @property
    def is_urgent(self) -> bool:
        return self.severity is Severity.URGENT

    @property
    def is_expired(self) -> bool:
        return self.days_left < 0

    @property
    def portal_url(self) -> str:
        """URL to manage this app's credentials in Azure Portal."""
        return (
            f"https://portal.azure.com/#view/Microsoft_AAD_RegisteredApps"
            f"/ApplicationMenuBlade/~/Credentials/appId/{self.application_id}"
        )
