"""Credential type value object."""

from enum import StrEnum, auto


class CredentialType(StrEnum):
    """Kind of credential attached to an application."""

    SECRET = auto()
    CERTIFICATE = auto()

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human-readable label."""
        match self:
            case CredentialType.SECRET:
                return "Secret"
            case CredentialType.CERTIFICATE:
                return "Certificate"

    @property
    def marker(self) -> str:
        """Marker shown next to the credential in reports."""
        match self:
            case CredentialType.SECRET:
                return "🔑"
            case CredentialType.CERTIFICATE:
                return "📜"

    @property
    def graph_property(self) -> str:
        """Name of the Graph application property holding this kind."""
        match self:
            case CredentialType.SECRET:
                return "passwordCredentials"
            case CredentialType.CERTIFICATE:
                return "keyCredentials"
