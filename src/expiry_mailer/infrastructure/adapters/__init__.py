"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdDirectoryClient
from .identity import ClientSecretTokenProvider, ManagedIdentityTokenProvider
from .notifications import GmailNotificationSender, HtmlReportFormatter, RefreshTokenProvider

__all__ = [
    "ClientSecretTokenProvider",
    "EntraIdDirectoryClient",
    "GmailNotificationSender",
    "HtmlReportFormatter",
    "ManagedIdentityTokenProvider",
    "RefreshTokenProvider",
]
