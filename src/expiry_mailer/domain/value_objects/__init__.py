"""Domain value objects - Immutable objects defined by their attributes."""

from .credential_type import CredentialType
from .expiration_window import ExpirationWindow
from .severity import URGENT_DAYS, Severity

__all__ = [
    "URGENT_DAYS",
    "CredentialType",
    "ExpirationWindow",
    "Severity",
]
