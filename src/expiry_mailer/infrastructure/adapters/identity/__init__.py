"""Bearer token providers for the directory API."""

from .msal_providers import ClientSecretTokenProvider, ManagedIdentityTokenProvider

__all__ = [
    "ClientSecretTokenProvider",
    "ManagedIdentityTokenProvider",
]
