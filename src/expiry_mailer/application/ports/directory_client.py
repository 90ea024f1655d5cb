"""Port for the directory API - driven/secondary port."""

from collections.abc import AsyncIterator
from typing import Protocol

from ...domain.entities import Application, Credential
from ...domain.value_objects import CredentialType
from .token_provider import AccessToken


class DirectoryClient(Protocol):
    """
    Port for reading application registrations and their credentials.

    This is a driven (secondary) port that defines how the application
    enumerates identities in the directory service.
    """

    async def authenticate(self) -> AccessToken:
        """
        Obtain a bearer token for the directory API.

        Raises:
            DirectoryAuthError: If authentication fails.
        """
        ...

    def list_applications(self) -> AsyncIterator[Application]:
        """
        Lazily enumerate every application, following continuation links.

        Each call restarts from the first page.
        """
        ...

    async def list_credentials(
        self, application: Application, kind: CredentialType
    ) -> list[Credential]:
        """
        Fetch one kind of credential for an application.

        Raises:
            DirectoryAccessDeniedError: If access to this application is denied.
            DirectoryError: For any other failure.
        """
        ...
