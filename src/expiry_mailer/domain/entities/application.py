"""Application entity representing an Entra ID app registration."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from .credential import Credential


@dataclass(frozen=True, slots=True)
class Application:
    """An Entra ID application registration."""

    id: str
    display_name: str
    app_id: str


@dataclass(slots=True)
class ApplicationCredentials:
    """An application together with the credentials fetched for it."""

    application: Application
    secrets: list[Credential] = field(default_factory=list)
    certificates: list[Credential] = field(default_factory=list)

    def __iter__(self) -> Iterator[Credential]:
        """Iterate secrets first, then certificates."""
        yield from self.secrets
        yield from self.certificates
