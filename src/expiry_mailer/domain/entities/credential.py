"""Credential entity representing a secret or certificate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..exceptions import MissingExpirationError
from ..value_objects import CredentialType

if TYPE_CHECKING:
    from .application import Application


@dataclass(frozen=True, slots=True)
class Credential:
    """A credential (secret or certificate) belonging to an application."""

    kind: CredentialType
    expires_at: datetime | None
    application: Application
    key_id: str = ""
    display_name: str | None = None

    @property
    def expires_at_utc(self) -> datetime | None:
        """Expiration normalized to UTC."""
        if self.expires_at is None:
            return None
        return _as_utc(self.expires_at).astimezone(UTC)

    def days_left(self, now: datetime) -> int:
        """
        Whole days until expiration, negative once expired.

        Fractional days truncate toward the earlier day, so a credential
        that expired one hour ago reports -1.

        Raises:
            MissingExpirationError: If the credential has no expiration date.
        """
        if self.expires_at is None:
            msg = (
                f"{self.kind.label} {self.key_id or '<unknown>'} of "
                f"{self.application.display_name} has no expiration date"
            )
            raise MissingExpirationError(msg)
        return (_as_utc(self.expires_at) - _as_utc(now)).days


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)
