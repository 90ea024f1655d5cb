"""Port for bearer token acquisition - driven/secondary port."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class AccessToken:
    """A short-lived bearer token."""

    token: str
    expires_at: datetime | None = None

    def __repr__(self) -> str:
        return f"AccessToken(token=<redacted>, expires_at={self.expires_at!r})"

    @property
    def is_expired(self) -> bool:
        """Check whether the token has passed its expiry."""
        return self.expires_at is not None and datetime.now(UTC) >= self.expires_at

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class TokenProvider(Protocol):
    """
    Port for obtaining bearer tokens.

    Implementations cover ambient workload identity, client credentials and
    offline refresh-token exchange, so tests can substitute fakes.
    """

    async def get_token(self) -> AccessToken:
        """
        Obtain a bearer token.

        Raises:
            AuthenticationError: If no token can be obtained.
        """
        ...
