"""Expiration window value object."""

from dataclasses import dataclass

from ..exceptions import InvalidWindowError


@dataclass(frozen=True, slots=True)
class ExpirationWindow:
    """
    Inclusive alert window in days relative to now.

    A credential alerts when ``-grace_days <= days_left <= threshold_days``.
    """

    threshold_days: int = 30
    grace_days: int = 10

    def __post_init__(self) -> None:
        """Validate both bounds are non-negative."""
        if self.threshold_days < 0 or self.grace_days < 0:
            msg = (
                f"Window bounds must be non-negative: threshold({self.threshold_days}), "
                f"grace({self.grace_days})"
            )
            raise InvalidWindowError(msg)

    def contains(self, days_left: int) -> bool:
        """Check whether a signed day count falls inside the window."""
        return -self.grace_days <= days_left <= self.threshold_days
