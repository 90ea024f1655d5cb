"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class MissingExpirationError(DomainError):
    """Raised when a credential carries no expiration date."""


class InvalidWindowError(DomainError, ValueError):
    """Raised when the alert window is invalid."""
