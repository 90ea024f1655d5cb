"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class AuthenticationError(ApplicationError):
    """Raised when a bearer token cannot be obtained."""


class DirectoryAuthError(AuthenticationError):
    """Raised when authenticating to the directory API fails."""


class MailAuthError(AuthenticationError):
    """Raised when exchanging the mail provider refresh token fails."""


class DirectoryError(ApplicationError):
    """Raised when directory API operations fail."""


class DirectoryAccessDeniedError(DirectoryError):
    """Raised when the directory denies access to one application's credentials."""


class NotificationError(ApplicationError):
    """Raised when notification sending fails."""


class MailSendError(NotificationError):
    """Raised when the mail provider rejects a message."""

    def __init__(self, message: str, *, status_code: int | None = None, response_body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        base = super().__str__()
        if self.response_body:
            return f"{base}: {self.response_body}"
        return base


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
