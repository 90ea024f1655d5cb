"""Application use cases."""

from .check_expiring_credentials import CheckExpiringCredentials, CheckResult

__all__ = ["CheckExpiringCredentials", "CheckResult"]
