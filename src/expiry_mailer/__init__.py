"""Entra ID credential expiry mailer."""

__version__ = "1.0.0"
