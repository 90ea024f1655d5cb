"""Application ports - Interfaces for external adapters."""

from .directory_client import DirectoryClient
from .mail_sender import MailSender
from .report_renderer import RenderedReport, ReportRenderer
from .token_provider import AccessToken, TokenProvider

__all__ = [
    "AccessToken",
    "DirectoryClient",
    "MailSender",
    "RenderedReport",
    "ReportRenderer",
    "TokenProvider",
]
