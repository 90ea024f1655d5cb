"""Notification adapter implementations."""

from .gmail import GmailConfig, GmailNotificationSender, RefreshTokenProvider, encode_raw_message
from .report import HtmlReportFormatter

__all__ = [
    "GmailConfig",
    "GmailNotificationSender",
    "HtmlReportFormatter",
    "RefreshTokenProvider",
    "encode_raw_message",
]
