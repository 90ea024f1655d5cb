"""Domain entities - Objects with identity and lifecycle."""

from .application import Application, ApplicationCredentials
from .credential import Credential
from .finding import Finding
from .scan_result import ScanResult

__all__ = [
    "Application",
    "ApplicationCredentials",
    "Credential",
    "Finding",
    "ScanResult",
]
