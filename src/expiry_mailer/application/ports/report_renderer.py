"""Port for report rendering."""

from dataclasses import dataclass
from typing import Protocol

from ...domain.entities import ScanResult


@dataclass(frozen=True, slots=True)
class RenderedReport:
    """Subject line and HTML body of a report."""

    subject: str
    body: str


class ReportRenderer(Protocol):
    """Port for turning a scan result into a message."""

    def render(self, result: ScanResult) -> RenderedReport:
        """Render subject and body for the given result."""
        ...
