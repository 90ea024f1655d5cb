"""Scan result aggregate root."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..value_objects import ExpirationWindow, Severity
from .finding import Finding


@dataclass(slots=True)
class ScanResult:
    """Ordered findings of one scan plus counters for reporting."""

    findings: list[Finding] = field(default_factory=list)
    applications_scanned: int = 0
    skipped_credentials: int = 0
    window: ExpirationWindow = field(default_factory=ExpirationWindow)
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def count(self) -> int:
        """Total number of findings."""
        return len(self.findings)

    @property
    def is_empty(self) -> bool:
        return not self.findings

    @property
    def urgent(self) -> list[Finding]:
        """Findings with fewer than seven days left."""
        return [f for f in self.findings if f.severity is Severity.URGENT]

    @property
    def warning(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.WARNING]

    @property
    def expired_count(self) -> int:
        """Count of findings that have already expired."""
        return sum(1 for f in self.findings if f.is_expired)

    @property
    def affected_applications_count(self) -> int:
        """Count of unique applications with at least one finding."""
        return len({f.object_id for f in self.findings})

    def get_summary(self) -> str:
        """Generate a human-readable summary of the result."""
        if self.is_empty:
            return f"No expiring credentials across {self.applications_scanned} applications"

        parts: list[str] = []
        if self.expired_count:
            parts.append(f"{self.expired_count} expired")
        if self.urgent:
            parts.append(f"{len(self.urgent)} urgent")
        if self.warning:
            parts.append(f"{len(self.warning)} warning")

        return f"{self.count} credentials requiring attention: {', '.join(parts)}"
