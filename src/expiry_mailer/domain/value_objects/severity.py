"""Severity value object."""

from enum import StrEnum, auto
from typing import Self

# Findings with fewer days left than this are urgent.
URGENT_DAYS = 7


class Severity(StrEnum):
    """Presentation severity of a finding."""

    URGENT = auto()
    WARNING = auto()

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_days_left(cls, days_left: int) -> Self:
        """Classify a signed day count."""
        return cls.URGENT if days_left < URGENT_DAYS else cls.WARNING

    @property
    def emoji(self) -> str:
        """Get emoji representation for this severity."""
        match self:
            case Severity.URGENT:
                return "🔴"
            case Severity.WARNING:
                return "🟡"

    @property
    def color_hex(self) -> str:
        """Get hex color code for this severity."""
        match self:
            case Severity.URGENT:
                return "#dc3545"
            case Severity.WARNING:
                return "#ffc107"
