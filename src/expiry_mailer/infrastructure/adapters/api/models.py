"""API response models (no credential details exposed)."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime


class WindowResponse(BaseModel):
    """Configured alert window."""

    threshold_days: int
    grace_days: int


class StatisticsResponse(BaseModel):
    """Finding statistics (no details)."""

    applications_scanned: int = Field(description="Total applications scanned")
    applications_affected: int = Field(description="Applications with at least one finding")
    findings: int = Field(description="Credentials inside the alert window")
    urgent_count: int = Field(description="Findings with fewer than 7 days left")
    warning_count: int = Field(description="Remaining findings")
    expired_count: int = Field(description="Findings already expired")
    skipped_credentials: int = Field(description="Credentials without an expiration date")


class ReportResponse(BaseModel):
    """Scan result summary (no credential details)."""

    generated_at: datetime
    summary: str = Field(description="Human-readable summary")
    statistics: StatisticsResponse
    window: WindowResponse
    requires_notification: bool


class CheckResponse(BaseModel):
    """Response from triggering a check."""

    success: bool
    message: str
    report: ReportResponse | None = None
    notification_sent: bool = False
    denied_applications: int = 0
    dry_run: bool = False


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
