"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from ....application.exceptions import ApplicationError
from .models import (
    CheckResponse,
    ErrorResponse,
    HealthResponse,
    ReportResponse,
    StatisticsResponse,
    WindowResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Coroutine

    from ....application.use_cases import CheckResult
    from ....domain.entities import ScanResult

logger = logging.getLogger(__name__)


def _result_to_response(result: ScanResult) -> ReportResponse:
    """Convert scan result to API response (no credential details)."""
    return ReportResponse(
        generated_at=result.generated_at,
        summary=result.get_summary(),
        statistics=StatisticsResponse(
            applications_scanned=result.applications_scanned,
            applications_affected=result.affected_applications_count,
            findings=result.count,
            urgent_count=len(result.urgent),
            warning_count=len(result.warning),
            expired_count=result.expired_count,
            skipped_credentials=result.skipped_credentials,
        ),
        window=WindowResponse(
            threshold_days=result.window.threshold_days,
            grace_days=result.window.grace_days,
        ),
        requires_notification=not result.is_empty,
    )


class ApiState:
    """Shared state for API endpoints."""

    def __init__(
        self,
        check_func: Callable[[], Coroutine[None, None, CheckResult]],
        version: str = "1.0.0",
    ) -> None:
        """Initialize API state."""
        self.check_func = check_func
        self.version = version
        self.last_result: ScanResult | None = None
        self.last_check_at: datetime | None = None
        self.check_lock = asyncio.Lock()


def create_app(
    check_func: Callable[[], Coroutine[None, None, CheckResult]],
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        check_func: Async function to execute credential check.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """
    state = ApiState(check_func=check_func, version=version)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("API server starting...")
        yield
        logger.info("API server shutting down...")

    app = FastAPI(
        title="Entra ID Credential Expiry API",
        description="Scan Entra ID application secrets and certificates for expiration "
        "and mail a report. **No credential details are exposed through this API.**",
        version=version,
        lifespan=lifespan,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"], summary="Health check")
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=state.version,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/api/v1/report",
        response_model=ReportResponse,
        tags=["Reports"],
        summary="Get latest report",
        responses={
            404: {"model": ErrorResponse, "description": "No report available"},
        },
    )
    async def get_report() -> ReportResponse:
        if state.last_result is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No report available. Trigger a check first using POST /api/v1/check",
            )
        return _result_to_response(state.last_result)

    @app.post(
        "/api/v1/check",
        response_model=CheckResponse,
        tags=["Operations"],
        summary="Trigger credential check",
        responses={
            409: {"model": ErrorResponse, "description": "A check is already running"},
            502: {"model": ErrorResponse, "description": "Directory or mail provider failure"},
        },
    )
    async def trigger_check() -> CheckResponse:
        if state.check_lock.locked():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A credential check is already running",
            )

        async with state.check_lock:
            logger.info("API: Triggering credential check...")
            try:
                outcome = await state.check_func()
            except ApplicationError as e:
                logger.error("API: Credential check failed: %s", e)
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail=f"Credential check failed: {e}",
                ) from e

            state.last_result = outcome.result
            state.last_check_at = datetime.now(UTC)

        return CheckResponse(
            success=True,
            message="Report sent" if outcome.notification_sent else "Check completed, no report sent",
            report=_result_to_response(outcome.result),
            notification_sent=outcome.notification_sent,
            denied_applications=len(outcome.denied_applications),
            dry_run=outcome.dry_run,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception in API")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app
