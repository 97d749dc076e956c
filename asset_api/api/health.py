"""
Health and metrics endpoints.
None of them touch the ledger.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from asset_api.schemas.health import HealthResponse
from asset_api.services.metrics import get_metrics_collector

router = APIRouter()


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Service health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "service": request.app.state.settings.PROJECT_NAME,
    }


@router.get("/metrics")
async def metrics():
    """Request and ledger call metrics as JSON."""
    return get_metrics_collector().get_metrics()


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def metrics_prometheus():
    """
    Prometheus text exposition format endpoint.
    Compatible with Prometheus scraping.
    """
    return PlainTextResponse(
        content=get_metrics_collector().to_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
