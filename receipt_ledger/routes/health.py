"""
Health check routes for the Receipt Ledger backend.

These endpoints are PUBLIC (no authentication required). ``GET /health``
reports uptime and intake counters; the transport process reports its
connection state and reconnections through the two POST endpoints so they
show up in the same snapshot.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from receipt_ledger.config import settings
from receipt_ledger.schemas.health import HealthResponse
from receipt_ledger.services.metrics import IntakeMetrics, get_metrics
from receipt_ledger.utils.logging import get_logger

logger = get_logger(__name__, settings.LOG_LEVEL)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


class ConnectionUpdate(BaseModel):
    """Transport connection state reported by the chat transport process."""
    connected: bool = Field(..., description="Whether the chat session is open")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Returns uptime and intake counters for monitoring."
    ),
    status_code=200,
)
async def health_check(
    metrics: Annotated[IntakeMetrics, Depends(get_metrics)],
) -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "connected",
            "uptime": "0h 5m 12s",
            "uptime_seconds": 312,
            "messages_received": 4,
            "messages_processed": 3,
            "errors": 0,
            "reconnections": 0
        }
    """
    logger.debug("Health check endpoint called")
    return HealthResponse(**metrics.snapshot())


@router.post("/health/reconnections", response_model=HealthResponse)
async def report_reconnection(
    metrics: Annotated[IntakeMetrics, Depends(get_metrics)],
) -> HealthResponse:
    """Count one transport reconnection."""
    metrics.record_reconnection()
    logger.warning(f"Transport reconnection reported (total={metrics.reconnections})")
    return HealthResponse(**metrics.snapshot())


@router.post("/health/connection", response_model=HealthResponse)
async def report_connection(
    update: ConnectionUpdate,
    metrics: Annotated[IntakeMetrics, Depends(get_metrics)],
) -> HealthResponse:
    """Record whether the transport session is currently open."""
    metrics.connected = update.connected
    logger.info(f"Transport connection state: connected={update.connected}")
    return HealthResponse(**metrics.snapshot())
