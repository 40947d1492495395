"""
Health check endpoint schemas.

The health endpoint is PUBLIC (no authentication required) and returns
the intake counters of this process.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by the hosting platform's health probe and by operators checking
    that receipts are flowing.
    """

    status: str = Field(
        default="disconnected",
        description="Transport status as last reported ('connected' or 'disconnected')",
        examples=["connected"]
    )
    uptime: str = Field(..., description="Human readable uptime", examples=["1h 2m 3s"])
    uptime_seconds: int = Field(..., ge=0, description="Uptime in seconds")
    messages_received: int = Field(..., ge=0, description="Messages forwarded to /intake")
    messages_processed: int = Field(..., ge=0, description="Receipts recorded in the ledger")
    errors: int = Field(..., ge=0, description="Intakes that ended in error")
    reconnections: int = Field(..., ge=0, description="Transport reconnections reported")

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "status": "connected",
                "uptime": "1h 2m 3s",
                "uptime_seconds": 3723,
                "messages_received": 42,
                "messages_processed": 30,
                "errors": 1,
                "reconnections": 2
            }
        }
