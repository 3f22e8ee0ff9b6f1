"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.models import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])

HEALTH_MESSAGE = "Portfolio API is running!"


@router.get("", response_model=HealthResponse)
async def health():
    """Liveness check. Does not touch the record store."""
    return HealthResponse(
        message=HEALTH_MESSAGE,
        timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    )
