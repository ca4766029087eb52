"""Health & Status: liveness probe with relay queue size.

Invariants:
    - GET / and GET /api/v1/health/ always return 200 while the process is up
    - queue_size counts live commands (pending, sent, or awaiting collection)
"""

from fastapi import APIRouter, Depends, status

from studio_bridge.api.dependencies import get_relay_queue
from studio_bridge.schemas.commands import HealthStatus
from studio_bridge.services.relay_queue import RelayQueue

SERVICE_NAME = "studio-bridge"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


@router.get("/")
async def root_status():
    """Banner for humans checking the server is up."""
    return {"status": "Roblox MCP bridge running"}


@router.get(
    "/api/v1/health/", status_code=status.HTTP_200_OK,
    response_model=HealthStatus,
)
async def health_check(relay: RelayQueue = Depends(get_relay_queue)):
    """Liveness probe. Reports the live relay queue size."""
    return HealthStatus(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        alive=True,
        queue_size=relay.size,
        pending=relay.pending_count,
    )
