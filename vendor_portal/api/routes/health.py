from fastapi import APIRouter, status
from pydantic import BaseModel

from vendor_portal import __version__
from vendor_portal.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Vendor Portal Adapter"


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns the liveness of the service. Does not call SAP."
)
async def get_health() -> HealthStatus:
    logger.debug("Health check requested")
    return HealthStatus(status="ok")
