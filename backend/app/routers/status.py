from fastapi import APIRouter

from app.config import settings
from app.models.base import utc_now
from app.schemas.status import StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status():
    return StatusResponse(
        status="operational",
        version=settings.api_version,
        timestamp=utc_now().isoformat(),
        environment=settings.environment,
        message="AIHL Game Day API is running",
    )
