from datetime import datetime, timezone

from fastapi import APIRouter

from miniice_proxy.core import config
from miniice_proxy.schemas.chat import HealthResponse

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        model=config.MINI_ICE_MODEL,
        service=config.SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
    )
