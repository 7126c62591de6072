from datetime import datetime, timezone

from fastapi import APIRouter

from s3du import __version__
from s3du.core.settings import get_settings
from s3du.models import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app=settings.app_name,
        version=__version__,
        backend=settings.backend,
        region=settings.region,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
