"""Health check endpoint. Touches no dependency, so it answers even without a database."""

from fastapi import APIRouter

from docflow.core.config import get_settings
from docflow.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        version=settings.app_version,
        database="configured" if settings.database_url else "not_configured",
    )
