"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, get_spreadsheet_id
from core.errors import ConfigurationError
from core.sheets import resolve_source_path

router = APIRouter()


def check_data_source() -> str | None:
    """Return an error description, or None if the workbook is reachable."""
    try:
        path = resolve_source_path(get_spreadsheet_id())
    except ConfigurationError:
        return "Data source not configured"
    if not path.exists():
        return "Data source not found"
    return None


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    error = check_data_source()
    timestamp = datetime.now(timezone.utc).isoformat()

    if error is None:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            data_source_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                data_source_available=False,
                timestamp=timestamp,
                error=error,
            ).model_dump(),
        )
