"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    data_source_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ExtendedPropsResponse(BaseModel):
    """Event popup properties."""

    description: str
    status: str
    project: str
    user: str
    folderLink: str
    taskTypeName: str


class CalendarEventResponse(BaseModel):
    """Calendar widget event (FullCalendar event object)."""

    id: str
    title: str
    start: str  # YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS
    end: str | None
    allDay: bool
    backgroundColor: str
    textColor: str
    borderColor: str
    classNames: list[str]
    extendedProps: ExtendedPropsResponse


class ErrorCodes:
    """Error code constants."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
