"""API Pydantic models."""

from .responses import (
    CalendarEventResponse,
    ErrorCodes,
    ErrorResponse,
    ExtendedPropsResponse,
    HealthResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "CalendarEventResponse",
    "ExtendedPropsResponse",
]
