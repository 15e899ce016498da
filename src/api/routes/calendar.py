"""Calendar events endpoint."""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_cache, get_user_email
from api.logging import RequestLog, log_request
from api.models.responses import CalendarEventResponse, ErrorCodes
from core.auth import is_authorized
from core.cache import CacheStore
from core.errors import OperationFailedError
from services.calendar import get_calendar_events

log = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.get("/calendar/events", response_model=list[CalendarEventResponse])
async def calendar_events_endpoint(
    request: Request,
    user_email: str | None = Depends(get_user_email),
    cache: CacheStore = Depends(get_cache),
):
    """
    Return all active calendar events.

    Unauthorized callers receive an empty list rather than an error.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/calendar/events",
        method="GET",
        client_ip=get_client_ip(request),
        authorized=is_authorized(user_email),
    )

    try:
        # The pipeline does blocking file I/O
        events = await asyncio.to_thread(get_calendar_events, user_email, cache=cache)

        request_log.status_code = 200
        request_log.events_returned = len(events)
        return events

    except OperationFailedError as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": str(e),
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            log.warning("Could not write request log: %s", e)
