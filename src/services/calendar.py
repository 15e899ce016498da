"""
Calendar event building for the operations calendar.

Turns enriched task records into calendar widget events and exposes the
single query the API serves: get_calendar_events().
"""

import logging
import math
from datetime import date, datetime, time
from typing import Any

from core.auth import is_authorized
from core.cache import CacheStore, get_cache_store
from core.config import (
    CALENDAR_EVENT_CLASS,
    CALENDAR_EVENT_TYPE,
    LOOKUP_TABLES,
    NO_PROJECT,
    STATUS_NOT_DEFINED,
    TASK_TABLE,
    TITLE_SEPARATOR,
    UNASSIGNED,
    get_spreadsheet_id,
)
from core.errors import OperationFailedError
from core.sheets import TableSource, open_table_source
from models.events import CalendarEvent, EnrichedEvent
from services.enrichment import SupportingData, enrich_and_filter
from services.tables import get_lookup, read_table

log = logging.getLogger(__name__)

# Non-ISO date layouts seen in hand-edited sheets
DATE_FORMATS = ["%m/%d/%Y", "%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S", "%Y/%m/%d"]
TIME_FORMATS = ["%H:%M", "%H:%M:%S", "%I:%M %p"]


# =============================================================================
# DATE / TIME PARSING
# =============================================================================


def _to_local(value: datetime) -> datetime:
    """Aware datetimes are converted to naive local time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _from_epoch_ms(value: float) -> datetime | None:
    if math.isnan(value):
        return None
    try:
        return datetime.fromtimestamp(value / 1000)
    except (OverflowError, OSError, ValueError):
        return None


def parse_date_value(value: Any) -> datetime | None:
    """
    Parse a sheet date cell into a naive local datetime.

    Accepts datetime/date objects, ISO strings, MM/DD/YYYY strings and
    numbers as epoch milliseconds. Returns None if the value can't be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return _to_local(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_time_value(value: Any) -> tuple[int, int] | None:
    """Extract (hour, minute) from a sheet time cell, or None."""
    if isinstance(value, time):
        return value.hour, value.minute

    if isinstance(value, str):
        text = value.strip().upper()
        for fmt in TIME_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                return parsed.hour, parsed.minute
            except ValueError:
                continue

    parsed = parse_date_value(value)
    if parsed is None:
        return None
    return parsed.hour, parsed.minute


def format_date_time(date_part: Any, time_part: Any) -> str | None:
    """
    Combine a date cell and an optional time cell into an ISO 8601 string.

    Returns "YYYY-MM-DDTHH:MM:00" when a valid time is present (seconds are
    always zeroed), "YYYY-MM-DD" when it isn't, and None when the date is
    missing or invalid.
    """
    if not date_part:
        return None

    parsed = parse_date_value(date_part)
    if parsed is None:
        return None

    if time_part:
        hour_minute = parse_time_value(time_part)
        if hour_minute is not None:
            hour, minute = hour_minute
            return datetime(parsed.year, parsed.month, parsed.day, hour, minute).isoformat()

    return parsed.date().isoformat()


# =============================================================================
# EVENT TRANSFORMATION
# =============================================================================


def build_event_title(event: EnrichedEvent) -> str:
    """
    Build the event title.

    Calendar events show just the project name; tasks show
    "type - project - location - task manager", skipping empty parts.
    """
    if event.get("taskTypeName") == CALENDAR_EVENT_TYPE:
        return event.get("projectName") or ""

    parts = [
        event.get("taskTypeName"),
        event.get("projectName"),
        event.get("locationName"),
        event.get("taskManagerName"),
    ]
    return TITLE_SEPARATOR.join(part for part in parts if part)


def to_calendar_event(event: EnrichedEvent) -> CalendarEvent | None:
    """Convert one enriched record; None if it has no valid start date."""
    start = format_date_time(event.get("dateIn"), event.get("timeIn"))
    if start is None:
        return None
    end = format_date_time(event.get("dateOut"), event.get("timeOut"))

    is_calendar_event = event.get("taskTypeName") == CALENDAR_EVENT_TYPE

    return {
        "id": str(event.get("ID", "")),
        "title": build_event_title(event),
        "start": start,
        "end": end,
        "allDay": is_calendar_event or not event.get("timeIn"),
        "backgroundColor": event["backgroundColor"],
        "textColor": event["textColor"],
        "borderColor": event["backgroundColor"],
        "classNames": [CALENDAR_EVENT_CLASS] if is_calendar_event else [],
        "extendedProps": {
            "description": str(event.get("TaskNotes") or ""),
            "status": event.get("taskStatusHebrew") or STATUS_NOT_DEFINED,
            "project": event.get("projectName") or NO_PROJECT,
            "user": event.get("projectManagerName") or UNASSIGNED,
            "folderLink": event.get("projectFolder") or "",
            "taskTypeName": event.get("taskTypeName") or "",
        },
    }


def transform_events(enriched_events: list[EnrichedEvent] | None) -> list[CalendarEvent]:
    """Convert enriched records to calendar events, dropping undated ones."""
    if not enriched_events:
        return []

    calendar_events = []
    for event in enriched_events:
        calendar_event = to_calendar_event(event)
        if calendar_event is not None:
            calendar_events.append(calendar_event)
    return calendar_events


# =============================================================================
# ENTRY POINT
# =============================================================================


def load_supporting_data(source: TableSource, cache: CacheStore) -> SupportingData:
    """Fetch every reference table as a lookup map."""
    lookups = {}
    for attribute, table_name, key_field, use_cache in LOOKUP_TABLES:
        lookups[attribute] = get_lookup(
            table_name, key_field, use_cache, source=source, cache=cache
        )
    return SupportingData(**lookups)


def get_calendar_events(
    user_email: str | None,
    *,
    source: TableSource | None = None,
    cache: CacheStore | None = None,
) -> list[CalendarEvent]:
    """
    Return all active calendar events for an authorized user.

    Unauthorized users get an empty list and no data is read.

    Raises:
        OperationFailedError: On any internal failure (details are only logged)
    """
    if not is_authorized(user_email):
        log.warning("Unauthorized attempt to fetch calendar events")
        return []

    try:
        if source is None:
            source = open_table_source(get_spreadsheet_id())
        if cache is None:
            cache = get_cache_store()

        tasks = read_table(TASK_TABLE, source)
        supporting = load_supporting_data(source, cache)
        enriched = enrich_and_filter(tasks, supporting)
        events = transform_events(enriched)
    except Exception:
        log.exception("Error in get_calendar_events")
        raise OperationFailedError() from None

    log.info("Returning %d calendar events (%d task records)", len(events), len(tasks))
    return events
