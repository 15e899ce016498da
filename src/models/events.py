"""
Data models for task records and calendar events.

Raw records keep whatever columns the sheet has, so they stay plain dicts;
the calendar output has a fixed shape and is typed with TypedDict.
"""

from typing import Any, TypedDict

# Column header -> sanitized cell value
RawRecord = dict[str, Any]

# Stringified, trimmed identifier -> record
LookupMapping = dict[str, RawRecord]

# Raw task record plus the EnrichedFields keys
EnrichedEvent = dict[str, Any]


class EnrichedFields(TypedDict):
    """Display fields added to a task record by the enrichment step."""
    projectName: str
    projectStatus: str
    projectFolder: str
    taskTypeName: str
    taskStatusHebrew: str
    locationName: str
    taskManagerName: str
    projectManagerName: str
    backgroundColor: str
    textColor: str


class ExtendedProps(TypedDict):
    """Extra display properties shown in the event popup."""
    description: str
    status: str
    project: str
    user: str
    folderLink: str
    taskTypeName: str


class CalendarEvent(TypedDict):
    """Event object in the calendar widget schema."""
    id: str
    title: str
    start: str
    end: str | None
    allDay: bool
    backgroundColor: str
    textColor: str
    borderColor: str
    classNames: list[str]
    extendedProps: ExtendedProps
