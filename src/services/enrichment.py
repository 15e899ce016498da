"""
Join task records with their reference tables and drop inactive ones.
"""

from dataclasses import dataclass, field
from typing import Any

from core.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_TEXT_COLOR,
    INACTIVE_PROJECT_STATUSES,
    INACTIVE_TASK_STATUSES,
)
from models.events import EnrichedEvent, EnrichedFields, LookupMapping, RawRecord

COLOR_HEX = {
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#008000",
    "black": "#000000",
    "white": "#FFFFFF",
    "orange": "#FFA500",
    "purple": "#800080",
    "yellow": "#FFFF00",
    "grey": "#808080",
    "gray": "#808080",
}


@dataclass
class SupportingData:
    """Lookup maps for every reference table, keyed by ID."""

    projects: LookupMapping = field(default_factory=dict)
    employees: LookupMapping = field(default_factory=dict)
    task_statuses: LookupMapping = field(default_factory=dict)
    task_types: LookupMapping = field(default_factory=dict)
    locations: LookupMapping = field(default_factory=dict)
    project_statuses: LookupMapping = field(default_factory=dict)


def resolve_color(color_name: Any, default_hex: str) -> str:
    """Translate a color name ("Red", " gray ") to its hex code."""
    if not color_name or not isinstance(color_name, str):
        return default_hex
    return COLOR_HEX.get(color_name.strip().lower(), default_hex)


def _text(value: Any) -> str:
    """Cell value as a string; empty cells become ""."""
    if value is None or value == "":
        return ""
    return str(value)


def _join(mapping: LookupMapping, foreign_key: Any) -> RawRecord:
    """Look up a foreign key; a blank key or missing target gives {}."""
    key = _text(foreign_key).strip()
    if not key:
        return {}
    return mapping.get(key) or {}


def _full_name(employee: RawRecord) -> str:
    return f"{_text(employee.get('fName'))} {_text(employee.get('sName'))}".strip()


def enrich_event(task: RawRecord, supporting: SupportingData) -> EnrichedEvent:
    """Return a copy of a task record with display fields resolved from joins."""
    project = _join(supporting.projects, task.get("Project"))
    project_status = _join(supporting.project_statuses, project.get("ProjectStatus"))
    task_type = _join(supporting.task_types, task.get("TaskType"))
    task_status = _join(supporting.task_statuses, task.get("TaskStatus"))
    location = _join(supporting.locations, project.get("Location"))
    task_manager = _join(supporting.employees, task.get("TaskManager"))
    project_manager = _join(supporting.employees, project.get("ProjectManager"))

    fields: EnrichedFields = {
        "projectName": _text(project.get("name")),
        "projectStatus": _text(project_status.get("Status")),
        "projectFolder": _text(project.get("folder")),
        "taskTypeName": _text(task_type.get("hebrew") or task.get("Task")).strip(),
        "taskStatusHebrew": _text(
            task_status.get("hebrew") or task_status.get("TaskStatus")
        ).strip(),
        "locationName": _text(location.get("name")),
        "taskManagerName": _full_name(task_manager),
        "projectManagerName": _full_name(project_manager),
        "backgroundColor": resolve_color(task_status.get("color"), DEFAULT_BACKGROUND_COLOR),
        "textColor": resolve_color(task_type.get("color"), DEFAULT_TEXT_COLOR),
    }
    return {**task, **fields}


def is_active(event: EnrichedEvent) -> bool:
    """False for cancelled/tentative projects and cancelled/postponed tasks."""
    project_status = event["projectStatus"].strip().lower()
    task_status = event["taskStatusHebrew"].strip().lower()
    if project_status in INACTIVE_PROJECT_STATUSES:
        return False
    if task_status in INACTIVE_TASK_STATUSES:
        return False
    return True


def enrich_and_filter(
    tasks: list[RawRecord] | None, supporting: SupportingData | None
) -> list[EnrichedEvent]:
    """
    Enrich every task record and keep only the active ones.

    Input order is preserved.
    """
    if not tasks or supporting is None:
        return []

    enriched = [enrich_event(task, supporting) for task in tasks]
    return [event for event in enriched if is_active(event)]
