"""Tests for joining task records with reference tables."""

import pytest

from core.config import DEFAULT_BACKGROUND_COLOR, DEFAULT_TEXT_COLOR
from models.events import EnrichedFields
from services.enrichment import SupportingData, enrich_and_filter, enrich_event, resolve_color
from services.tables import read_table


# =============================================================================
# COLORS
# =============================================================================


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", "#FF0000"),
        ("Blue", "#0000FF"),
        (" GREEN ", "#008000"),
        ("black", "#000000"),
        ("white", "#FFFFFF"),
        ("orange", "#FFA500"),
        ("Purple", "#800080"),
        ("yellow\n", "#FFFF00"),
        ("grey", "#808080"),
        ("GRAY", "#808080"),
    ],
)
def test_known_colors_resolve(name, expected):
    assert resolve_color(name, "#123456") == expected


@pytest.mark.parametrize("name", ["", None, "teal", "#FF0000", 3, ["red"]])
def test_unknown_colors_return_default(name):
    assert resolve_color(name, "#123456") == "#123456"


# =============================================================================
# JOINS
# =============================================================================


def test_task_is_enriched_from_all_reference_tables(supporting_data):
    task = {"ID": "T1", "Project": "P1", "TaskType": "TT1", "TaskStatus": "TS1", "TaskManager": "E2"}
    event = enrich_event(task, supporting_data)

    assert event["projectName"] == "Hamlet"
    assert event["projectStatus"] == "פעיל"
    assert event["projectFolder"] == "https://drive.example/p1"
    assert event["taskTypeName"] == "הקמה"
    assert event["taskStatusHebrew"] == "מאושר"
    assert event["locationName"] == "Habima"
    assert event["taskManagerName"] == "Noa"
    assert event["projectManagerName"] == "Dana Levi"
    assert event["backgroundColor"] == "#008000"
    assert event["textColor"] == "#000000"


def test_enrichment_copies_the_task(supporting_data):
    task = {"ID": "T1", "Project": "P1", "TaskNotes": "bring ladders"}
    event = enrich_event(task, supporting_data)

    assert event["TaskNotes"] == "bring ladders"
    assert "projectName" not in task


def test_foreign_keys_are_trimmed_and_stringified():
    supporting = SupportingData(projects={"7": {"ID": "7", "name": "Seven"}})
    assert enrich_event({"ID": "T", "Project": 7}, supporting)["projectName"] == "Seven"
    assert enrich_event({"ID": "T", "Project": " 7 "}, supporting)["projectName"] == "Seven"


def test_unknown_project_yields_empty_fields(supporting_data):
    event = enrich_event({"ID": "T", "Project": "P404"}, supporting_data)

    assert event["projectName"] == ""
    assert event["projectStatus"] == ""
    assert event["locationName"] == ""
    assert event["projectManagerName"] == ""


def test_missing_joins_use_defaults():
    event = enrich_event({"ID": "T"}, SupportingData())

    for field in ["projectName", "projectStatus", "projectFolder", "taskTypeName",
                  "taskStatusHebrew", "locationName", "taskManagerName", "projectManagerName"]:
        assert event[field] == ""
    assert event["backgroundColor"] == DEFAULT_BACKGROUND_COLOR == "#3498db"
    assert event["textColor"] == DEFAULT_TEXT_COLOR == "#FFFFFF"


def test_enrichment_adds_exactly_the_display_fields():
    task = {"ID": "T", "Project": "P1", "dateIn": "2024-03-15"}
    event = enrich_event(task, SupportingData())

    assert set(event) - set(task) == set(EnrichedFields.__annotations__)


def test_task_type_falls_back_to_task_field():
    event = enrich_event({"ID": "T", "TaskType": "nope", "Task": "  Rigging  "}, SupportingData())
    assert event["taskTypeName"] == "Rigging"


def test_task_status_falls_back_to_status_column(supporting_data):
    event = enrich_event({"ID": "T", "TaskStatus": "TS3"}, supporting_data)
    assert event["taskStatusHebrew"] == "Open"


def test_employee_name_with_only_last_name():
    supporting = SupportingData(employees={"E": {"ID": "E", "fName": "", "sName": "Cohen"}})
    assert enrich_event({"ID": "T", "TaskManager": "E"}, supporting)["taskManagerName"] == "Cohen"


# =============================================================================
# FILTERING
# =============================================================================


def _supporting(project_status="", task_status=""):
    return SupportingData(
        projects={"P": {"ID": "P", "name": "Show", "ProjectStatus": "PS"}},
        project_statuses={"PS": {"ID": "PS", "Status": project_status}},
        task_statuses={"TS": {"ID": "TS", "hebrew": task_status}},
    )


TASK = {"ID": "T", "Project": "P", "TaskStatus": "TS"}


@pytest.mark.parametrize(
    "status",
    ["מבוטל", "אופציונלי", "טנטטיבי", "נדחה", "canceled", "Cancelled", " TENTATIVE "],
)
def test_inactive_project_statuses_are_dropped(status):
    assert enrich_and_filter([TASK], _supporting(project_status=status)) == []


@pytest.mark.parametrize("status", ["מבוטל", "נדחה", "Canceled", "cancelled "])
def test_inactive_task_statuses_are_dropped(status):
    assert enrich_and_filter([TASK], _supporting(task_status=status)) == []


@pytest.mark.parametrize("status", ["פעיל", "מאושר", "", "postponed"])
def test_active_statuses_are_kept(status):
    result = enrich_and_filter([TASK], _supporting(project_status=status, task_status=status))
    assert [event["ID"] for event in result] == ["T"]


def test_tentative_is_only_inactive_for_projects():
    assert len(enrich_and_filter([TASK], _supporting(task_status="tentative"))) == 1


def test_filter_preserves_input_order(memory_source, supporting_data):
    tasks = read_table("Task", memory_source)
    result = enrich_and_filter(tasks, supporting_data)
    assert [event["ID"] for event in result] == ["T1", "T3", "T6", "T7"]


@pytest.mark.parametrize("tasks, supporting", [(None, SupportingData()), ([], SupportingData()), ([TASK], None)])
def test_missing_inputs_yield_empty_list(tasks, supporting):
    assert enrich_and_filter(tasks, supporting) == []
