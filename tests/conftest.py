"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime, time
from pathlib import Path

import pytest
from openpyxl import Workbook

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.sheets import MemorySource  # noqa: E402
from services.enrichment import SupportingData  # noqa: E402
from services.tables import records_to_map, rows_to_records  # noqa: E402

TASK_HEADERS = [
    "ID", "Project", "TaskType", "TaskStatus", "TaskManager",
    "Task", "TaskNotes", "dateIn", "timeIn", "dateOut", "timeOut",
]


@pytest.fixture
def workbook_tables():
    """Rows for every table, header first, as they appear in the workbook."""
    return {
        "Task": [
            TASK_HEADERS,
            # Timed task on an active project
            ["T1", "P1", "TT1", "TS1", "E2", None, "Load-in crew of 6",
             date(2024, 3, 15), time(14, 30), date(2024, 3, 15), time(18, 0)],
            # Cancelled project
            ["T2", "P2", "TT1", "TS1", "E1", None, None,
             date(2024, 3, 16), time(10, 0), None, None],
            # Calendar event with a time that must be ignored
            ["T3", "P1", "TT2", "TS1", None, None, None,
             date(2024, 3, 17), time(9, 0), date(2024, 3, 18), None],
            # Rejected task
            ["T4", "P1", "TT1", "TS2", "E1", None, None,
             date(2024, 3, 18), None, None, None],
            # No ID
            [None, "P1", "TT1", "TS1", "E1", None, None,
             date(2024, 3, 19), None, None, None],
            # Unparseable date
            ["T6", "P1", "TT1", "TS3", "E1", None, None,
             "not a date", None, None, None],
            # Unknown project, all-day
            ["T7", "P9", "TT1", "TS3", None, None, None,
             datetime(2024, 3, 20), None, None, None],
            # Tentative project
            ["T8", "P3", "TT1", "TS1", "E1", None, None,
             date(2024, 3, 21), None, None, None],
        ],
        "Project": [
            ["ID", "name", "folder", "ProjectStatus", "Location", "ProjectManager"],
            ["P1", "Hamlet", "https://drive.example/p1", "PS1", "L1", "E1"],
            ["P2", "Carmen", None, "PS2", "L1", "E1"],
            ["P3", "Tosca", None, "PS3", None, None],
        ],
        "Employee": [
            ["ID", "fName", "sName"],
            ["E1", "Dana", "Levi"],
            ["E2", "Noa", None],
        ],
        "TaskStatus": [
            ["ID", "TaskStatus", "hebrew", "color"],
            ["TS1", "Approved", "מאושר", "Green"],
            ["TS2", "Rejected", "נדחה", "red"],
            ["TS3", "Open", None, None],
        ],
        "TaskType": [
            ["ID", "hebrew", "color"],
            ["TT1", "הקמה", "black"],
            ["TT2", "ארוע לוח שנה", "purple"],
        ],
        "Location": [
            ["ID", "name"],
            ["L1", "Habima"],
        ],
        "ProjectStatus": [
            ["ID", "Status"],
            ["PS1", "פעיל"],
            ["PS2", "מבוטל"],
            ["PS3", " Tentative "],
        ],
    }


@pytest.fixture
def memory_source(workbook_tables):
    """In-memory table source over the sample tables."""
    return MemorySource(workbook_tables)


@pytest.fixture
def workbook_path(tmp_path, workbook_tables):
    """The sample tables written to a real .xlsx workbook."""
    wb = Workbook()
    wb.remove(wb.active)
    for table_name, rows in workbook_tables.items():
        ws = wb.create_sheet(table_name)
        for row in rows:
            ws.append(row)
    path = tmp_path / "operations.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def supporting_data(workbook_tables):
    """Lookup maps built from the sample reference tables."""
    def lookup(table_name):
        return records_to_map(rows_to_records(workbook_tables[table_name]), "ID")

    return SupportingData(
        projects=lookup("Project"),
        employees=lookup("Employee"),
        task_statuses=lookup("TaskStatus"),
        task_types=lookup("TaskType"),
        locations=lookup("Location"),
        project_statuses=lookup("ProjectStatus"),
    )


@pytest.fixture
def authorized_email():
    return "dana@stage-design.co.il"
