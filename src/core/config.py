"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from core.errors import ConfigurationError

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DB_PATH = DATA_DIR / "db" / "operations-calendar.db"

# =============================================================================
# AUTHORIZATION
# =============================================================================

AUTHORIZED_DOMAIN = os.environ.get("AUTHORIZED_DOMAIN", "stage-design.co.il")

# Set by the identity-aware proxy in front of the API
USER_EMAIL_HEADER = os.environ.get("USER_EMAIL_HEADER", "X-Authenticated-User-Email")

# =============================================================================
# DATA SOURCE
# =============================================================================

TASK_TABLE = "Task"

ALLOWED_TABLES = (
    "Task",
    "Project",
    "Employee",
    "TaskStatus",
    "TaskType",
    "Location",
    "ProjectStatus",
)

MAX_TABLE_NAME_LENGTH = 100
MAX_CELL_LENGTH = 10000
ID_FIELD = "ID"

SUPPORTED_SOURCE_SUFFIXES = {".xlsx", ".xlsm", ".numbers"}

# =============================================================================
# CACHE
# =============================================================================

CACHE_BACKEND = os.environ.get("CACHE_BACKEND", "memory").lower()  # memory, sqlite, none
CACHE_EXPIRATION_SECONDS = 3600
CACHE_SCHEMA_VERSION = "v1"
CACHE_MAX_VALUE_BYTES = 100 * 1024

# (supporting-data attribute, table, key field, use cache)
# Project and Employee are read fresh on every request
LOOKUP_TABLES = [
    ("projects", "Project", "ID", False),
    ("employees", "Employee", "ID", False),
    ("task_statuses", "TaskStatus", "ID", True),
    ("task_types", "TaskType", "ID", True),
    ("locations", "Location", "ID", True),
    ("project_statuses", "ProjectStatus", "ID", True),
]

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

CALENDAR_EVENT_TYPE = "ארוע לוח שנה"  # Task type rendered as a plain calendar event
CALENDAR_EVENT_CLASS = "calendar-event"

INACTIVE_PROJECT_STATUSES = {
    "מבוטל",
    "אופציונלי",
    "טנטטיבי",
    "נדחה",
    "canceled",
    "cancelled",
    "tentative",
}
INACTIVE_TASK_STATUSES = {"מבוטל", "נדחה", "canceled", "cancelled"}

DEFAULT_BACKGROUND_COLOR = "#3498db"
DEFAULT_TEXT_COLOR = "#FFFFFF"

STATUS_NOT_DEFINED = "לא הוגדר"
NO_PROJECT = "ללא פרויקט"
UNASSIGNED = "לא שויך"

TITLE_SEPARATOR = " - "

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def get_spreadsheet_id() -> str:
    """
    Read the data source identifier from the environment.

    Read on every call, not at import time.

    Raises:
        ConfigurationError: If SPREADSHEET_ID is not set
    """
    spreadsheet_id = os.environ.get("SPREADSHEET_ID", "").strip()
    if not spreadsheet_id:
        raise ConfigurationError("SPREADSHEET_ID is not configured")
    return spreadsheet_id
