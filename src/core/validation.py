"""
Table name validation and cell value sanitizing.
"""

import logging
import re
from typing import Any

from core.config import ALLOWED_TABLES, MAX_CELL_LENGTH, MAX_TABLE_NAME_LENGTH
from core.errors import ValidationError

log = logging.getLogger(__name__)

TABLE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s_-]+$")


def validate_table_name(table_name: Any) -> str:
    """
    Check that a table name is well formed and in the allowed list.

    Returns:
        The trimmed table name

    Raises:
        ValidationError: If the name is not a string, has a bad length,
            contains illegal characters or is not an allowed table
    """
    if not table_name or not isinstance(table_name, str):
        raise ValidationError("Invalid table name: must be a non-empty string")

    name = table_name.strip()

    if not 0 < len(name) <= MAX_TABLE_NAME_LENGTH:
        raise ValidationError(
            f"Invalid table name: length must be between 1 and {MAX_TABLE_NAME_LENGTH} characters"
        )

    if not TABLE_NAME_PATTERN.match(name):
        raise ValidationError("Invalid table name: contains illegal characters")

    if name not in ALLOWED_TABLES:
        raise ValidationError(f"Table '{name}' is not in the allowed tables list")

    return name


def sanitize_value(value: Any, field_name: str) -> Any:
    """
    Normalize a single cell value.

    Empty cells become "", oversized values are truncated to MAX_CELL_LENGTH
    characters, everything else passes through unchanged (dates stay dates).
    """
    if value is None or value == "":
        return ""

    text = str(value)
    if len(text) > MAX_CELL_LENGTH:
        log.warning("Value for field '%s' exceeds maximum length, truncating", field_name)
        return text[:MAX_CELL_LENGTH]

    return value
