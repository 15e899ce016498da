#!/usr/bin/env python3
"""
List the tables of the configured workbook with their headers and row counts.

Usage:
    uv run python src/scripts/list_tables.py
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import ALLOWED_TABLES, get_spreadsheet_id
from core.errors import CalendarServiceError
from core.sheets import open_table_source, resolve_source_path
from services.tables import read_table


def main():
    """Print a summary of every allowed table."""
    try:
        spreadsheet_id = get_spreadsheet_id()
    except CalendarServiceError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Reading {resolve_source_path(spreadsheet_id)}...\n")
    source = open_table_source(spreadsheet_id)
    print("=" * 80)

    for table_name in ALLOWED_TABLES:
        print(f"\nTable: {table_name}")
        try:
            records = read_table(table_name, source)
        except CalendarServiceError as e:
            print(f"  Error: {e}")
            continue

        print(f"  Records with ID: {len(records)}")
        if records:
            print(f"  Columns: {', '.join(records[0].keys())}")
        print("-" * 80)

    print("\nDone!")


if __name__ == "__main__":
    main()
