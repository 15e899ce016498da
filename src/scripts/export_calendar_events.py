#!/usr/bin/env python3
"""
Export the calendar feed as JSON.

Runs the same pipeline as the API for a given user and writes the event
array to a file or stdout.

Usage:
    uv run python src/scripts/export_calendar_events.py --email ops@stage-design.co.il

Example:
    uv run python src/scripts/export_calendar_events.py --email ops@stage-design.co.il --output output/events.json --no-cache
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.cache import NullCache
from core.errors import OperationFailedError
from services.calendar import get_calendar_events


def main():
    parser = argparse.ArgumentParser(
        description="Export active calendar events from the operations workbook"
    )
    parser.add_argument(
        "--email",
        required=True,
        help="E-mail address of the user to export for",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write JSON to this file instead of stdout",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Read every reference table fresh",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)

    cache = NullCache() if args.no_cache else None

    try:
        events = get_calendar_events(args.email, cache=cache)
    except OperationFailedError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    payload = json.dumps(events, ensure_ascii=False, indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        print(f"\nExported {len(events)} events: {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
