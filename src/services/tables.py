"""
Table reading and cached lookup maps.

Reads sheets from the configured workbook into lists of records (one dict
per row, keyed by header) and indexes the reference tables by ID for joins.
"""

import json
import logging
from datetime import date, datetime, time
from typing import Any

from core.cache import CacheStore
from core.config import (
    ALLOWED_TABLES,
    CACHE_EXPIRATION_SECONDS,
    CACHE_SCHEMA_VERSION,
    ID_FIELD,
)
from core.errors import ConfigurationError, DataAccessError
from core.sheets import TableNotFoundError, TableSource
from core.validation import sanitize_value, validate_table_name
from models.events import LookupMapping, RawRecord

log = logging.getLogger(__name__)


# =============================================================================
# TABLE READING
# =============================================================================


def rows_to_records(rows: list) -> list[RawRecord]:
    """
    Convert header + data rows into records.

    Header cells are trimmed; columns with an empty header are skipped.
    Rows without an ID are dropped, row order is preserved.
    """
    if len(rows) < 2:
        return []  # Needs a header and at least one data row

    headers = [str(cell).strip() if cell is not None else "" for cell in rows[0]]

    records = []
    for row in rows[1:]:
        record = {}
        for index, header in enumerate(headers):
            if not header:
                continue
            value = row[index] if index < len(row) else None
            record[header] = sanitize_value(value, header)
        records.append(record)

    return [record for record in records if str(record.get(ID_FIELD, "")).strip()]


def read_table(table_name: str, source: TableSource) -> list[RawRecord]:
    """
    Read a table from the data source into a list of records.

    Args:
        table_name: One of ALLOWED_TABLES
        source: Table source for the configured workbook

    Returns:
        List of records; empty if the table has no data rows or is missing

    Raises:
        ValidationError: If the table name is invalid
        DataAccessError: If the data source could not be read
    """
    name = validate_table_name(table_name)

    try:
        rows = source.read_rows(name)
    except TableNotFoundError:
        log.error("Table '%s' not found in data source", name)
        return []
    except Exception as e:
        log.error("Failed to read table '%s': %s", name, e, exc_info=True)
        raise DataAccessError() from None

    return rows_to_records(rows)


# =============================================================================
# LOOKUP MAPS
# =============================================================================


def records_to_map(records: list[RawRecord], key_field: str) -> LookupMapping:
    """
    Index records by a key field for O(1) joins.

    Records with an empty key are skipped; on duplicate keys the last
    record wins.
    """
    mapping: LookupMapping = {}
    for record in records:
        if not record:
            continue
        key = record.get(key_field)
        if key is None or key == "":
            continue
        key = str(key).strip()
        if key:
            mapping[key] = record
    return mapping


def cache_key(table_name: str) -> str:
    """Cache key for a table's lookup map."""
    return f"map_{table_name}_{CACHE_SCHEMA_VERSION}"


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def get_lookup(
    table_name: str,
    key_field: str,
    use_cache: bool,
    *,
    source: TableSource,
    cache: CacheStore,
) -> LookupMapping:
    """
    Fetch a reference table as a lookup map, optionally through the cache.

    Args:
        table_name: One of ALLOWED_TABLES
        key_field: Column to key the map by (usually "ID")
        use_cache: False to always read the table fresh
        source: Table source for the configured workbook
        cache: Cache store for serialized maps

    Raises:
        ConfigurationError: If the table is not an allowed table
        DataAccessError: If the table could not be read
    """
    if table_name not in ALLOWED_TABLES:
        log.error("Lookup requested for table outside the allowed list")
        raise ConfigurationError("Requested table is not available")

    key = cache_key(table_name)

    if use_cache:
        cached = cache.get(key)
        if cached:
            try:
                return json.loads(cached)
            except ValueError:
                log.warning("Discarding unreadable cache entry for '%s'", table_name)

    mapping = records_to_map(read_table(table_name, source), key_field)

    if use_cache:
        try:
            payload = json.dumps(mapping, default=_json_default, ensure_ascii=False)
            if not cache.put(key, payload, CACHE_EXPIRATION_SECONDS):
                log.warning("Could not cache table '%s'; data might be too large", table_name)
        except Exception as e:
            # Caching is an optimization; never fail the request over it
            log.warning("Could not cache table '%s': %s", table_name, e)

    return mapping
