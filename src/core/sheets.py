"""
Table sources: raw row access to the workbook that holds the task tables.

Each table lives on its own sheet. The first row is the header row.
"""

from pathlib import Path
from typing import Any, Protocol

from numbers_parser import Document
from openpyxl import load_workbook

from core.config import DATA_DIR, SUPPORTED_SOURCE_SUFFIXES
from core.errors import ConfigurationError


class TableNotFoundError(KeyError):
    """Raised when the workbook has no sheet for a requested table."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table not found: {table_name}")


class TableSource(Protocol):
    """Protocol for raw table backends."""

    def read_rows(self, table_name: str) -> list[tuple[Any, ...]]:
        """
        Return all rows of a table, header row first.

        Raises:
            TableNotFoundError: If the table does not exist
        """
        ...


class WorkbookSource:
    """Excel workbook backend (openpyxl), loaded once per instance."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._workbook = None

    def _load(self):
        if self._workbook is None:
            # data_only returns cached formula results instead of formula text
            self._workbook = load_workbook(str(self.path), data_only=True)
        return self._workbook

    def read_rows(self, table_name: str) -> list[tuple[Any, ...]]:
        workbook = self._load()
        if table_name not in workbook.sheetnames:
            raise TableNotFoundError(table_name)
        return list(workbook[table_name].iter_rows(values_only=True))


class NumbersSource:
    """Apple Numbers backend; reads the first table of each sheet."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._document = None

    def _load(self) -> Document:
        if self._document is None:
            self._document = Document(str(self.path))
        return self._document

    def read_rows(self, table_name: str) -> list[tuple[Any, ...]]:
        doc = self._load()
        try:
            table = doc.sheets[table_name].tables[0]
        except (KeyError, IndexError) as e:
            raise TableNotFoundError(table_name) from e
        return [
            tuple(_whole_number_to_int(value) for value in row)
            for row in table.rows(values_only=True)
        ]


def _whole_number_to_int(value: Any) -> Any:
    """Numbers stores every number as a float; 7.0 reads back as 7."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class MemorySource:
    """In-memory backend keyed by table name."""

    def __init__(self, tables: dict[str, list]):
        self.tables = tables
        self.reads: list[str] = []

    def read_rows(self, table_name: str) -> list[tuple[Any, ...]]:
        self.reads.append(table_name)
        if table_name not in self.tables:
            raise TableNotFoundError(table_name)
        return [tuple(row) for row in self.tables[table_name]]


def resolve_source_path(spreadsheet_id: str) -> Path:
    """
    Map the configured spreadsheet identifier to a workbook file.

    Relative identifiers are resolved against DATA_DIR; a bare name gets
    the .xlsx suffix.
    """
    path = Path(spreadsheet_id).expanduser()
    if not path.suffix:
        path = path.with_suffix(".xlsx")
    if not path.is_absolute():
        path = DATA_DIR / path
    return path


def open_table_source(spreadsheet_id: str) -> TableSource:
    """Create the table source for a spreadsheet identifier."""
    path = resolve_source_path(spreadsheet_id)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_SOURCE_SUFFIXES:
        raise ConfigurationError("Unsupported data source type")

    if suffix == ".numbers":
        return NumbersSource(path)
    return WorkbookSource(path)
