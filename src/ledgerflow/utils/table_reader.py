"""Reading spreadsheets and delimited text into 2-D tables."""

import csv
import io
import mimetypes
from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import load_workbook

from ledgerflow.domain.errors import ValidationError, unsupported_document

SPREADSHEET_EXTENSIONS = {".csv", ".tsv", ".xlsx", ".xlsm", ".xls"}
WORKBOOK_EXTENSIONS = {".xlsx", ".xlsm"}
DELIMITED_EXTENSIONS = {".csv", ".tsv"}


def guess_mime_type(filename: str) -> str:
    """Guess a document's mime type from its name."""
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or "application/octet-stream"


def is_spreadsheet(mime_type: Optional[str], filename: str) -> bool:
    """Return True if a document should be parsed as a table.

    Spreadsheets and CSV files go through deterministic row extraction;
    everything else (PDFs, images, plain text) needs the oracle.
    """
    mime_type = (mime_type or "").lower()
    if any(marker in mime_type for marker in ("sheet", "excel", "csv")):
        return True
    return Path(filename).suffix.lower() in SPREADSHEET_EXTENSIONS


def read_table(path: Union[str, Path]) -> list[list[Any]]:
    """Read the first sheet of a workbook, or a delimited text file.

    Args:
        path: Path to .xlsx or .csv file

    Returns:
        Rows of cell values; workbook cells keep their native types,
        delimited text cells are strings

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the format cannot be read as a table
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix in WORKBOOK_EXTENSIONS:
        return _read_workbook(path)
    if suffix in DELIMITED_EXTENSIONS:
        return _read_delimited(path)
    raise ValidationError(unsupported_document(path.name))


def _read_workbook(path: Path) -> list[list[Any]]:
    wb = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        if not wb.worksheets:
            return []
        ws = wb.worksheets[0]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        # Legacy accounting exports are often Latin-1
        return path.read_text(encoding="latin-1")


def _read_delimited(path: Path) -> list[list[Any]]:
    text = _read_text(path)
    if not text.strip():
        return []

    # Try to detect delimiter
    try:
        dialect = csv.Sniffer().sniff(text[:4096], delimiters=",;\t|")
    except csv.Error:
        dialect = csv.excel

    return [row for row in csv.reader(io.StringIO(text, newline=""), dialect)]
