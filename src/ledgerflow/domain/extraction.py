"""Row extraction from tabular sources.

Given a column mapping (usually inferred by the classification oracle from a
sample of the first rows), rows are scanned mechanically: no sorting, no
deduplication and no semantic interpretation happen here.
"""

from typing import Any, Optional, Sequence

from ledgerflow.domain.entities import ColumnMapping, RawLine
from ledgerflow.utils.amount_parser import ZERO, parse_lenient_amount

SAMPLE_ROW_LIMIT = 25


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    """Return the cell at index, or None when the column is absent."""
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def cell_text(value: Any) -> str:
    """Render a cell as display text.

    Integral floats (as spreadsheet engines store account codes) lose their
    trailing ".0".
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def extract_rows(table: Sequence[Sequence[Any]], mapping: ColumnMapping) -> list[RawLine]:
    """Extract raw line candidates from a 2-D table.

    Rows are read from mapping.start_row to the end. A row without a name is
    skipped. Amounts are parsed leniently and rounded to cents (see
    parse_lenient_amount):

    - debit and credit mapped: balance = debit - credit
    - only balance mapped: the sign of balance decides which side holds
      the magnitude
    - no amount column mapped: all amounts are zero

    Args:
        table: Rows of primitive cell values
        mapping: Column mapping for the table

    Returns:
        Raw lines in row order; empty if the source had no usable rows
    """
    lines: list[RawLine] = []
    for row in table[max(mapping.start_row, 0):]:
        if not row:
            continue

        name = cell_text(_cell(row, mapping.name_index)).strip()
        if not name:
            continue

        code = cell_text(_cell(row, mapping.code_index)).strip()

        debit = credit = balance = ZERO
        if mapping.has_debit_credit:
            debit = parse_lenient_amount(_cell(row, mapping.debit_index))
            credit = parse_lenient_amount(_cell(row, mapping.credit_index))
            balance = debit - credit
        elif mapping.has_balance:
            balance = parse_lenient_amount(_cell(row, mapping.balance_index))
            debit = balance if balance > ZERO else ZERO
            credit = -balance if balance < ZERO else ZERO

        lines.append(RawLine(code=code, name=name, debit=debit, credit=credit, balance=balance))

    return lines


def sample_rows(table: Sequence[Sequence[Any]], limit: int = SAMPLE_ROW_LIMIT) -> list[list[Any]]:
    """Return the leading rows the oracle inspects to infer a column mapping.

    Cells are reduced to JSON-friendly primitives.
    """
    sample = []
    for row in table[:limit]:
        sample.append([_primitive(value) for value in row or ()])
    return sample


def _primitive(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
