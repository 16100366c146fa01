"""Manual edits to a line set.

All functions are pure: they return a new list and leave the input intact.
Callers replace their line set with the result.
"""

from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

from ledgerflow.domain.classification import new_line_id
from ledgerflow.domain.entities import DEFAULT_CATEGORY, Line, Section
from ledgerflow.domain.taxonomy import parse_section
from ledgerflow.utils.amount_parser import ZERO, parse_amount, round_to_cents

NEW_LINE_NAME = "New Account"


class EditableField(str, Enum):
    """Line fields that can be edited by hand."""

    CODE = "code"
    NAME = "name"
    CATEGORY = "category"
    DEBIT = "debit"
    CREDIT = "credit"
    BALANCE = "balance"
    SECTION = "section"


def to_amount(value: Any) -> Decimal:
    """Coerce an edited amount to a Decimal rounded to cents.

    Raises:
        ValueError: If the value cannot be parsed as an amount
    """
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        amount = parse_amount(str(value))
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{value}'")
    return round_to_cents(amount)


def apply_edit(line: Line, field: EditableField, value: Any) -> Line:
    """Return a copy of line with one field edited and marked as manual.

    Editing debit or credit re-derives the balance from the new value and
    the other side's current value. Editing the balance leaves debit and
    credit alone.
    """
    field = EditableField(field)

    if field == EditableField.DEBIT:
        debit = to_amount(value)
        return replace(line, debit=debit, balance=debit - line.credit, manual_override=True)
    if field == EditableField.CREDIT:
        credit = to_amount(value)
        return replace(line, credit=credit, balance=line.debit - credit, manual_override=True)
    if field == EditableField.BALANCE:
        return replace(line, balance=to_amount(value), manual_override=True)
    if field == EditableField.SECTION:
        return replace(line, section=parse_section(value), manual_override=True)
    if field == EditableField.CODE:
        return replace(line, code=str(value), manual_override=True)
    if field == EditableField.NAME:
        return replace(line, name=str(value), manual_override=True)
    # CATEGORY
    return replace(line, category=str(value), manual_override=True)


def edit_field(lines: Sequence[Line], line_id: str, field: EditableField, value: Any) -> list[Line]:
    """Edit one field of the line with the given id.

    Args:
        lines: Current line set
        line_id: Id of the line to edit
        field: Field to edit
        value: New value

    Returns:
        New line set; unchanged in content if no line has line_id
    """
    return [apply_edit(line, field, value) if line.id == line_id else line for line in lines]


def delete_line(lines: Sequence[Line], line_id: str) -> list[Line]:
    """Remove the line with the given id; unknown ids are a no-op."""
    return [line for line in lines if line.id != line_id]


def add_line(lines: Sequence[Line]) -> list[Line]:
    """Prepend a blank, unclassified, manually created line."""
    line = Line(
        id=new_line_id(),
        code="",
        name=NEW_LINE_NAME,
        debit=ZERO,
        credit=ZERO,
        balance=ZERO,
        section=Section.UNCLASSIFIED,
        category=DEFAULT_CATEGORY,
        is_group=False,
        manual_override=True,
    )
    return [line, *lines]
