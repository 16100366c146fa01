"""Merging oracle classification decisions back onto extracted lines."""

import uuid
from typing import Mapping, Sequence

from ledgerflow.domain.entities import (
    DEFAULT_CATEGORY,
    UNCLASSIFIED_CATEGORY,
    ClassificationEntry,
    Line,
    RawLine,
    Section,
)

UNKNOWN_LINE_NAME = "Unknown Account"


def new_line_id() -> str:
    """Generate a fresh opaque line identifier."""
    return str(uuid.uuid4())


def merge_classification(
    raw_lines: Sequence[RawLine],
    classification: Mapping[int, ClassificationEntry],
) -> list[Line]:
    """Apply classification decisions to raw lines by extraction index.

    Lines without a decision fall back to the Unclassified section and
    category. Decisions for indices that have no raw line are ignored, so the
    output always has exactly len(raw_lines) lines.

    Args:
        raw_lines: Extracted line candidates
        classification: Decisions keyed by index into raw_lines

    Returns:
        Classified lines with fresh ids and no manual override
    """
    lines = []
    for index, raw in enumerate(raw_lines):
        entry = classification.get(index)
        if entry is not None:
            section = entry.section
            category = entry.category or DEFAULT_CATEGORY
            is_group = bool(entry.is_group)
        else:
            section = Section.UNCLASSIFIED
            category = UNCLASSIFIED_CATEGORY
            is_group = False

        # Free-form extraction may leave the balance out
        balance = raw.balance if raw.balance else raw.debit - raw.credit

        lines.append(
            Line(
                id=new_line_id(),
                code=raw.code or "",
                name=raw.name or UNKNOWN_LINE_NAME,
                debit=raw.debit,
                credit=raw.credit,
                balance=balance,
                section=section,
                category=category,
                is_group=is_group,
                manual_override=False,
            )
        )
    return lines
