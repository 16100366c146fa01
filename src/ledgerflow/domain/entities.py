"""Domain model entities for ledgerflow.

These are pure data classes representing business concepts, independent of
database schema and of the oracle that labels extracted lines. Statements and
findings are derived values recomputed from the current line set.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Section(str, Enum):
    """Top-level financial statement chapter a line belongs to."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"
    UNCLASSIFIED = "UNCLASSIFIED"


class Severity(str, Enum):
    """Severity of a consistency finding."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


DEFAULT_CATEGORY = "Other"
UNCLASSIFIED_CATEGORY = "Unclassified"


@dataclass(frozen=True)
class RawLine:
    """Line candidate produced by extraction, before classification."""

    code: str
    name: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class Line:
    """Classified ledger line or group header."""

    id: str
    code: str
    name: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    section: Section
    category: str
    is_group: bool = False
    manual_override: bool = False


@dataclass(frozen=True)
class ColumnMapping:
    """Correspondence between table columns and line fields.

    An index of None means the column is absent from the source.
    """

    name_index: Optional[int]
    code_index: Optional[int] = None
    debit_index: Optional[int] = None
    credit_index: Optional[int] = None
    balance_index: Optional[int] = None
    start_row: int = 0

    @property
    def has_debit_credit(self) -> bool:
        return self.debit_index is not None and self.credit_index is not None

    @property
    def has_balance(self) -> bool:
        return self.balance_index is not None


@dataclass(frozen=True)
class ClassificationEntry:
    """Oracle decision for a single extracted line."""

    section: Section
    category: str
    is_group: bool = False


# Keyed by the extraction-time line index; entries may be missing.
ClassificationMapping = dict[int, ClassificationEntry]


@dataclass(frozen=True)
class Finding:
    """Structural inconsistency detected in a line set."""

    id: str
    severity: Severity
    message: str
    related_line_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryGroup:
    """Lines of one category within a section, with their subtotal."""

    name: str
    lines: tuple[Line, ...]
    total: Decimal


@dataclass(frozen=True)
class SectionStatement:
    """Ordered category groups of one section and the section total."""

    section: Section
    groups: tuple[CategoryGroup, ...]
    total: Decimal


@dataclass(frozen=True)
class Statement:
    """Hierarchical financial statement derived from a line set."""

    sections: dict[Section, SectionStatement]
    net_result: Decimal
    equity_with_result: Decimal
    liabilities_and_equity: Decimal

    def section(self, section: Section) -> SectionStatement:
        return self.sections[section]

    def total(self, section: Section) -> Decimal:
        return self.sections[section].total


@dataclass(frozen=True)
class Client:
    """Client entity whose documents are imported and classified."""

    id: int
    name: str
    tax_id: Optional[str]
    industry: Optional[str]
    custom_regulations: Optional[str]
    created_at: datetime
    last_updated: datetime


@dataclass(frozen=True)
class ImportedFile:
    """Record of a document imported for a client."""

    id: int
    client_id: int
    name: str
    mime_type: str
    imported_at: datetime
    line_count: int = 0


@dataclass(frozen=True)
class ClassificationGuidance:
    """Rule set the oracle should classify against.

    kind is one of "client", "global" or "default". For the default kind,
    text lists the canonical categories of each section.
    """

    kind: str
    text: Optional[str] = None
