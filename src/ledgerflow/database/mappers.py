"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so that the domain entities stay
stable when the database schema changes.
"""

from decimal import Decimal

from ledgerflow.domain import entities as domain
from ledgerflow.domain.taxonomy import parse_section
from ledgerflow.database.models import (
    Client as ORMClient,
    ImportedFile as ORMImportedFile,
    LedgerLine as ORMLedgerLine,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        tax_id=orm_client.tax_id,
        industry=orm_client.industry,
        custom_regulations=orm_client.custom_regulations,
        created_at=orm_client.created_at,
        last_updated=orm_client.last_updated,
    )


def line_to_domain(orm_line: ORMLedgerLine) -> domain.Line:
    """Convert SQLAlchemy LedgerLine model to domain Line entity."""
    return domain.Line(
        id=orm_line.id,
        code=orm_line.code or "",
        name=orm_line.name,
        debit=Decimal(orm_line.debit),
        credit=Decimal(orm_line.credit),
        balance=Decimal(orm_line.balance),
        section=parse_section(orm_line.section),
        category=orm_line.category,
        is_group=orm_line.is_group,
        manual_override=orm_line.manual_override,
    )


def line_to_orm(line: domain.Line, client_id: int, position: int) -> ORMLedgerLine:
    """Convert domain Line entity to a new SQLAlchemy LedgerLine model."""
    return ORMLedgerLine(
        id=line.id,
        client_id=client_id,
        position=position,
        code=line.code,
        name=line.name,
        debit=line.debit,
        credit=line.credit,
        balance=line.balance,
        section=line.section.value,
        category=line.category,
        is_group=line.is_group,
        manual_override=line.manual_override,
    )


def imported_file_to_domain(orm_file: ORMImportedFile) -> domain.ImportedFile:
    """Convert SQLAlchemy ImportedFile model to domain ImportedFile entity."""
    return domain.ImportedFile(
        id=orm_file.id,
        client_id=orm_file.client_id,
        name=orm_file.name,
        mime_type=orm_file.mime_type,
        imported_at=orm_file.imported_at,
        line_count=orm_file.line_count,
    )
