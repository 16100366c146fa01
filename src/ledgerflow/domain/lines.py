"""Line workbench domain service.

Loads a client's line set, applies the pure editor functions and stores the
resulting set as a whole.
"""

from decimal import Decimal
from typing import Any

import structlog

from ledgerflow.database.base import Database
from ledgerflow.domain import line_editor
from ledgerflow.domain.entities import Line
from ledgerflow.domain.errors import (
    NotFoundError,
    ValidationError,
    client_not_found,
    line_not_found,
    negative_amount,
)
from ledgerflow.domain.line_editor import EditableField

logger = structlog.get_logger(__name__)


class LineService:
    """Service for manual edits to a client's line set."""

    def __init__(self, db: Database):
        """Initialize line service.

        Args:
            db: Database instance
        """
        self.db = db

    def _load(self, client_id: int) -> list[Line]:
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        return self.db.get_lines(client_id)

    def get_lines(self, client_id: int) -> list[Line]:
        """Get the client's current line set.

        Raises:
            NotFoundError: If client not found
        """
        return self._load(client_id)

    def get_line(self, client_id: int, line_id: str) -> Line:
        """Get a single line.

        Raises:
            NotFoundError: If client or line not found
        """
        for line in self._load(client_id):
            if line.id == line_id:
                return line
        raise NotFoundError(line_not_found(line_id))

    def add_line(self, client_id: int) -> Line:
        """Insert a blank line at the top of the client's line set.

        Returns:
            The new line

        Raises:
            NotFoundError: If client not found
        """
        lines = line_editor.add_line(self._load(client_id))
        self.db.replace_lines(client_id, lines)
        logger.info("Line added", client_id=client_id, line_id=lines[0].id)
        return lines[0]

    def edit_line(self, client_id: int, line_id: str, field: EditableField, value: Any) -> Line:
        """Edit one field of a line.

        Debit and credit must be non-negative; editing either re-derives the
        balance.

        Args:
            client_id: Client ID
            line_id: Line ID
            field: Field to edit
            value: New value

        Returns:
            The edited line

        Raises:
            NotFoundError: If client or line not found
            ValidationError: If the value is invalid for the field
        """
        field = EditableField(field)
        lines = self._load(client_id)
        if not any(line.id == line_id for line in lines):
            raise NotFoundError(line_not_found(line_id))

        if field in (EditableField.DEBIT, EditableField.CREDIT, EditableField.BALANCE):
            try:
                value = line_editor.to_amount(value)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            if field != EditableField.BALANCE and value < Decimal("0"):
                raise ValidationError(negative_amount(field.value))
        elif field == EditableField.NAME and not str(value).strip():
            raise ValidationError("Line name cannot be empty")

        lines = line_editor.edit_field(lines, line_id, field, value)
        self.db.replace_lines(client_id, lines)
        logger.info("Line edited", client_id=client_id, line_id=line_id, field=field.value)
        return next(line for line in lines if line.id == line_id)

    def delete_line(self, client_id: int, line_id: str) -> None:
        """Delete a line.

        Raises:
            NotFoundError: If client or line not found
        """
        lines = self._load(client_id)
        remaining = line_editor.delete_line(lines, line_id)
        if len(remaining) == len(lines):
            raise NotFoundError(line_not_found(line_id))

        self.db.replace_lines(client_id, remaining)
        logger.info("Line deleted", client_id=client_id, line_id=line_id)
