"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class OracleError(DomainError):
    """The classification oracle failed or returned malformed data."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client by ID."""
    return f"Client {client_id} not found"


def client_name_not_found(name: str) -> str:
    """Return message for missing client by name."""
    return f"Client '{name}' not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client names."""
    return f"Client with name '{name}' already exists"


def line_not_found(line_id: str) -> str:
    """Return message for missing ledger line."""
    return f"Line {line_id} not found"


def negative_amount(field_name: str) -> str:
    """Return message for negative debit or credit input."""
    return f"{field_name.capitalize()} must be a non-negative amount"


def unsupported_document(filename: str) -> str:
    """Return message for documents that cannot be read as a table."""
    return (
        f"Cannot read '{filename}' as a table. "
        "Save legacy .xls workbooks as .xlsx or .csv and try again."
    )


def malformed_oracle_payload(what: str, detail: str) -> str:
    """Return message for oracle output that does not have the expected shape."""
    return f"Classification service returned malformed {what}: {detail}"
