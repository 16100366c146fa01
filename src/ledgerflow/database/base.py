"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ledgerflow.domain.entities import Client, ImportedFile, Line


class Database(ABC):
    """Abstract database interface for ledgerflow."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self, name: str, tax_id: Optional[str] = None, industry: Optional[str] = None
    ) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        tax_id: Optional[str] = None,
        industry: Optional[str] = None,
    ) -> None:
        """Update client fields that are not None."""
        pass

    @abstractmethod
    def set_custom_regulations(self, client_id: int, regulations: Optional[str]) -> None:
        """Store (or clear, with None) the client's custom regulations text."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client with its lines and import history."""
        pass

    # Line operations
    @abstractmethod
    def get_lines(self, client_id: int) -> list[Line]:
        """Get the client's line set, in order."""
        pass

    @abstractmethod
    def replace_lines(self, client_id: int, lines: Sequence[Line]) -> None:
        """Replace the client's whole line set in a single transaction."""
        pass

    # Import history operations
    @abstractmethod
    def add_imported_file(
        self, client_id: int, name: str, mime_type: str, line_count: int
    ) -> int:
        """Record an imported document. Returns record ID."""
        pass

    @abstractmethod
    def list_imported_files(self, client_id: int) -> list[ImportedFile]:
        """List documents imported for a client, oldest first."""
        pass

    # Settings operations
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get an application setting, or None if unset."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Optional[str]) -> None:
        """Set an application setting; None removes it."""
        pass
