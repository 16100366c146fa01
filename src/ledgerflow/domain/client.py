"""Client domain service."""

from typing import Optional
from ledgerflow.database.base import Database
from ledgerflow.domain.entities import Client as ClientEntity, ImportedFile as ImportedFileEntity
from ledgerflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    duplicate_client_name,
)


class ClientService:
    """Service for managing client records."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_client(self, client_id: int) -> ClientEntity:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def create_client(
        self, name: str, tax_id: Optional[str] = None, industry: Optional[str] = None
    ) -> int:
        """Create a new client.

        Args:
            name: Client name
            tax_id: Optional tax identifier (e.g., CUIT)
            industry: Optional industry description

        Returns:
            Client ID

        Raises:
            ValidationError: If name is empty
            ConflictError: If client name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Client name cannot be empty")

        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_client_name(name))

        return self.db.create_client(name=name, tax_id=tax_id, industry=industry)

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def get_client_by_name(self, name: str) -> Optional[ClientEntity]:
        """Get client by name."""
        return self.db.get_client_by_name(name)

    def list_clients(self) -> list[ClientEntity]:
        """List all clients, ordered by name."""
        return self.db.list_clients()

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        tax_id: Optional[str] = None,
        industry: Optional[str] = None,
    ) -> None:
        """Update client fields.

        Args:
            client_id: Client ID to update
            name: Optional new name
            tax_id: Optional new tax identifier
            industry: Optional new industry

        Raises:
            NotFoundError: If client not found
            ValidationError: If the new name is empty
            ConflictError: If the new name is taken by another client
        """
        self._require_client(client_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Client name cannot be empty")
            existing = self.db.get_client_by_name(name)
            if existing is not None and existing.id != client_id:
                raise ConflictError(duplicate_client_name(name))

        self.db.update_client(client_id, name=name, tax_id=tax_id, industry=industry)

    def set_custom_regulations(self, client_id: int, regulations: Optional[str]) -> None:
        """Store the client's custom regulations text.

        Blank text clears the regulations, so classification and ordering
        fall back to the global model or the default categories.

        Raises:
            NotFoundError: If client not found
        """
        self._require_client(client_id)
        text = regulations.strip() if regulations else ""
        self.db.set_custom_regulations(client_id, text or None)

    def delete_client(self, client_id: int) -> None:
        """Delete a client together with its lines and import history.

        Raises:
            NotFoundError: If client not found
        """
        self._require_client(client_id)
        self.db.delete_client(client_id)

    def list_imported_files(self, client_id: int) -> list[ImportedFileEntity]:
        """List documents imported for a client.

        Raises:
            NotFoundError: If client not found
        """
        self._require_client(client_id)
        return self.db.list_imported_files(client_id)
