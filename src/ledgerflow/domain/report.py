"""Statement and findings domain service."""

from ledgerflow.database.base import Database
from ledgerflow.domain.consistency import check
from ledgerflow.domain.entities import Client, Finding, Statement
from ledgerflow.domain.errors import NotFoundError, client_not_found
from ledgerflow.domain.global_model import GlobalModelService
from ledgerflow.domain.statement import aggregate


class ReportService:
    """Service computing statements and findings from stored line sets.

    Nothing is cached: both are recomputed from the current lines on every
    call.
    """

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.global_model_service = GlobalModelService(db)

    def _require_client(self, client_id: int) -> Client:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def build_statement(self, client_id: int) -> Statement:
        """Aggregate the client's lines into a statement.

        Raises:
            NotFoundError: If client not found
        """
        client = self._require_client(client_id)
        return aggregate(
            self.db.get_lines(client_id),
            has_custom_model=self.global_model_service.has_custom_model(client),
        )

    def find_inconsistencies(self, client_id: int) -> list[Finding]:
        """Check the client's lines for structural inconsistencies.

        Raises:
            NotFoundError: If client not found
        """
        self._require_client(client_id)
        return check(self.db.get_lines(client_id))
