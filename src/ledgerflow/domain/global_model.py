"""Global standard model domain service.

The global model is a free-text chart-of-accounts structure that applies to
every client without regulations of their own.
"""

from typing import Optional
from ledgerflow.database.base import Database
from ledgerflow.domain.entities import Client, ClassificationGuidance
from ledgerflow.oracle.payloads import select_guidance

GLOBAL_MODEL_KEY = "global_model"


class GlobalModelService:
    """Service for the user-wide standard classification model."""

    def __init__(self, db: Database):
        """Initialize global model service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_model(self) -> Optional[str]:
        """Return the global model text, or None if unset."""
        return self.db.get_setting(GLOBAL_MODEL_KEY)

    def set_model(self, text: Optional[str]) -> None:
        """Store the global model; blank text clears it."""
        text = text.strip() if text else ""
        self.db.set_setting(GLOBAL_MODEL_KEY, text or None)

    def clear_model(self) -> None:
        """Remove the global model."""
        self.db.set_setting(GLOBAL_MODEL_KEY, None)

    def has_custom_model(self, client: Client) -> bool:
        """Return True if client regulations or a global model are active."""
        return bool(client.custom_regulations) or bool(self.get_model())

    def guidance_for(self, client: Client) -> ClassificationGuidance:
        """Return the classification guidance that applies to a client."""
        return select_guidance(client.custom_regulations, self.get_model())
