"""Abstract classification oracle interface."""

from abc import ABC, abstractmethod
from typing import Any

from ledgerflow.domain.entities import (
    ClassificationGuidance,
    ClassificationMapping,
    ColumnMapping,
    RawLine,
)


class ClassificationOracle(ABC):
    """External service that understands documents and labels lines.

    Implementations may call a remote model; the deterministic core only
    consumes their materialized results. Every method raises OracleError
    when the service fails or answers with malformed data.
    """

    @abstractmethod
    def infer_column_mapping(self, sample: list[list[Any]]) -> ColumnMapping:
        """Identify the column roles and first data row of a table sample."""
        pass

    @abstractmethod
    def extract_lines(self, content: bytes, mime_type: str, filename: str) -> list[RawLine]:
        """Extract line candidates from a free-form document (PDF, image, text)."""
        pass

    @abstractmethod
    def classify(
        self, items: list[dict[str, Any]], guidance: ClassificationGuidance
    ) -> ClassificationMapping:
        """Assign section, category and group flag to line items.

        Items carry "id" (the extraction index), "name", "code" and "balance".
        The returned mapping is keyed by item id and may omit items.
        """
        pass
