"""Oracle backed by JSON answers stored on disk.

Used when classification runs outside ledgerflow: the external service's
answers are saved as files and replayed here through the same parsing and
validation as a live oracle.
"""

from pathlib import Path
from typing import Any, Optional, Union

from ledgerflow.domain.entities import (
    ClassificationGuidance,
    ClassificationMapping,
    ColumnMapping,
    RawLine,
)
from ledgerflow.domain.errors import OracleError, malformed_oracle_payload
from ledgerflow.oracle.base import ClassificationOracle
from ledgerflow.oracle.payloads import (
    parse_classification,
    parse_column_mapping,
    parse_extracted_lines,
)

PathLike = Union[str, Path]


class FileOracle(ClassificationOracle):
    """Replay oracle answers from JSON files."""

    def __init__(
        self,
        mapping_path: Optional[PathLike] = None,
        classification_path: Optional[PathLike] = None,
        lines_path: Optional[PathLike] = None,
    ):
        """Initialize file oracle.

        Args:
            mapping_path: JSON column mapping answer for tabular sources
            classification_path: JSON classification answer; when omitted,
                every line is left to the Unclassified fallback
            lines_path: JSON line extraction answer for free-form documents
        """
        self.mapping_path = Path(mapping_path) if mapping_path else None
        self.classification_path = Path(classification_path) if classification_path else None
        self.lines_path = Path(lines_path) if lines_path else None

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise OracleError(f"Could not read oracle answer '{path}': {e}") from e
        except UnicodeDecodeError as e:
            raise OracleError(
                malformed_oracle_payload(f"answer '{path.name}'", f"not UTF-8 text ({e.reason})")
            ) from e

    def infer_column_mapping(self, sample: list[list[Any]]) -> ColumnMapping:
        if self.mapping_path is None:
            raise OracleError("No column mapping answer available for this spreadsheet")
        return parse_column_mapping(self._read(self.mapping_path))

    def extract_lines(self, content: bytes, mime_type: str, filename: str) -> list[RawLine]:
        if self.lines_path is None:
            raise OracleError(f"No line extraction answer available for '{filename}'")
        return parse_extracted_lines(self._read(self.lines_path))

    def classify(
        self, items: list[dict[str, Any]], guidance: ClassificationGuidance
    ) -> ClassificationMapping:
        if self.classification_path is None:
            return {}
        return parse_classification(self._read(self.classification_path))
