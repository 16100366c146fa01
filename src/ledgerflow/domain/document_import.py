"""Document import domain service."""

import threading
import weakref
from pathlib import Path
from typing import Any, Optional

import structlog

from ledgerflow.database.base import Database
from ledgerflow.domain.classification import merge_classification
from ledgerflow.domain.entities import ColumnMapping, RawLine, Section
from ledgerflow.domain.errors import NotFoundError, client_not_found
from ledgerflow.domain.extraction import extract_rows, sample_rows
from ledgerflow.domain.global_model import GlobalModelService
from ledgerflow.oracle.base import ClassificationOracle
from ledgerflow.oracle.payloads import build_classification_request
from ledgerflow.utils.table_reader import guess_mime_type, is_spreadsheet, read_table

logger = structlog.get_logger(__name__)


class _ClientLock:
    """Import lock of one client, dropped from the registry once unused."""

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self._lock.release()


# Weak values need the wrapper: threading.Lock does not support weakref
_import_locks: "weakref.WeakValueDictionary[int, _ClientLock]" = weakref.WeakValueDictionary()
_import_locks_guard = threading.Lock()


def _client_lock(client_id: int) -> _ClientLock:
    with _import_locks_guard:
        lock = _import_locks.get(client_id)
        if lock is None:
            lock = _ClientLock()
            _import_locks[client_id] = lock
        return lock


class DocumentImportService:
    """Service for importing accounting documents into a client's line set."""

    def __init__(self, db: Database, oracle: ClassificationOracle):
        """Initialize document import service.

        Args:
            db: Database instance
            oracle: Classification oracle used for column mapping inference,
                free-form extraction and line classification
        """
        self.db = db
        self.oracle = oracle
        self.global_model_service = GlobalModelService(db)

    def extract_lines(
        self,
        file_path: Path,
        mime_type: str,
        mapping: Optional[ColumnMapping] = None,
    ) -> tuple[list[RawLine], Optional[ColumnMapping]]:
        """Extract raw lines from a document.

        Spreadsheets are read into a table and scanned with the given mapping,
        or with one inferred by the oracle from the leading rows. Other
        documents are extracted by the oracle.

        Returns:
            Tuple of (raw lines, column mapping used or None)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If a spreadsheet format cannot be read
            OracleError: If the oracle fails
        """
        if not is_spreadsheet(mime_type, file_path.name):
            content = file_path.read_bytes()
            return self.oracle.extract_lines(content, mime_type, file_path.name), None

        table = read_table(file_path)
        if not table:
            return [], mapping

        if mapping is None:
            mapping = self.oracle.infer_column_mapping(sample_rows(table))
            logger.info("Column mapping inferred", file=file_path.name, mapping=mapping)

        return extract_rows(table, mapping), mapping

    def import_document(
        self,
        client_id: int,
        file_path: str,
        mapping: Optional[ColumnMapping] = None,
        mime_type: Optional[str] = None,
    ) -> dict[str, Any]:
        """Import a document, replacing the client's line set.

        Args:
            client_id: Client ID
            file_path: Path to the document
            mapping: Optional explicit column mapping for spreadsheets
            mime_type: Optional mime type; guessed from the file name if omitted

        Returns:
            Dict with import statistics:
            - imported: number of lines in the new line set (0 when the
              document had no usable rows; the previous lines are kept)
            - unclassified: number of lines left to the Unclassified fallback
            - source: "spreadsheet" or "document"
            - mapping: column mapping used for spreadsheets, else None
            - guidance: which rule set classification followed

        Raises:
            NotFoundError: If client doesn't exist
            FileNotFoundError: If the file doesn't exist
            ValidationError: If a spreadsheet format cannot be read
            OracleError: If the oracle fails or answers with malformed data
        """
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))

        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        mime_type = mime_type or guess_mime_type(path.name)
        source = "spreadsheet" if is_spreadsheet(mime_type, path.name) else "document"

        with _client_lock(client_id):
            log = logger.bind(client_id=client_id, file=path.name, source=source)
            raw_lines, used_mapping = self.extract_lines(path, mime_type, mapping)

            if not raw_lines:
                log.warning("No usable rows found")
                return {
                    "imported": 0,
                    "unclassified": 0,
                    "source": source,
                    "mapping": used_mapping,
                    "guidance": None,
                }

            guidance = self.global_model_service.guidance_for(client)
            classification = self.oracle.classify(
                build_classification_request(raw_lines), guidance
            )
            lines = merge_classification(raw_lines, classification)

            self.db.replace_lines(client_id, lines)
            self.db.add_imported_file(
                client_id, name=path.name, mime_type=mime_type, line_count=len(lines)
            )

            unclassified = sum(1 for line in lines if line.section == Section.UNCLASSIFIED)
            log.info(
                "Document imported",
                lines=len(lines),
                unclassified=unclassified,
                guidance=guidance.kind,
            )

        return {
            "imported": len(lines),
            "unclassified": unclassified,
            "source": source,
            "mapping": used_mapping,
            "guidance": guidance.kind,
        }
