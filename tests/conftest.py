"""Shared pytest fixtures for ledgerflow tests."""

import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from ledgerflow.database.factories import create_sqlite_database
from ledgerflow.domain.client import ClientService
from ledgerflow.domain.entities import Line, Section
from ledgerflow.domain.errors import OracleError
from ledgerflow.domain.global_model import GlobalModelService
from ledgerflow.domain.lines import LineService
from ledgerflow.domain.report import ReportService
from ledgerflow.oracle.base import ClassificationOracle


class CannedOracle(ClassificationOracle):
    """Oracle double answering from preset values and recording its calls."""

    def __init__(self, mapping=None, lines=None, classification=None, error=None):
        self.mapping = mapping
        self.lines = lines or []
        self.classification = classification or {}
        self.error = error
        self.samples = []
        self.documents = []
        self.requests = []
        self.guidance = None

    def infer_column_mapping(self, sample):
        self.samples.append(sample)
        if self.error is not None:
            raise self.error
        if self.mapping is None:
            raise OracleError("No column mapping available")
        return self.mapping

    def extract_lines(self, content, mime_type, filename):
        self.documents.append((content, mime_type, filename))
        if self.error is not None:
            raise self.error
        return list(self.lines)

    def classify(self, items, guidance):
        self.requests.append(items)
        self.guidance = guidance
        if self.error is not None:
            raise self.error
        # Like a real oracle, only answer for the lines that were sent
        sent = {item["id"] for item in items}
        return {index: entry for index, entry in self.classification.items() if index in sent}


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def line_service(temp_db):
    """Create a LineService with a temporary database."""
    return LineService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def global_model_service(temp_db):
    """Create a GlobalModelService with a temporary database."""
    return GlobalModelService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(name="Acme SA", tax_id="30-12345678-9")
    return client_service.get_client(client_id)


@pytest.fixture
def make_line():
    """Return a factory for domain lines with sensible defaults."""

    def _make_line(
        balance="0",
        section=Section.ASSET,
        category="Cash and Banks",
        line_id=None,
        debit=None,
        credit=None,
        name="Account",
        code="",
        is_group=False,
    ):
        balance = Decimal(balance)
        if debit is None:
            debit = balance if balance > 0 else Decimal("0")
        if credit is None:
            credit = -balance if balance < 0 else Decimal("0")
        _make_line.counter += 1
        return Line(
            id=line_id or f"line-{_make_line.counter}",
            code=code,
            name=name,
            debit=Decimal(debit),
            credit=Decimal(credit),
            balance=balance,
            section=section,
            category=category,
            is_group=is_group,
        )

    _make_line.counter = 0
    return _make_line


@pytest.fixture
def canned_oracle():
    """Return the CannedOracle class for building oracle doubles."""
    return CannedOracle


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
