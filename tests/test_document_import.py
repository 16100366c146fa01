"""Tests for the document import service."""

import gc
import threading
import time
import pytest
from decimal import Decimal

from ledgerflow.domain import document_import
from ledgerflow.domain.document_import import DocumentImportService
from ledgerflow.domain.entities import ClassificationEntry, ColumnMapping, RawLine, Section
from ledgerflow.domain.errors import NotFoundError, OracleError, ValidationError
from ledgerflow.oracle.payloads import CLASSIFICATION_LINE_LIMIT

TRIAL_BALANCE_MAPPING = ColumnMapping(
    name_index=1, code_index=0, debit_index=2, credit_index=3, start_row=1
)

TRIAL_BALANCE_CLASSIFICATION = {
    0: ClassificationEntry(Section.ASSET, "Cash and Banks"),
    1: ClassificationEntry(Section.ASSET, "Cash and Banks"),
    2: ClassificationEntry(Section.LIABILITY, "Trade Payables"),
    3: ClassificationEntry(Section.EQUITY, "Share Capital"),
    4: ClassificationEntry(Section.REVENUE, "Sales"),
}


@pytest.fixture
def trial_balance(fixtures_dir):
    """Return the path of the sample trial balance."""
    return str(fixtures_dir / "trial_balance.csv")


def test_import_spreadsheet_with_inferred_mapping(
    temp_db, sample_client, canned_oracle, trial_balance
):
    """Test the full spreadsheet pipeline."""
    oracle = canned_oracle(mapping=TRIAL_BALANCE_MAPPING, classification=TRIAL_BALANCE_CLASSIFICATION)
    service = DocumentImportService(temp_db, oracle)

    result = service.import_document(sample_client.id, trial_balance)

    assert result["imported"] == 6
    assert result["unclassified"] == 1
    assert result["source"] == "spreadsheet"
    assert result["mapping"] == TRIAL_BALANCE_MAPPING
    assert result["guidance"] == "default"

    # The oracle saw the header rows and every extracted line
    assert oracle.samples[0][0] == ["Code", "Account", "Debit", "Credit"]
    assert [item["name"] for item in oracle.requests[0]][:2] == ["Cash", "Bank Account"]

    lines = temp_db.get_lines(sample_client.id)
    assert [line.code for line in lines] == ["1.1.01", "1.1.02", "2.1.01", "3.1.01", "4.1.01", "5.1.01"]
    assert lines[1].debit == Decimal("2500.00")
    assert lines[2].balance == Decimal("-1500.00")
    assert lines[5].section == Section.UNCLASSIFIED

    (record,) = temp_db.list_imported_files(sample_client.id)
    assert record.name == "trial_balance.csv"
    assert record.line_count == 6


def test_explicit_mapping_skips_inference(temp_db, sample_client, canned_oracle, trial_balance):
    """Test that a given mapping is used as is."""
    oracle = canned_oracle()
    service = DocumentImportService(temp_db, oracle)

    result = service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)

    assert oracle.samples == []
    assert result["imported"] == 6
    assert result["unclassified"] == 6


def test_import_document_uses_oracle_extraction(temp_db, sample_client, canned_oracle, tmp_path):
    """Test that non-tabular documents are extracted by the oracle."""
    path = tmp_path / "balance.pdf"
    path.write_bytes(b"%PDF-1.4 trial balance")
    oracle = canned_oracle(
        lines=[
            RawLine(code="1", name="Cash", debit=Decimal("50")),
            RawLine(code="2", name="Loan", credit=Decimal("50")),
        ],
        classification={1: ClassificationEntry(Section.LIABILITY, "Bank Loans")},
    )
    service = DocumentImportService(temp_db, oracle)

    result = service.import_document(sample_client.id, str(path))

    assert result["source"] == "document"
    assert result["mapping"] is None
    assert oracle.documents == [(b"%PDF-1.4 trial balance", "application/pdf", "balance.pdf")]
    cash, loan = temp_db.get_lines(sample_client.id)
    assert cash.balance == Decimal("50")
    assert loan.balance == Decimal("-50")
    assert loan.section == Section.LIABILITY


def test_empty_extraction_keeps_previous_lines(
    temp_db, sample_client, canned_oracle, trial_balance, tmp_path
):
    """Test that a document without usable rows changes nothing."""
    service = DocumentImportService(temp_db, canned_oracle())
    service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)
    before = temp_db.get_lines(sample_client.id)

    empty = tmp_path / "empty.csv"
    empty.write_text("Code,Account,Debit,Credit\n", encoding="utf-8")
    result = service.import_document(sample_client.id, str(empty), mapping=TRIAL_BALANCE_MAPPING)

    assert result["imported"] == 0
    assert temp_db.get_lines(sample_client.id) == before
    assert len(temp_db.list_imported_files(sample_client.id)) == 1


def test_reimport_replaces_lines(temp_db, sample_client, canned_oracle, trial_balance):
    """Test that each import replaces the whole line set."""
    service = DocumentImportService(temp_db, canned_oracle())
    service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)
    first_ids = {line.id for line in temp_db.get_lines(sample_client.id)}

    service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)

    lines = temp_db.get_lines(sample_client.id)
    assert len(lines) == 6
    assert first_ids.isdisjoint(line.id for line in lines)


def test_oracle_failure_propagates(temp_db, sample_client, canned_oracle, trial_balance):
    """Test that oracle errors surface and leave stored lines alone."""
    oracle = canned_oracle(error=OracleError("service unavailable"))
    service = DocumentImportService(temp_db, oracle)

    with pytest.raises(OracleError):
        service.import_document(sample_client.id, trial_balance)

    assert temp_db.get_lines(sample_client.id) == []


def test_client_guidance_is_passed_to_oracle(
    temp_db, client_service, sample_client, canned_oracle, trial_balance
):
    """Test that client regulations drive classification."""
    client_service.set_custom_regulations(sample_client.id, "Client specific chart of accounts")
    oracle = canned_oracle()
    service = DocumentImportService(temp_db, oracle)

    result = service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)

    assert result["guidance"] == "client"
    assert oracle.guidance.text == "Client specific chart of accounts"


def test_classification_request_is_capped(temp_db, sample_client, canned_oracle, tmp_path):
    """Test that lines past the request cap stay unclassified."""
    total = CLASSIFICATION_LINE_LIMIT + 10
    path = tmp_path / "big.csv"
    path.write_text(
        "".join(f"{i},Account {i},{i}\n" for i in range(total)), encoding="utf-8"
    )
    oracle = canned_oracle(
        classification={i: ClassificationEntry(Section.ASSET, "Investments") for i in range(total)}
    )
    service = DocumentImportService(temp_db, oracle)

    result = service.import_document(
        sample_client.id, str(path), mapping=ColumnMapping(name_index=1, code_index=0, balance_index=2)
    )

    assert len(oracle.requests[0]) == CLASSIFICATION_LINE_LIMIT
    assert result["imported"] == total
    assert result["unclassified"] == 10


def test_unknown_client(temp_db, canned_oracle, trial_balance):
    """Test importing for an unknown client."""
    with pytest.raises(NotFoundError):
        DocumentImportService(temp_db, canned_oracle()).import_document(999, trial_balance)


def test_missing_file(temp_db, sample_client, canned_oracle, tmp_path):
    """Test importing a missing document."""
    with pytest.raises(FileNotFoundError):
        DocumentImportService(temp_db, canned_oracle()).import_document(
            sample_client.id, str(tmp_path / "missing.csv")
        )


def test_unsupported_workbook(temp_db, sample_client, canned_oracle, tmp_path):
    """Test that legacy workbooks are rejected."""
    path = tmp_path / "balance.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0")

    with pytest.raises(ValidationError):
        DocumentImportService(temp_db, canned_oracle()).import_document(sample_client.id, str(path))


def _write_trial_balance(path, rows):
    """Write a balanced-by-row CSV with the given number of accounts."""
    content = ["Code,Account,Debit,Credit"]
    content += [f"{i},Account {i},{i + 1}.00,0" for i in range(rows)]
    path.write_text("\n".join(content) + "\n", encoding="utf-8")


def _run_in_threads(target, args_list):
    """Run target once per argument tuple in parallel; return raised errors."""
    errors = []

    def run(*args):
        try:
            target(*args)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=run, args=args) for args in args_list]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return errors


class TestConcurrentImports:
    """Tests for imports running on several threads."""

    def test_different_clients_import_in_parallel(self, temp_db, canned_oracle, tmp_path):
        """Test that parallel imports for separate clients all land intact."""
        path = tmp_path / "large_balance.csv"
        _write_trial_balance(path, 200)
        client_ids = [temp_db.create_client(name=f"Client {i}") for i in range(8)]

        def import_repeatedly(client_id):
            service = DocumentImportService(temp_db, canned_oracle())
            try:
                for _ in range(5):
                    service.import_document(client_id, str(path), mapping=TRIAL_BALANCE_MAPPING)
            finally:
                temp_db.disconnect()

        errors = _run_in_threads(import_repeatedly, [(client_id,) for client_id in client_ids])

        assert errors == []
        for client_id in client_ids:
            lines = temp_db.get_lines(client_id)
            assert len(lines) == 200
            assert lines[199].debit == Decimal("200.00")
            assert len(temp_db.list_imported_files(client_id)) == 5

    def test_imports_for_one_client_do_not_overlap(
        self, temp_db, sample_client, canned_oracle, trial_balance
    ):
        """Test that a second import for a client waits for the first."""
        state = {"active": 0, "peak": 0}
        guard = threading.Lock()

        class SlowOracle(canned_oracle):
            def classify(self, items, guidance):
                with guard:
                    state["active"] += 1
                    state["peak"] = max(state["peak"], state["active"])
                time.sleep(0.05)
                with guard:
                    state["active"] -= 1
                return super().classify(items, guidance)

        def import_once():
            service = DocumentImportService(
                temp_db, SlowOracle(classification=TRIAL_BALANCE_CLASSIFICATION)
            )
            try:
                service.import_document(sample_client.id, trial_balance, mapping=TRIAL_BALANCE_MAPPING)
            finally:
                temp_db.disconnect()

        errors = _run_in_threads(import_once, [()] * 4)

        assert errors == []
        assert state["peak"] == 1
        assert len(temp_db.get_lines(sample_client.id)) == 6
        assert len(temp_db.list_imported_files(sample_client.id)) == 4

    def test_client_locks_are_shared_and_dropped_when_unused(self):
        """Test the per-client lock registry."""
        lock = document_import._client_lock(1001)

        assert document_import._client_lock(1001) is lock
        assert document_import._client_lock(1002) is not lock

        del lock
        gc.collect()
        assert 1001 not in document_import._import_locks
        assert 1002 not in document_import._import_locks
