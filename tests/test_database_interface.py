"""Tests for Database interface returning domain models."""

import pytest
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from ledgerflow.domain import entities
from ledgerflow.domain.classification import merge_classification
from ledgerflow.domain.entities import ColumnMapping, Section
from ledgerflow.domain.extraction import extract_rows
from ledgerflow.domain.errors import ConflictError, NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_client_returns_domain_model(self, temp_db):
        """Test that get_client returns a domain Client entity."""
        client_id = temp_db.create_client(name="Acme SA", tax_id="30-1", industry="Retail")

        client = temp_db.get_client(client_id)

        assert isinstance(client, entities.Client)
        assert client.id == client_id
        assert client.name == "Acme SA"
        assert isinstance(client.created_at, datetime)
        assert isinstance(client.last_updated, datetime)

    def test_get_lines_returns_domain_models(self, temp_db, make_line):
        """Test that get_lines returns domain Line entities with Decimal amounts."""
        client_id = temp_db.create_client(name="Acme SA")
        temp_db.replace_lines(client_id, [make_line("12.34", Section.EXPENSE, "Selling Expenses")])

        (line,) = temp_db.get_lines(client_id)

        assert isinstance(line, entities.Line)
        assert isinstance(line.balance, Decimal)
        assert line.balance == Decimal("12.34")
        assert line.section == Section.EXPENSE
        assert line.category == "Selling Expenses"

    def test_list_imported_files_returns_domain_models(self, temp_db):
        """Test that import history comes back as domain entities."""
        client_id = temp_db.create_client(name="Acme SA")
        temp_db.add_imported_file(client_id, name="a.csv", mime_type="text/csv", line_count=2)

        (record,) = temp_db.list_imported_files(client_id)

        assert isinstance(record, entities.ImportedFile)
        assert record.client_id == client_id
        assert isinstance(record.imported_at, datetime)


class TestReplaceLines:
    """Tests for whole-set line replacement."""

    def test_order_is_preserved(self, temp_db, make_line):
        """Test that lines keep the given order."""
        client_id = temp_db.create_client(name="Acme SA")
        lines = [make_line(str(i), name=f"Line {i}") for i in (3, 1, 2)]

        temp_db.replace_lines(client_id, lines)

        assert [line.name for line in temp_db.get_lines(client_id)] == ["Line 3", "Line 1", "Line 2"]

    def test_replacing_with_same_ids(self, temp_db, make_line):
        """Test that edited lines keep their ids across replacements."""
        client_id = temp_db.create_client(name="Acme SA")
        line = make_line("5", line_id="fixed-id")
        temp_db.replace_lines(client_id, [line])

        edited = replace(line, name="Edited", manual_override=True)
        temp_db.replace_lines(client_id, [edited])

        (stored,) = temp_db.get_lines(client_id)
        assert stored.id == "fixed-id"
        assert stored.name == "Edited"
        assert stored.manual_override is True

    def test_replacing_with_empty_set(self, temp_db, make_line):
        """Test clearing all lines."""
        client_id = temp_db.create_client(name="Acme SA")
        temp_db.replace_lines(client_id, [make_line("1"), make_line("2")])

        temp_db.replace_lines(client_id, [])

        assert temp_db.get_lines(client_id) == []

    def test_clients_are_isolated(self, temp_db, make_line):
        """Test that replacing one client's lines leaves others alone."""
        first = temp_db.create_client(name="First")
        second = temp_db.create_client(name="Second")
        temp_db.replace_lines(first, [make_line("1")])
        temp_db.replace_lines(second, [make_line("2")])

        temp_db.replace_lines(first, [])

        assert len(temp_db.get_lines(second)) == 1

    def test_sub_cent_amounts_keep_balance_consistent(self, temp_db):
        """Test that extracted amounts reload with balance equal to debit minus credit."""
        client_id = temp_db.create_client(name="Acme SA")
        mapping = ColumnMapping(name_index=0, debit_index=1, credit_index=2)
        raw = extract_rows([["Rounding", "0.006", "0.004"]], mapping)
        temp_db.replace_lines(client_id, merge_classification(raw, {}))

        (stored,) = temp_db.get_lines(client_id)

        assert stored.debit == Decimal("0.01")
        assert stored.credit == Decimal("0")
        assert stored.balance == stored.debit - stored.credit

    def test_unknown_client(self, temp_db, make_line):
        """Test replacing lines of an unknown client."""
        with pytest.raises(NotFoundError):
            temp_db.replace_lines(999, [make_line("1")])


class TestClientRecords:
    """Tests for client record operations."""

    def test_update_client_duplicate_name(self, temp_db):
        """Test that the database rejects duplicate names on update."""
        temp_db.create_client(name="First")
        second = temp_db.create_client(name="Second")

        with pytest.raises(ConflictError):
            temp_db.update_client(second, name="First")

    def test_set_custom_regulations(self, temp_db):
        """Test storing and clearing regulations."""
        client_id = temp_db.create_client(name="Acme SA")

        temp_db.set_custom_regulations(client_id, "Own chart")
        assert temp_db.get_client(client_id).custom_regulations == "Own chart"

        temp_db.set_custom_regulations(client_id, None)
        assert temp_db.get_client(client_id).custom_regulations is None


class TestSettings:
    """Tests for application settings."""

    def test_set_get_delete(self, temp_db):
        """Test the setting lifecycle."""
        assert temp_db.get_setting("global_model") is None

        temp_db.set_setting("global_model", "v1")
        temp_db.set_setting("global_model", "v2")
        assert temp_db.get_setting("global_model") == "v2"

        temp_db.set_setting("global_model", None)
        assert temp_db.get_setting("global_model") is None
        # Removing again is harmless
        temp_db.set_setting("global_model", None)
