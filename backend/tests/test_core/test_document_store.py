"""
Unit tests for DocumentStore

The Supabase client is a MagicMock whose query builder returns itself, so
the tests check which calls the store chains together.

Author: Gabz Dev Team
Date: 2026-10-18
"""
from unittest.mock import MagicMock

import pytest

from laundromat.core.database import DocumentNotFoundError, DocumentStore


TABLES = {"orders": "orders", "order_items": "order_items", "services": "laundry_services"}


class TestDocumentStore:
    """Test DocumentStore methods"""

    def test_get_document_returns_first_row(self, supabase_client, supabase_query):
        # Arrange
        supabase_query.execute.return_value = MagicMock(data=[{"id": "o1", "status": "pending"}])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        # Act
        doc = store.get_document("orders", "o1")

        # Assert
        assert doc == {"id": "o1", "status": "pending"}
        supabase_client.table.assert_called_once_with("orders")
        supabase_query.eq.assert_called_once_with("id", "o1")

    def test_get_document_raises_when_missing(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        with pytest.raises(DocumentNotFoundError) as exc_info:
            store.get_document("orders", "nope")

        assert exc_info.value.collection == "orders"
        assert exc_info.value.document_id == "nope"

    def test_collection_maps_to_configured_table(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        store.list_documents("services")

        supabase_client.table.assert_called_once_with("laundry_services")

    def test_unknown_collection_raises(self, supabase_client):
        store = DocumentStore(client=supabase_client, tables=TABLES)

        with pytest.raises(ValueError, match="Unknown collection"):
            store.get_document("invoices", "x")

    def test_create_document_generates_id_and_timestamps(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        doc = store.create_document("orders", {"order_number": "GBZ-1"})

        payload = supabase_query.insert.call_args[0][0]
        assert payload["order_number"] == "GBZ-1"
        assert payload["id"]
        assert payload["created_at"] == payload["updated_at"]
        # Falls back to the payload when the insert returns no rows
        assert doc == payload

    def test_create_document_uses_given_id(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[{"id": "u1", "email": "ada@example.com"}])
        store = DocumentStore(client=supabase_client, tables={"users": "users"})

        doc = store.create_document("users", {"email": "ada@example.com"}, document_id="u1")

        assert supabase_query.insert.call_args[0][0]["id"] == "u1"
        assert doc["id"] == "u1"

    def test_update_document_stamps_updated_at(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[{"id": "o1", "status": "confirmed"}])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        doc = store.update_document("orders", "o1", {"status": "confirmed"})

        payload = supabase_query.update.call_args[0][0]
        assert payload["status"] == "confirmed"
        assert "updated_at" in payload
        supabase_query.eq.assert_called_once_with("id", "o1")
        assert doc["status"] == "confirmed"

    def test_update_document_raises_when_missing(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        with pytest.raises(DocumentNotFoundError):
            store.update_document("orders", "nope", {"status": "confirmed"})

    def test_list_documents_applies_filters_order_and_range(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=[{"id": "o1"}, {"id": "o2"}])
        store = DocumentStore(client=supabase_client, tables=TABLES)

        docs = store.list_documents(
            "orders",
            filters={"payment_status": "paid", "status": None},
            order_by="created_at",
            limit=20,
            offset=10
        )

        assert [d["id"] for d in docs] == ["o1", "o2"]
        # None filters are skipped
        supabase_query.eq.assert_called_once_with("payment_status", "paid")
        supabase_query.order.assert_called_once_with("created_at", desc=True)
        supabase_query.range.assert_called_once_with(10, 29)

    def test_list_documents_in_filter(self, supabase_client, supabase_query):
        store = DocumentStore(client=supabase_client, tables=TABLES)

        store.list_documents("order_items", in_filters={"order_id": ["o1", "o2"]})

        supabase_query.in_.assert_called_once_with("order_id", ["o1", "o2"])
        supabase_query.range.assert_not_called()

    def test_list_documents_returns_empty_list_for_no_rows(self, supabase_client, supabase_query):
        supabase_query.execute.return_value = MagicMock(data=None)
        store = DocumentStore(client=supabase_client, tables=TABLES)

        assert store.list_documents("orders") == []
