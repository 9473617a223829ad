"""
Document store access (Supabase)

This module centralizes every way of reaching the managed database:
- Supabase client (service role, for server-side reads/writes)
- Supabase anon client (for auth flows that create user sessions)
- DocumentStore: generic get/create/update/list calls keyed by document id

Collections are addressed by logical name (users, admin_users, orders,
order_items, services, order_status_history) and mapped to tables through
settings.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from .config import settings

logger = logging.getLogger(__name__)


class DocumentNotFoundError(Exception):
    """Raised when a document id does not exist in a collection"""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found in {collection}")


# ============================================================================
# Supabase Clients
# ============================================================================

_supabase: Optional[Client] = None


def get_supabase() -> Client:
    """
    FastAPI dependency returning the shared service-role Supabase client

    The client is created on first use so importing the app never needs
    credentials.
    """
    global _supabase
    if _supabase is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise Exception("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not configured")
        _supabase = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _supabase


def get_auth_client() -> Client:
    """
    Fresh anon-key client for sign-up / sign-in calls

    Signing in mutates the client's session, so a new client is created per
    call instead of reusing the service-role one.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        raise Exception("SUPABASE_URL / SUPABASE_ANON_KEY not configured")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================================
# Document Store
# ============================================================================

class DocumentStore:
    """
    Generic document access over Supabase tables

    Every record carries a text primary key `id`. Reads always go to the
    database; nothing is cached here.

    Usage:
        store = DocumentStore()
        order = store.get_document("orders", "o1")
        store.update_document("orders", "o1", {"status": "confirmed"})
    """

    def __init__(self, client: Optional[Client] = None, tables: Optional[Dict[str, str]] = None):
        self._client = client
        self.tables = tables or settings.get_collection_tables()

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _table(self, collection: str):
        table_name = self.tables.get(collection)
        if table_name is None:
            raise ValueError(f"Unknown collection: {collection}")
        return self.client.table(table_name)

    def get_document(self, collection: str, document_id: str) -> Dict[str, Any]:
        """
        Fetch one document by id

        Raises:
            DocumentNotFoundError if no row has that id
        """
        response = self._table(collection).select("*").eq("id", document_id).limit(1).execute()
        if not response.data:
            raise DocumentNotFoundError(collection, document_id)
        return response.data[0]

    def create_document(
        self,
        collection: str,
        data: Dict[str, Any],
        document_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Insert a document, generating a UUID id when none is given

        Returns:
            The stored document as returned by the database
        """
        now = utc_now_iso()
        payload = dict(data)
        payload["id"] = document_id or payload.get("id") or str(uuid.uuid4())
        payload.setdefault("created_at", now)
        payload.setdefault("updated_at", now)

        response = self._table(collection).insert(payload).execute()
        logger.debug(f"Created document {payload['id']} in {collection}")
        return response.data[0] if response.data else payload

    def update_document(self, collection: str, document_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update to a document

        Raises:
            DocumentNotFoundError if no row has that id
        """
        payload = dict(data)
        payload["updated_at"] = utc_now_iso()

        response = self._table(collection).update(payload).eq("id", document_id).execute()
        if not response.data:
            raise DocumentNotFoundError(collection, document_id)
        return response.data[0]

    def list_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
        in_filters: Optional[Dict[str, List[Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        List documents with equality filters

        Args:
            collection: Logical collection name
            filters: {column: value} equality filters; None values are skipped
            order_by: Column to sort by
            descending: Sort direction
            limit: Maximum rows to return
            offset: Rows to skip (only applied together with limit)
            in_filters: {column: [values]} membership filters

        Returns:
            List of documents (possibly empty)
        """
        query = self._table(collection).select("*")

        for column, value in (filters or {}).items():
            if value is not None:
                query = query.eq(column, value)

        for column, values in (in_filters or {}).items():
            query = query.in_(column, list(values))

        if order_by:
            query = query.order(order_by, desc=descending)

        if limit is not None:
            query = query.range(offset, offset + limit - 1)

        response = query.execute()
        return response.data or []


def get_document_store() -> DocumentStore:
    """
    FastAPI dependency returning a DocumentStore

    Usage:
        @router.get("/orders/{order_id}")
        def read_order(store: DocumentStore = Depends(get_document_store)):
            ...
    """
    return DocumentStore()
