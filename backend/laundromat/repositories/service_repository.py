"""
Service Repository - laundry service catalog

Author: Gabz Dev Team
Date: 2026-10-18
"""
from typing import Any, Dict, List, Optional, Iterable

from laundromat.core.database import DocumentStore, DocumentNotFoundError
from laundromat.domain.service import Service


class ServiceRepository:
    """Data access for the services collection"""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store if store is not None else DocumentStore()

    def find_by_id(self, service_id: str) -> Optional[Service]:
        try:
            return Service(**self.store.get_document("services", service_id))
        except DocumentNotFoundError:
            return None

    def find_by_ids(self, service_ids: Iterable[str]) -> Dict[str, Service]:
        """Services keyed by ID; unknown IDs are simply absent"""
        ids = list(dict.fromkeys(service_ids))
        if not ids:
            return {}
        docs = self.store.list_documents("services", in_filters={"id": ids})
        return {doc["id"]: Service(**doc) for doc in docs}

    def find_active(self) -> List[Service]:
        docs = self.store.list_documents(
            "services",
            filters={"is_active": True},
            order_by="name",
            descending=False
        )
        return [Service(**doc) for doc in docs]

    def find_all(self) -> List[Service]:
        docs = self.store.list_documents("services", order_by="name", descending=False)
        return [Service(**doc) for doc in docs]

    def create(self, data: Dict[str, Any]) -> Service:
        return Service(**self.store.create_document("services", data))

    def update(self, service_id: str, fields: Dict[str, Any]) -> Service:
        """
        Raises:
            DocumentNotFoundError if the service does not exist
        """
        return Service(**self.store.update_document("services", service_id, fields))

    def deactivate(self, service_id: str) -> Service:
        """Soft delete: existing orders keep pointing at the service"""
        return self.update(service_id, {"is_active": False})
