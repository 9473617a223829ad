"""
User Repository - customers and admin accounts

Author: Gabz Dev Team
Date: 2026-10-18
"""
from typing import Any, Dict, List, Optional

from laundromat.core.database import DocumentStore, DocumentNotFoundError, utc_now_iso
from laundromat.domain.user import User, AdminUser


class UserRepository:
    """Data access for the users collection"""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store if store is not None else DocumentStore()

    def find_by_id(self, user_id: str) -> Optional[User]:
        try:
            doc = self.store.get_document("users", user_id)
        except DocumentNotFoundError:
            return None
        return User.from_document(doc)

    def find_all(self, is_active: Optional[bool] = None, limit: int = 50, offset: int = 0) -> List[User]:
        docs = self.store.list_documents(
            "users",
            filters={"is_active": is_active},
            order_by="created_at",
            limit=limit,
            offset=offset
        )
        return [User.from_document(doc) for doc in docs]

    def create(self, user: User) -> User:
        """Store a profile; the document ID is the auth user ID"""
        doc = self.store.create_document("users", user.to_document(), document_id=user.id)
        return User.from_document(doc)

    def update(self, user_id: str, fields: Dict[str, Any]) -> User:
        """
        Partial profile update

        Raises:
            DocumentNotFoundError if the user does not exist
        """
        doc = self.store.update_document("users", user_id, fields)
        return User.from_document(doc)

    def increment_order_count(self, user_id: str) -> User:
        """Bump total_orders (read-then-write, not atomic)"""
        current = self.store.get_document("users", user_id)
        total = (current.get("total_orders") or 0) + 1
        return self.update(user_id, {"total_orders": total})


class AdminUserRepository:
    """Data access for the admin_users collection"""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store if store is not None else DocumentStore()

    def find_by_id(self, admin_id: str) -> Optional[AdminUser]:
        try:
            doc = self.store.get_document("admin_users", admin_id)
        except DocumentNotFoundError:
            return None
        return AdminUser(**doc)

    def find_all(self) -> List[AdminUser]:
        return [AdminUser(**doc) for doc in self.store.list_documents("admin_users", order_by="created_at")]

    def update_last_login(self, admin_id: str) -> AdminUser:
        doc = self.store.update_document("admin_users", admin_id, {"last_login": utc_now_iso()})
        return AdminUser(**doc)
