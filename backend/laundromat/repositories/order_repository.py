"""
Order Repository - Data Access Layer for Orders

Handles all document-store access for orders and order items and returns
Order domain models. Status and payment-status writes also append an entry
to the order_status_history collection.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Any, Dict, List, Optional

from laundromat.core.database import DocumentStore, DocumentNotFoundError, utc_now_iso
from laundromat.domain.order import Order, OrderItem, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Repository for Order data access

    All reads and writes for orders are centralized here.
    Returns Order domain models with their items attached.
    """

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = store if store is not None else DocumentStore()

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID with items

        Returns:
            Order with items or None if not found
        """
        try:
            doc = self.store.get_document("orders", order_id)
        except DocumentNotFoundError:
            return None

        items = self.store.list_documents(
            "order_items",
            filters={"order_id": order_id},
            order_by="created_at",
            descending=False
        )
        return Order(**doc, items=[OrderItem(**item) for item in items])

    def find_by_customer(self, customer_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        """Orders belonging to one customer, newest first"""
        return self.find_all(customer_id=customer_id, limit=limit, offset=offset)

    def find_all(
        self,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        customer_id: Optional[str] = None,
        delivery_type: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[Order]:
        """
        Find orders with filters

        Args:
            status: Filter by order status
            payment_status: Filter by payment status
            customer_id: Filter by owning user
            delivery_type: Filter by pickup/delivery
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            List of orders with their items
        """
        docs = self.store.list_documents(
            "orders",
            filters={
                "status": status,
                "payment_status": payment_status,
                "customer_id": customer_id,
                "delivery_type": delivery_type,
            },
            order_by="created_at",
            descending=True,
            limit=limit,
            offset=offset
        )

        if not docs:
            return []

        # Get ALL items for these orders in one query
        order_ids = [doc["id"] for doc in docs]
        item_docs = self.store.list_documents(
            "order_items",
            in_filters={"order_id": order_ids},
            order_by="created_at",
            descending=False
        )

        items_by_order: Dict[str, List[OrderItem]] = {}
        for item in item_docs:
            items_by_order.setdefault(item["order_id"], []).append(OrderItem(**item))

        return [Order(**doc, items=items_by_order.get(doc["id"], [])) for doc in docs]

    def create(self, order_data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        """
        Create an order document followed by its item documents

        Args:
            order_data: Order fields (without id or items)
            items: Item fields (without id or order_id)

        Returns:
            The created Order with items
        """
        order_doc = self.store.create_document("orders", order_data)
        order_id = order_doc["id"]

        created_items = []
        for item in items:
            item_doc = self.store.create_document("order_items", {**item, "order_id": order_id})
            created_items.append(OrderItem(**item_doc))

        logger.info(f"Order {order_doc.get('order_number')} created with {len(created_items)} items")
        return Order(**order_doc, items=created_items)

    def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
        reference: Optional[str] = None,
        amount: Optional[int] = None,
        changed_by: str = "system",
        change_type: str = "payment_webhook"
    ) -> Order:
        """Write payment status and return the updated Order"""
        return Order(**self.write_payment_status(
            order_id, payment_status, reference=reference, amount=amount,
            changed_by=changed_by, change_type=change_type
        ))

    def write_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
        reference: Optional[str] = None,
        amount: Optional[int] = None,
        changed_by: str = "system",
        change_type: str = "payment_webhook"
    ) -> Dict[str, Any]:
        """
        Write payment status (plus gateway reference and paid amount)

        Returns the stored document as-is; it is not validated against
        Order, so a write never fails on unrelated legacy fields.

        Raises:
            DocumentNotFoundError if the order does not exist
        """
        current = self.store.get_document("orders", order_id)
        new_value = PaymentStatus(payment_status).value

        update: Dict[str, Any] = {"payment_status": new_value}
        if reference is not None:
            update["payment_reference"] = reference
        if amount is not None:
            update["amount_paid"] = amount

        doc = self.store.update_document("orders", order_id, update)
        self._record_change(
            order_id, "payment_status", current.get("payment_status"), new_value,
            changed_by=changed_by, reason=f"reference={reference}" if reference else None,
            change_type=change_type
        )
        return doc

    def update_status(
        self,
        order_id: str,
        status: OrderStatus,
        changed_by: str,
        reason: Optional[str] = None,
        change_type: str = "system_update"
    ) -> Order:
        """Write order status and return the updated Order"""
        return Order(**self.write_status(
            order_id, status, changed_by=changed_by, reason=reason, change_type=change_type
        ))

    def write_status(
        self,
        order_id: str,
        status: OrderStatus,
        changed_by: str,
        reason: Optional[str] = None,
        change_type: str = "system_update"
    ) -> Dict[str, Any]:
        """
        Write order status; confirmed orders also get confirmed_date_time

        Returns the stored document without validating it.

        Raises:
            DocumentNotFoundError if the order does not exist
        """
        current = self.store.get_document("orders", order_id)
        new_value = OrderStatus(status).value

        update: Dict[str, Any] = {"status": new_value}
        if new_value == OrderStatus.CONFIRMED.value:
            update["confirmed_date_time"] = utc_now_iso()

        doc = self.store.update_document("orders", order_id, update)
        self._record_change(
            order_id, "status", current.get("status"), new_value,
            changed_by=changed_by, reason=reason, change_type=change_type
        )
        return doc

    def set_payment_reference(self, order_id: str, reference: str) -> Order:
        doc = self.store.update_document("orders", order_id, {"payment_reference": reference})
        return Order(**doc)

    def assign_admin(self, order_id: str, admin_id: str) -> Order:
        doc = self.store.update_document("orders", order_id, {"assigned_admin_id": admin_id})
        return Order(**doc)

    def get_status_history(self, order_id: str) -> List[Dict[str, Any]]:
        """Audit entries for one order, oldest first"""
        return self.store.list_documents(
            "order_status_history",
            filters={"order_id": order_id},
            order_by="changed_at",
            descending=False
        )

    def _record_change(
        self,
        order_id: str,
        field: str,
        old_value: Optional[str],
        new_value: str,
        changed_by: str,
        reason: Optional[str],
        change_type: str
    ) -> None:
        self.store.create_document("order_status_history", {
            "order_id": order_id,
            "field_changed": field,
            "old_value": old_value,
            "new_value": new_value,
            "changed_by": changed_by,
            "reason": reason,
            "change_type": change_type,
            "changed_at": utc_now_iso(),
        })
