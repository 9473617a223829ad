"""
Order Service
Booking for customers and order management for admins

Handles:
- Pricing order lines from the service catalog
- Order creation (order + items) and the customer's order counter
- Owner-only order reads
- Admin status / payment-status changes with WhatsApp updates

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
import secrets
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from laundromat.domain.common import ApiResponse
from laundromat.domain.order import DeliveryType, OrderStatus, PaymentMethod, PaymentStatus
from laundromat.domain.user import Address
from laundromat.repositories.order_repository import OrderRepository
from laundromat.repositories.service_repository import ServiceRepository
from laundromat.repositories.user_repository import UserRepository
from laundromat.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order not found"
ACCESS_DENIED = "Access denied"


class BookingItem(BaseModel):
    service_id: str
    quantity: int = Field(1, ge=1)
    weight: Optional[float] = Field(None, gt=0)
    special_instructions: Optional[str] = None


class BookingRequest(BaseModel):
    delivery_type: DeliveryType
    requested_date_time: datetime
    payment_method: PaymentMethod = PaymentMethod.CARD
    pickup_address: Optional[Address] = None
    delivery_address: Optional[Address] = None
    customer_notes: Optional[str] = None
    items: List[BookingItem] = Field(..., min_length=1)


def generate_order_number(now: Optional[datetime] = None) -> str:
    """GBZ-20261018-3FA9C1"""
    now = now or datetime.now(timezone.utc)
    return f"GBZ-{now:%Y%m%d}-{secrets.token_hex(3).upper()}"


class OrderService:
    """Business logic around orders"""

    def __init__(
        self,
        order_repository: Optional[OrderRepository] = None,
        service_repository: Optional[ServiceRepository] = None,
        user_repository: Optional[UserRepository] = None,
        notifications: Optional[NotificationService] = None
    ):
        self.orders = order_repository if order_repository is not None else OrderRepository()
        self.services = service_repository if service_repository is not None else ServiceRepository()
        self.users = user_repository if user_repository is not None else UserRepository()
        self.notifications = notifications if notifications is not None else NotificationService()

    # ------------------------------------------------------------------
    # Customer booking
    # ------------------------------------------------------------------

    def create_order(self, customer_id: str, request: BookingRequest) -> ApiResponse:
        """
        Book an order priced from the catalog

        per_kg services bill price_per_kg x weight, per_item services bill
        base_price x quantity. No discount is applied at booking time, so
        final_amount equals total_amount.
        """
        if request.delivery_type == DeliveryType.DELIVERY and request.pickup_address is None:
            return ApiResponse.fail("Pickup address is required for delivery orders")

        try:
            catalog = self.services.find_by_ids(item.service_id for item in request.items)

            items = []
            for line in request.items:
                service = catalog.get(line.service_id)
                if service is None or not service.is_active:
                    return ApiResponse.fail(f"Service not available: {line.service_id}")

                try:
                    total_price = service.line_total(line.quantity, line.weight)
                except ValueError as e:
                    return ApiResponse.fail(str(e))

                items.append({
                    "service_id": service.id,
                    "quantity": line.quantity,
                    "weight": line.weight,
                    "unit_price": service.unit_price(),
                    "total_price": total_price,
                    "special_instructions": line.special_instructions,
                })

            total_amount = sum(item["total_price"] for item in items)
            discount_amount = 0

            delivery_address = None
            if request.delivery_type == DeliveryType.DELIVERY:
                delivery_address = request.delivery_address or request.pickup_address

            order_data = {
                "order_number": generate_order_number(),
                "customer_id": customer_id,
                "status": OrderStatus.PENDING.value,
                "payment_status": PaymentStatus.PENDING.value,
                "payment_method": request.payment_method.value,
                "delivery_type": request.delivery_type.value,
                "pickup_address": request.pickup_address.model_dump() if request.pickup_address else None,
                "delivery_address": delivery_address.model_dump() if delivery_address else None,
                "requested_date_time": request.requested_date_time.isoformat(),
                "total_amount": total_amount,
                "discount_amount": discount_amount,
                "final_amount": total_amount - discount_amount,
                "amount_paid": 0,
                "customer_notes": request.customer_notes,
            }

            order = self.orders.create(order_data, items)
        except Exception as e:
            logger.error(f"Failed to create order for {customer_id}: {e}")
            return ApiResponse.fail("Failed to create order. Please try again.")

        try:
            self.users.increment_order_count(customer_id)
        except Exception as e:
            logger.warning(f"Could not update order count for {customer_id}: {e}")

        return ApiResponse.ok(data=order, message="Order created successfully")

    def list_customer_orders(self, customer_id: str, limit: int = 50, offset: int = 0) -> ApiResponse:
        try:
            return ApiResponse.ok(data=self.orders.find_by_customer(customer_id, limit=limit, offset=offset))
        except Exception as e:
            logger.error(f"Failed to list orders for {customer_id}: {e}")
            return ApiResponse.fail("Failed to fetch orders")

    def get_customer_order(self, order_id: str, customer_id: str) -> ApiResponse:
        try:
            order = self.orders.find_by_id(order_id)
        except Exception as e:
            logger.error(f"Failed to fetch order {order_id}: {e}")
            return ApiResponse.fail("Failed to fetch order")

        if order is None:
            return ApiResponse.fail(ORDER_NOT_FOUND)
        if order.customer_id != customer_id:
            return ApiResponse.fail(ACCESS_DENIED)
        return ApiResponse.ok(data=order)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def list_orders(
        self,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        customer_id: Optional[str] = None,
        delivery_type: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> ApiResponse:
        try:
            orders = self.orders.find_all(
                status=status,
                payment_status=payment_status,
                customer_id=customer_id,
                delivery_type=delivery_type,
                limit=limit,
                offset=offset
            )
            return ApiResponse.ok(data=orders)
        except Exception as e:
            logger.error(f"Failed to list orders: {e}")
            return ApiResponse.fail("Failed to fetch orders")

    def get_order(self, order_id: str) -> ApiResponse:
        try:
            order = self.orders.find_by_id(order_id)
        except Exception as e:
            logger.error(f"Failed to fetch order {order_id}: {e}")
            return ApiResponse.fail("Failed to fetch order")
        if order is None:
            return ApiResponse.fail(ORDER_NOT_FOUND)
        return ApiResponse.ok(data=order)

    async def update_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        admin_id: str,
        notes: Optional[str] = None,
        notify_customer: bool = True
    ) -> ApiResponse:
        """
        Admin status change: write + audit entry, then a WhatsApp update

        A failed notification or admin assignment does not fail the status
        change once it has been written.
        """
        try:
            existing = self.orders.find_by_id(order_id)
            if existing is None:
                return ApiResponse.fail(ORDER_NOT_FOUND)

            order = self.orders.update_status(
                order_id, status, changed_by=admin_id, reason=notes, change_type="admin_update"
            )
        except Exception as e:
            logger.error(f"Failed to update status of {order_id}: {e}")
            return ApiResponse.fail("Failed to update order status")

        if existing.assigned_admin_id is None:
            try:
                order = self.orders.assign_admin(order_id, admin_id)
            except Exception as e:
                logger.warning(f"Status of {order_id} updated but assigning admin {admin_id} failed: {e}")

        if notify_customer:
            await self._notify_status(order.customer_id, order.order_number, order.status)

        return ApiResponse.ok(data=order, message="Order status updated")

    def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
        admin_id: str,
        reference: Optional[str] = None
    ) -> ApiResponse:
        """Manual payment status change (cash on delivery, pay at store)"""
        try:
            existing = self.orders.find_by_id(order_id)
            if existing is None:
                return ApiResponse.fail(ORDER_NOT_FOUND)

            amount = existing.final_amount if PaymentStatus(payment_status) == PaymentStatus.PAID else 0
            order = self.orders.update_payment_status(
                order_id,
                payment_status,
                reference=reference,
                amount=amount,
                changed_by=admin_id,
                change_type="admin_update"
            )
            return ApiResponse.ok(data=order, message="Payment status updated")
        except Exception as e:
            logger.error(f"Failed to update payment status of {order_id}: {e}")
            return ApiResponse.fail("Failed to update payment status")

    async def _notify_status(self, customer_id: str, order_number: str, status: str) -> None:
        try:
            user = self.users.find_by_id(customer_id)
        except Exception as e:
            logger.warning(f"Could not load customer {customer_id} for notification: {e}")
            return

        if user is None or not user.phone.number:
            logger.info(f"No phone on file for customer {customer_id}; skipping notification")
            return

        await self.notifications.send_order_status_update(
            user.phone.number, user.first_name, order_number, status
        )
