"""
Receipt Service
Builds the customer receipt for an order at request time

The receipt is a join of Order, OrderItems and Services; nothing is
persisted. Only the order's own customer may read it.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from laundromat.domain.common import ApiResponse
from laundromat.domain.order import DeliveryType, Order
from laundromat.domain.user import Address
from laundromat.repositories.order_repository import OrderRepository
from laundromat.repositories.service_repository import ServiceRepository
from laundromat.services.formatting import format_date, format_date_time, format_naira_from_kobo

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order not found"
ACCESS_DENIED = "Access denied"
LOAD_FAILED = "Failed to load order data"

STORE_INFO = [
    "Gab'z Laundromat Store",
    "Lagos, Nigeria",
    "Operating Hours: 8:00 AM - 8:00 PM",
]

PICKUP_INSTRUCTIONS = [
    "Bring this receipt when dropping off your items at our store.",
    "We'll contact you when your order is ready for pickup.",
]

DELIVERY_INSTRUCTIONS = [
    "We'll contact you to confirm the pickup time.",
    "Please have your items ready at the specified pickup address.",
]


class ReceiptLine(BaseModel):
    service_id: str
    service_name: str
    quantity: int
    weight: Optional[float] = None
    unit_price: int
    total_price: int
    description: str
    total_display: str
    special_instructions: Optional[str] = None


class Receipt(BaseModel):
    order_id: str
    order_number: str
    order_date: str
    confirmation_message: str
    delivery_type: str
    delivery_type_label: str
    requested_date_time: str
    confirmed_date_time: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: str
    pickup_address: Optional[str] = None
    delivery_address: Optional[str] = None
    store_info: Optional[List[str]] = None
    lines: List[ReceiptLine]
    customer_notes: Optional[str] = None
    subtotal: int
    discount: Optional[int] = None
    total: int
    subtotal_display: str
    discount_display: Optional[str] = None
    total_display: str
    instructions: List[str]
    generated_on: str


def format_address(address: Optional[Address]) -> Optional[str]:
    if address is None:
        return None
    return f"{address.street}, {address.area}, {address.lga}"


class ReceiptService:
    """Receipt assembly with owner-only access"""

    def __init__(
        self,
        order_repository: Optional[OrderRepository] = None,
        service_repository: Optional[ServiceRepository] = None
    ):
        self.orders = order_repository if order_repository is not None else OrderRepository()
        self.services = service_repository if service_repository is not None else ServiceRepository()

    def get_receipt(self, order_id: str, user_id: str) -> ApiResponse:
        """
        Receipt for order_id as seen by user_id

        Returns:
            ApiResponse with a Receipt, or a failure carrying ORDER_NOT_FOUND,
            ACCESS_DENIED or LOAD_FAILED. Denied results never include order data.
        """
        try:
            order = self.orders.find_by_id(order_id)
            if order is None:
                return ApiResponse.fail(ORDER_NOT_FOUND)

            if order.customer_id != user_id:
                logger.warning(f"User {user_id} denied receipt for order {order_id}")
                return ApiResponse.fail(ACCESS_DENIED)

            return ApiResponse.ok(data=self.build_receipt(order))
        except Exception as e:
            logger.error(f"Failed to load order data for {order_id}: {e}")
            return ApiResponse.fail(LOAD_FAILED)

    def build_receipt(self, order: Order) -> Receipt:
        services = self.services.find_by_ids(item.service_id for item in order.items)

        lines = []
        for item in order.items:
            service = services.get(item.service_id)
            if service is None:
                continue

            description = f"{item.quantity} x {format_naira_from_kobo(item.unit_price)}"
            if item.weight:
                description += f" ({item.weight:g}kg)"

            lines.append(ReceiptLine(
                service_id=item.service_id,
                service_name=service.name,
                quantity=item.quantity,
                weight=item.weight,
                unit_price=item.unit_price,
                total_price=item.total_price,
                description=description,
                total_display=format_naira_from_kobo(item.total_price),
                special_instructions=item.special_instructions,
            ))

        is_pickup = order.delivery_type == DeliveryType.PICKUP.value
        has_discount = order.discount_amount > 0

        confirmation = f"Your order #{order.order_number} has been received and confirmed."
        if is_pickup:
            confirmation += " You can bring this receipt when visiting our store."
        else:
            confirmation += " We will contact you to confirm the pickup time."

        return Receipt(
            order_id=order.id,
            order_number=order.order_number,
            order_date=format_date(order.created_at),
            confirmation_message=confirmation,
            delivery_type=order.delivery_type,
            delivery_type_label="Store Pickup" if is_pickup else "Home Delivery",
            requested_date_time=format_date_time(order.requested_date_time),
            confirmed_date_time=format_date_time(order.confirmed_date_time) or None,
            payment_method=order.payment_method.replace("_", " ") if order.payment_method else None,
            payment_status=order.payment_status,
            pickup_address=None if is_pickup else format_address(order.pickup_address),
            delivery_address=None if is_pickup else format_address(order.delivery_address),
            store_info=STORE_INFO if is_pickup else None,
            lines=lines,
            customer_notes=order.customer_notes,
            subtotal=order.total_amount,
            discount=order.discount_amount if has_discount else None,
            total=order.final_amount,
            subtotal_display=format_naira_from_kobo(order.total_amount),
            discount_display=f"-{format_naira_from_kobo(order.discount_amount)}" if has_discount else None,
            total_display=format_naira_from_kobo(order.final_amount),
            instructions=PICKUP_INSTRUCTIONS if is_pickup else DELIVERY_INSTRUCTIONS,
            generated_on=format_date(datetime.now(timezone.utc)),
        )
