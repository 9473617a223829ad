"""
Order Domain Models

Represents laundry orders and their line items.
These are the single source of truth for order data structure.

Amounts are stored as integers in kobo (1 naira = 100 kobo).

Author: Gabz Dev Team
Date: 2026-10-18
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional, List
from datetime import datetime

from laundromat.domain.user import Address


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PICKED_UP = "picked_up"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    CASH_ON_DELIVERY = "cash_on_delivery"
    PAY_AT_STORE = "pay_at_store"


class DeliveryType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class OrderItem(BaseModel):
    """
    Order Item domain model - one service line in an order

    Fields:
        id: Order item document ID
        order_id: Parent order ID
        service_id: Reference to the service catalog
        quantity: Number of items
        weight: Weight in kg (per_kg services)
        unit_price: Price per item or per kg, in kobo
        total_price: Line total, in kobo
        special_instructions: Customer note for this line
    """

    id: str = Field(..., description="Order item ID")
    order_id: str = Field(..., description="Parent order ID")
    service_id: str = Field(..., description="Service catalog ID")
    quantity: int = Field(..., description="Quantity", ge=1)
    weight: Optional[float] = Field(None, description="Weight in kg", gt=0)
    unit_price: int = Field(..., description="Unit price in kobo", ge=0)
    total_price: int = Field(..., description="Line total in kobo", ge=0)
    special_instructions: Optional[str] = Field(None, description="Line notes")

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class Order(BaseModel):
    """
    Order domain model - a customer laundry booking

    Invariant: final_amount == total_amount - discount_amount. When
    final_amount is missing it is derived; a stored value that disagrees is
    rejected.
    """

    # Identification
    id: str = Field(..., description="Order document ID")
    order_number: str = Field(..., description="Human-readable order number")

    # References
    customer_id: str = Field(..., description="Owning user ID")
    assigned_admin_id: Optional[str] = Field(None, description="Admin handling the order")

    # Status tracking
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    payment_status: PaymentStatus = Field(PaymentStatus.PENDING, description="Payment status")
    payment_method: Optional[PaymentMethod] = Field(None, description="Payment method")
    payment_reference: Optional[str] = Field(None, description="Gateway transaction reference")
    amount_paid: int = Field(0, description="Amount paid in kobo", ge=0)

    # Logistics
    delivery_type: DeliveryType = Field(..., description="Store pickup or home delivery")
    pickup_address: Optional[Address] = None
    delivery_address: Optional[Address] = None
    requested_date_time: datetime = Field(..., description="Requested pickup/drop-off time")
    confirmed_date_time: Optional[datetime] = None

    # Amounts (kobo)
    total_amount: int = Field(..., description="Sum of line totals", ge=0)
    discount_amount: int = Field(0, description="Discount", ge=0)
    final_amount: Optional[int] = Field(None, description="Amount due", ge=0)

    customer_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    @model_validator(mode="after")
    def check_amounts(self) -> "Order":
        expected = self.total_amount - self.discount_amount
        if expected < 0:
            raise ValueError("discount_amount cannot exceed total_amount")
        if self.final_amount is None:
            self.final_amount = expected
        elif self.final_amount != expected:
            raise ValueError(
                f"final_amount {self.final_amount} != total_amount - discount_amount ({expected})"
            )
        return self

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def to_dict(self) -> dict:
        """Serialize for API responses, with computed fields"""
        data = self.model_dump(mode="json")
        data['item_count'] = self.item_count
        data['is_paid'] = self.is_paid
        return data
