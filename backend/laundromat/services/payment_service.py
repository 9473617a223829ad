"""
Payment Service
Starts Paystack checkouts and verifies them when the customer returns

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
import secrets
from typing import Optional

from laundromat.connectors.paystack_connector import PaystackConnector
from laundromat.domain.common import ApiResponse
from laundromat.domain.order import PaymentStatus
from laundromat.repositories.order_repository import OrderRepository
from laundromat.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

MSG_NO_REFERENCE = "Payment reference not found"
MSG_SUCCESS = "Payment successful! Your order has been confirmed."
MSG_NOT_SUCCESSFUL = "Payment was not successful. Please try again."
MSG_UNVERIFIABLE = "Unable to verify payment. Please contact support."
MSG_ERROR = "An error occurred while verifying payment."


def generate_reference(order_number: str) -> str:
    return f"{order_number}-{secrets.token_hex(4).upper()}"


class PaymentService:
    """Paystack checkout and verification"""

    def __init__(
        self,
        connector: Optional[PaystackConnector] = None,
        order_repository: Optional[OrderRepository] = None,
        user_repository: Optional[UserRepository] = None
    ):
        self._connector = connector
        self.orders = order_repository if order_repository is not None else OrderRepository()
        self.users = user_repository if user_repository is not None else UserRepository()

    @property
    def connector(self) -> PaystackConnector:
        if self._connector is None:
            self._connector = PaystackConnector()
        return self._connector

    async def verify_payment(self, reference: str) -> ApiResponse:
        """Gateway lookup by reference; data carries the transaction status"""
        try:
            data = await self.connector.verify_transaction(reference)
            return ApiResponse.ok(data=data)
        except Exception as e:
            logger.error(f"Paystack verification failed for {reference}: {e}")
            return ApiResponse.fail("Failed to verify payment")

    async def verify_callback(self, reference: Optional[str], order_id: Optional[str] = None) -> dict:
        """
        Result for the page the customer lands on after checkout

        Returns:
            {success, message, order_id?, order_number?}
        """
        if not reference:
            return {"success": False, "message": MSG_NO_REFERENCE}

        try:
            verification = await self.verify_payment(reference)
            if not verification.success or not verification.data:
                return {"success": False, "message": MSG_UNVERIFIABLE}

            if verification.data.get("status") != "success":
                return {"success": False, "message": MSG_NOT_SUCCESSFUL}

            order_number = ""
            if order_id:
                order = self.orders.find_by_id(order_id)
                if order:
                    order_number = order.order_number

            return {
                "success": True,
                "message": MSG_SUCCESS,
                "order_id": order_id,
                "order_number": order_number,
            }
        except Exception as e:
            logger.error(f"Payment verification error: {e}")
            return {"success": False, "message": MSG_ERROR}

    async def initialize_payment(self, order_id: str, user_id: str) -> ApiResponse:
        """
        Start a Paystack checkout for one of the caller's unpaid orders

        The metadata sent here comes back in the webhook and drives the
        order update and the WhatsApp message.
        """
        try:
            order = self.orders.find_by_id(order_id)
            if order is None:
                return ApiResponse.fail("Order not found")
            if order.customer_id != user_id:
                return ApiResponse.fail("Access denied")
            if order.payment_status == PaymentStatus.PAID.value:
                return ApiResponse.fail("Order is already paid")

            user = self.users.find_by_id(user_id)
            if user is None:
                return ApiResponse.fail("User profile not found")

            reference = generate_reference(order.order_number)
            metadata = {
                "orderId": order.id,
                "orderNumber": order.order_number,
                "customerName": user.full_name,
                "customerPhone": user.phone.number,
                "amount": order.final_amount,
            }

            data = await self.connector.initialize_transaction(
                email=user.email,
                amount=order.final_amount,
                reference=reference,
                metadata=metadata
            )
            self.orders.set_payment_reference(order.id, reference)

            return ApiResponse.ok(
                data={
                    "authorization_url": data.get("authorization_url"),
                    "access_code": data.get("access_code"),
                    "reference": data.get("reference", reference),
                },
                message="Payment initialized"
            )
        except Exception as e:
            logger.error(f"Failed to initialize payment for order {order_id}: {e}")
            return ApiResponse.fail("Failed to initialize payment")
