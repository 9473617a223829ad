"""
Notification Service
Templated WhatsApp messages for order and payment events

Sends never raise: a failed send is logged and reported in the result so
the calling flow (webhook, admin update) carries on.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Optional

from laundromat.connectors.whatsapp_connector import WhatsAppConnector
from laundromat.domain.common import ApiResponse
from laundromat.services.formatting import format_naira_from_kobo

logger = logging.getLogger(__name__)

BUSINESS_NAME = "Gab'z Laundromat"

STATUS_MESSAGES = {
    "confirmed": "has been confirmed",
    "picked_up": "has been picked up",
    "in_progress": "is being processed",
    "ready": "is ready",
    "out_for_delivery": "is out for delivery",
    "delivered": "has been delivered",
    "completed": "is complete",
    "cancelled": "has been cancelled",
}


class NotificationService:
    """WhatsApp notifications for customers"""

    def __init__(self, connector: Optional[WhatsAppConnector] = None):
        self._connector = connector

    @property
    def connector(self) -> WhatsAppConnector:
        if self._connector is None:
            self._connector = WhatsAppConnector()
        return self._connector

    async def _send(self, phone: str, body: str, kind: str) -> ApiResponse:
        try:
            result = await self.connector.send_text(phone, body)
            message_ids = [m.get("id") for m in result.get("messages", [])]
            logger.info(f"WhatsApp {kind} sent to {phone}: {message_ids}")
            return ApiResponse.ok(data=result, message="Notification sent")
        except Exception as e:
            logger.error(f"Failed to send WhatsApp {kind} to {phone}: {e}")
            return ApiResponse.fail(f"Failed to send notification: {e}")

    async def send_pickup_confirmation(self, phone: str, customer_name: str, order_ref: str) -> ApiResponse:
        body = (
            f"Hi {customer_name}, your payment for order #{order_ref} has been received "
            f"and your order is confirmed. We'll let you know when it's ready for pickup. "
            f"Thank you for choosing {BUSINESS_NAME}!"
        )
        return await self._send(phone, body, "pickup confirmation")

    async def send_payment_reminder(
        self,
        phone: str,
        customer_name: str,
        order_ref: str,
        amount: int = 0
    ) -> ApiResponse:
        body = (
            f"Hi {customer_name}, we couldn't complete the payment of "
            f"{format_naira_from_kobo(amount)} for order #{order_ref}. "
            f"Please try again from your dashboard to keep your booking. - {BUSINESS_NAME}"
        )
        return await self._send(phone, body, "payment reminder")

    async def send_order_status_update(
        self,
        phone: str,
        customer_name: str,
        order_ref: str,
        status: str
    ) -> ApiResponse:
        phrase = STATUS_MESSAGES.get(status, f"is now {status.replace('_', ' ')}")
        body = f"Hi {customer_name}, your order #{order_ref} {phrase}. - {BUSINESS_NAME}"
        return await self._send(phone, body, "status update")
