"""
Paystack Webhook Service
Applies payment outcomes reported by Paystack to orders

Flow for charge.success:
1. Look up the order by metadata.orderId
2. Write payment_status=paid (with reference and amount)
3. Write status=confirmed
4. Send the pickup confirmation on WhatsApp

Handler failures are logged and swallowed so the endpoint still answers
200. There is no idempotency check: a replayed event re-applies the same
writes and sends the notification again.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from laundromat.connectors.paystack_connector import verify_signature
from laundromat.core.config import settings
from laundromat.domain.order import OrderStatus, PaymentStatus
from laundromat.repositories.order_repository import OrderRepository
from laundromat.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

CHARGE_SUCCESS = "charge.success"
CHARGE_FAILED = "charge.failed"
TRANSFER_SUCCESS = "transfer.success"
TRANSFER_FAILED = "transfer.failed"

PAYMENT_CONFIRMED_NOTE = "Payment confirmed - Order ready for pickup"


class PaystackWebhookService:
    """Signature check and event dispatch for Paystack callbacks"""

    def __init__(
        self,
        order_repository: Optional[OrderRepository] = None,
        notifications: Optional[NotificationService] = None,
        secret_key: Optional[str] = None
    ):
        self.orders = order_repository if order_repository is not None else OrderRepository()
        self.notifications = notifications if notifications is not None else NotificationService()
        self.secret_key = secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY

        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[None]]] = {
            CHARGE_SUCCESS: self.handle_payment_success,
            CHARGE_FAILED: self.handle_payment_failed,
            TRANSFER_SUCCESS: self.handle_transfer_success,
            TRANSFER_FAILED: self.handle_transfer_failed,
        }

    def verify(self, body: bytes, signature: Optional[str]) -> bool:
        return verify_signature(body, signature, self.secret_key)

    async def handle_event(self, event: Dict[str, Any]) -> None:
        """Dispatch on event['event']; unknown types are only logged"""
        event_type = event.get("event")
        logger.info(f"Paystack webhook received: {event_type}")

        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info(f"Unhandled Paystack event: {event_type}")
            return

        await handler(event.get("data") or {})

    async def handle_payment_success(self, data: Dict[str, Any]) -> None:
        try:
            metadata = data.get("metadata") or {}
            order_id = metadata.get("orderId")
            if not order_id:
                logger.error("No orderId in payment metadata")
                return

            self.orders.write_payment_status(
                order_id,
                PaymentStatus.PAID,
                reference=data.get("reference"),
                amount=data.get("amount")
            )
            self.orders.write_status(
                order_id,
                OrderStatus.CONFIRMED,
                changed_by="system",
                reason=PAYMENT_CONFIRMED_NOTE,
                change_type="payment_webhook"
            )

            phone = metadata.get("customerPhone")
            name = metadata.get("customerName")
            if phone and name:
                await self.notifications.send_pickup_confirmation(
                    phone,
                    name,
                    metadata.get("orderNumber") or order_id
                )

            logger.info(f"Payment successful for order {order_id}")
        except Exception as e:
            logger.error(f"Error handling payment success: {e}")

    async def handle_payment_failed(self, data: Dict[str, Any]) -> None:
        try:
            metadata = data.get("metadata") or {}
            order_id = metadata.get("orderId")
            if not order_id:
                logger.error("No orderId in payment metadata")
                return

            self.orders.write_payment_status(
                order_id,
                PaymentStatus.FAILED,
                reference=data.get("reference"),
                amount=0
            )

            phone = metadata.get("customerPhone")
            name = metadata.get("customerName")
            if phone and name:
                await self.notifications.send_payment_reminder(
                    phone,
                    name,
                    metadata.get("orderNumber") or order_id,
                    metadata.get("amount") or 0
                )

            logger.info(f"Payment failed for order {order_id}")
        except Exception as e:
            logger.error(f"Error handling payment failure: {e}")

    async def handle_transfer_success(self, data: Dict[str, Any]) -> None:
        logger.info(f"Transfer successful: {data.get('reference')}")

    async def handle_transfer_failed(self, data: Dict[str, Any]) -> None:
        logger.info(f"Transfer failed: {data.get('reference')}")
