"""
Unit tests for PaystackWebhookService

The order repository and notification service are mocks; the tests check
which writes happen, in what order, and which message goes out.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from laundromat.core.database import DocumentNotFoundError
from laundromat.domain.order import OrderStatus, PaymentStatus
from laundromat.repositories.order_repository import OrderRepository
from laundromat.services.webhook_service import PAYMENT_CONFIRMED_NOTE, PaystackWebhookService


@pytest.fixture
def orders():
    return MagicMock()


@pytest.fixture
def notifications():
    return AsyncMock()


@pytest.fixture
def webhook_service(orders, notifications, paystack_secret):
    return PaystackWebhookService(
        order_repository=orders,
        notifications=notifications,
        secret_key=paystack_secret
    )


class TestChargeSuccess:

    def test_marks_paid_then_confirmed_then_notifies(self, webhook_service, orders, notifications,
                                                     charge_success_event):
        # Act
        asyncio.run(webhook_service.handle_event(charge_success_event))

        # Assert: payment write, then status write
        orders.write_payment_status.assert_called_once_with(
            "o1",
            PaymentStatus.PAID,
            reference="GBZ-20261018-ABC123-9F3A1B2C",
            amount=500000
        )
        orders.write_status.assert_called_once_with(
            "o1",
            OrderStatus.CONFIRMED,
            changed_by="system",
            reason=PAYMENT_CONFIRMED_NOTE,
            change_type="payment_webhook"
        )
        assert [c[0] for c in orders.method_calls] == ["write_payment_status", "write_status"]

        # No orderNumber in metadata, so the order id is the reference
        notifications.send_pickup_confirmation.assert_awaited_once_with("+2348000000000", "Ada", "o1")

    def test_order_number_preferred_in_message(self, webhook_service, notifications, charge_success_event):
        charge_success_event["data"]["metadata"]["orderNumber"] = "GBZ-20261018-ABC123"

        asyncio.run(webhook_service.handle_event(charge_success_event))

        notifications.send_pickup_confirmation.assert_awaited_once_with(
            "+2348000000000", "Ada", "GBZ-20261018-ABC123"
        )

    def test_missing_order_id_writes_nothing(self, webhook_service, orders, notifications,
                                             charge_success_event):
        del charge_success_event["data"]["metadata"]["orderId"]

        asyncio.run(webhook_service.handle_event(charge_success_event))

        orders.write_payment_status.assert_not_called()
        orders.write_status.assert_not_called()
        notifications.send_pickup_confirmation.assert_not_awaited()

    def test_missing_phone_skips_notification(self, webhook_service, orders, notifications,
                                              charge_success_event):
        del charge_success_event["data"]["metadata"]["customerPhone"]

        asyncio.run(webhook_service.handle_event(charge_success_event))

        orders.write_status.assert_called_once()
        notifications.send_pickup_confirmation.assert_not_awaited()

    def test_unknown_order_is_swallowed(self, webhook_service, orders, notifications, charge_success_event):
        """A failing write is logged; the handler still returns normally"""
        orders.write_payment_status.side_effect = DocumentNotFoundError("orders", "o1")

        asyncio.run(webhook_service.handle_event(charge_success_event))

        orders.write_status.assert_not_called()
        notifications.send_pickup_confirmation.assert_not_awaited()

    def test_status_write_failure_skips_notification(self, webhook_service, orders, notifications,
                                                     charge_success_event):
        orders.write_status.side_effect = Exception("connection reset")

        asyncio.run(webhook_service.handle_event(charge_success_event))

        orders.write_payment_status.assert_called_once()
        notifications.send_pickup_confirmation.assert_not_awaited()

    def test_replay_applies_writes_again(self, webhook_service, orders, notifications, charge_success_event):
        """Events are not de-duplicated: the same event twice writes and notifies twice"""
        asyncio.run(webhook_service.handle_event(charge_success_event))
        asyncio.run(webhook_service.handle_event(charge_success_event))

        assert orders.write_payment_status.call_count == 2
        assert orders.write_status.call_count == 2
        assert notifications.send_pickup_confirmation.await_count == 2


class TestChargeFailed:

    def test_marks_failed_and_sends_reminder(self, webhook_service, orders, notifications,
                                             charge_failed_event):
        asyncio.run(webhook_service.handle_event(charge_failed_event))

        orders.write_payment_status.assert_called_once_with(
            "o1",
            PaymentStatus.FAILED,
            reference="GBZ-20261018-ABC123-77D0E1AA",
            amount=0
        )
        orders.write_status.assert_not_called()
        notifications.send_payment_reminder.assert_awaited_once_with(
            "+2348000000000", "Ada", "GBZ-20261018-ABC123", 500000
        )

    def test_missing_order_id_writes_nothing(self, webhook_service, orders, charge_failed_event):
        charge_failed_event["data"]["metadata"] = {}

        asyncio.run(webhook_service.handle_event(charge_failed_event))

        orders.write_payment_status.assert_not_called()


class TestOtherEvents:

    @pytest.mark.parametrize("event_type", ["transfer.success", "transfer.failed", "subscription.create"])
    def test_no_order_writes(self, webhook_service, orders, notifications, event_type):
        asyncio.run(webhook_service.handle_event({"event": event_type, "data": {"reference": "TRF_1"}}))

        assert orders.method_calls == []
        assert notifications.method_calls == []

    def test_verify_uses_configured_secret(self, webhook_service, sign_body):
        body = b'{"event":"charge.success"}'

        assert webhook_service.verify(body, sign_body(body)) is True
        assert webhook_service.verify(body, sign_body(body, "sk_other")) is False
        assert webhook_service.verify(body, None) is False


class InMemoryStore:
    """Dict-backed stand-in for DocumentStore: keeps whatever it is given"""

    def __init__(self, collections=None):
        self.collections = {name: dict(docs) for name, docs in (collections or {}).items()}
        self._next_id = 0

    def get_document(self, collection, document_id):
        try:
            return dict(self.collections[collection][document_id])
        except KeyError:
            raise DocumentNotFoundError(collection, document_id)

    def create_document(self, collection, data, document_id=None):
        self._next_id += 1
        doc = {**data, "id": document_id or data.get("id") or f"{collection}-{self._next_id}"}
        self.collections.setdefault(collection, {})[doc["id"]] = doc
        return dict(doc)

    def update_document(self, collection, document_id, data):
        doc = self.get_document(collection, document_id)
        doc.update(data)
        self.collections[collection][document_id] = doc
        return dict(doc)

    def list_documents(self, collection, filters=None, **kwargs):
        return [
            dict(doc) for doc in self.collections.get(collection, {}).values()
            if all(doc.get(k) == v for k, v in (filters or {}).items() if v is not None)
        ]


class TestChargeSuccessAgainstStoredOrders:
    """Real OrderRepository over an in-memory store"""

    def test_legacy_status_still_gets_paid_confirmed_and_notified(self, notifications, paystack_secret,
                                                                  sample_order_doc, charge_success_event):
        # Arrange: a stored status the Order model does not know about
        store = InMemoryStore({"orders": {"o1": {**sample_order_doc, "status": "processing"}}})
        service = PaystackWebhookService(
            order_repository=OrderRepository(store),
            notifications=notifications,
            secret_key=paystack_secret
        )

        # Act
        asyncio.run(service.handle_event(charge_success_event))

        # Assert
        stored = store.get_document("orders", "o1")
        assert stored["payment_status"] == "paid"
        assert stored["payment_reference"] == "GBZ-20261018-ABC123-9F3A1B2C"
        assert stored["amount_paid"] == 500000
        assert stored["status"] == "confirmed"
        assert stored["confirmed_date_time"] is not None

        history = store.list_documents("order_status_history", filters={"order_id": "o1"})
        assert [(h["field_changed"], h["old_value"], h["new_value"]) for h in history] == [
            ("payment_status", "pending", "paid"),
            ("status", "processing", "confirmed"),
        ]
        notifications.send_pickup_confirmation.assert_awaited_once_with("+2348000000000", "Ada", "o1")
