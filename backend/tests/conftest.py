"""
Pytest fixtures and configuration for Gab'z Laundromat Backend tests

This file provides shared fixtures that can be used across all test modules.
Nothing here talks to Supabase, Paystack or WhatsApp: the document store and
connectors are replaced with mocks.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import json
from unittest.mock import MagicMock

import pytest

from laundromat.connectors.paystack_connector import compute_signature
from laundromat.core.database import DocumentStore


PAYSTACK_TEST_SECRET = "sk_test_4f1c9d2e7b"


@pytest.fixture
def paystack_secret():
    """Secret key used to sign webhook bodies in tests"""
    return PAYSTACK_TEST_SECRET


@pytest.fixture
def sign_body(paystack_secret):
    """
    Returns a function that signs a raw body the way Paystack does

    Usage:
        signature = sign_body(body)
    """
    def _sign(body: bytes, secret: str = paystack_secret) -> str:
        return compute_signature(body, secret)
    return _sign


@pytest.fixture
def mock_store():
    """DocumentStore stand-in; configure get_document/list_documents per test"""
    return MagicMock(spec=DocumentStore)


@pytest.fixture
def supabase_query():
    """
    Chainable Supabase query builder

    Every builder method returns the same mock so a test can inspect which
    filters were applied and set `execute.return_value.data`.
    """
    query = MagicMock()
    for method in ("select", "eq", "in_", "order", "range", "limit", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    return query


@pytest.fixture
def supabase_client(supabase_query):
    client = MagicMock()
    client.table.return_value = supabase_query
    return client


@pytest.fixture
def sample_order_doc():
    """
    Provides a stored order: store pickup, two lines, unpaid
    """
    return {
        "id": "o1",
        "order_number": "GBZ-20261018-ABC123",
        "customer_id": "u1",
        "assigned_admin_id": None,
        "status": "pending",
        "payment_status": "pending",
        "payment_method": "card",
        "payment_reference": None,
        "amount_paid": 0,
        "delivery_type": "pickup",
        "pickup_address": None,
        "delivery_address": None,
        "requested_date_time": "2026-10-20T10:00:00+00:00",
        "confirmed_date_time": None,
        "total_amount": 500000,
        "discount_amount": 0,
        "final_amount": 500000,
        "customer_notes": "Please use mild detergent",
        "created_at": "2026-10-18T09:00:00+00:00",
        "updated_at": "2026-10-18T09:00:00+00:00",
    }


@pytest.fixture
def sample_item_docs():
    """
    Provides the two lines of sample_order_doc

    s1: 2 shirts x ₦1,500.00 = ₦3,000.00
    s2: 5kg x ₦400.00 = ₦2,000.00
    """
    return [
        {
            "id": "i1",
            "order_id": "o1",
            "service_id": "s1",
            "quantity": 2,
            "weight": None,
            "unit_price": 150000,
            "total_price": 300000,
            "special_instructions": None,
        },
        {
            "id": "i2",
            "order_id": "o1",
            "service_id": "s2",
            "quantity": 1,
            "weight": 5.0,
            "unit_price": 40000,
            "total_price": 200000,
            "special_instructions": "Separate whites",
        },
    ]


@pytest.fixture
def sample_service_docs():
    """
    Provides catalog entries matching sample_item_docs
    """
    return [
        {
            "id": "s1",
            "name": "Shirt Laundry",
            "category": "washing",
            "pricing_type": "per_item",
            "base_price": 150000,
            "price_per_kg": None,
            "is_active": True,
        },
        {
            "id": "s2",
            "name": "Wash & Fold",
            "category": "washing",
            "pricing_type": "per_kg",
            "base_price": 0,
            "price_per_kg": 40000,
            "is_active": True,
        },
    ]


@pytest.fixture
def sample_user_doc():
    """
    Provides a stored customer profile (phone flattened into columns)
    """
    return {
        "id": "u1",
        "email": "ada@example.com",
        "first_name": "Ada",
        "last_name": "Obi",
        "phone": "+2348012345678",
        "is_whatsapp_number": True,
        "addresses": [
            {"street": "12 Admiralty Way", "area": "Lekki Phase 1", "lga": "Eti-Osa", "is_default": True}
        ],
        "total_orders": 3,
        "total_spent": 1500000,
        "loyalty_points": 15,
        "is_active": True,
    }


@pytest.fixture
def charge_success_event():
    """
    Provides a charge.success webhook event for order o1
    """
    return {
        "event": "charge.success",
        "data": {
            "reference": "GBZ-20261018-ABC123-9F3A1B2C",
            "amount": 500000,
            "status": "success",
            "metadata": {
                "orderId": "o1",
                "customerPhone": "+2348000000000",
                "customerName": "Ada",
            },
        },
    }


@pytest.fixture
def charge_failed_event():
    """
    Provides a charge.failed webhook event for order o1
    """
    return {
        "event": "charge.failed",
        "data": {
            "reference": "GBZ-20261018-ABC123-77D0E1AA",
            "amount": 500000,
            "status": "failed",
            "metadata": {
                "orderId": "o1",
                "orderNumber": "GBZ-20261018-ABC123",
                "customerPhone": "+2348000000000",
                "customerName": "Ada",
                "amount": 500000,
            },
        },
    }


@pytest.fixture
def raw_body():
    """Serialize an event exactly once so tests sign the same bytes they send"""
    def _raw(event: dict) -> bytes:
        return json.dumps(event, separators=(",", ":")).encode("utf-8")
    return _raw
