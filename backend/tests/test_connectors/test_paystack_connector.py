"""
Unit tests for the Paystack connector

Covers webhook signature verification and the REST calls (with httpx
mocked out).

Author: Gabz Dev Team
Date: 2026-10-18
"""
import asyncio
import hashlib
import hmac
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from laundromat.connectors.paystack_connector import (
    PaystackConnector,
    compute_signature,
    verify_signature,
)


class TestSignatureVerification:
    """HMAC-SHA512 over the raw body"""

    def test_compute_signature_is_hmac_sha512_hex(self, paystack_secret):
        body = b'{"event":"charge.success"}'
        expected = hmac.new(paystack_secret.encode(), body, hashlib.sha512).hexdigest()

        assert compute_signature(body, paystack_secret) == expected
        assert len(expected) == 128

    def test_valid_signature_verifies(self, paystack_secret, sign_body):
        body = b'{"event":"charge.success","data":{}}'
        assert verify_signature(body, sign_body(body), paystack_secret) is True

    def test_missing_signature_fails(self, paystack_secret):
        assert verify_signature(b"{}", None, paystack_secret) is False
        assert verify_signature(b"{}", "", paystack_secret) is False

    def test_unset_secret_never_verifies(self, sign_body):
        body = b"{}"
        assert verify_signature(body, sign_body(body, ""), "") is False
        assert verify_signature(body, sign_body(body), None) is False

    def test_uppercase_hex_does_not_match(self, paystack_secret, sign_body):
        body = b'{"event":"charge.success"}'
        assert verify_signature(body, sign_body(body).upper(), paystack_secret) is False

    def test_signature_is_over_exact_bytes(self, paystack_secret, sign_body):
        """Re-serialized JSON with different whitespace is a different body"""
        compact = b'{"event":"charge.success"}'
        spaced = b'{"event": "charge.success"}'
        assert verify_signature(spaced, sign_body(compact), paystack_secret) is False

    def test_wrong_secret_fails(self, paystack_secret, sign_body):
        body = b'{"event":"charge.success"}'
        assert verify_signature(body, sign_body(body, "sk_other"), paystack_secret) is False

    def test_non_ascii_signature_fails_without_error(self, paystack_secret):
        assert verify_signature(b"{}", "ñ" * 128, paystack_secret) is False


class TestPaystackConnector:
    """REST calls with a mocked httpx.AsyncClient"""

    def test_requires_secret_key(self):
        with patch("laundromat.connectors.paystack_connector.settings") as mock_settings:
            mock_settings.PAYSTACK_SECRET_KEY = ""
            mock_settings.PAYSTACK_BASE_URL = "https://api.paystack.co"
            with pytest.raises(ValueError):
                PaystackConnector()

    @patch("laundromat.connectors.paystack_connector.httpx.AsyncClient")
    def test_verify_transaction_returns_data(self, mock_client_cls):
        # Arrange
        response = MagicMock()
        response.json.return_value = {"status": True, "data": {"status": "success", "reference": "ref_1"}}
        client = AsyncMock()
        client.get.return_value = response
        mock_client_cls.return_value.__aenter__.return_value = client

        # Act
        connector = PaystackConnector(secret_key="sk_test", base_url="https://api.paystack.co")
        data = asyncio.run(connector.verify_transaction("ref_1"))

        # Assert
        assert data == {"status": "success", "reference": "ref_1"}
        url = client.get.call_args[0][0]
        assert url == "https://api.paystack.co/transaction/verify/ref_1"
        assert client.get.call_args[1]["headers"]["Authorization"] == "Bearer sk_test"

    @patch("laundromat.connectors.paystack_connector.httpx.AsyncClient")
    def test_initialize_transaction_posts_kobo_amount_in_ngn(self, mock_client_cls):
        response = MagicMock()
        response.json.return_value = {
            "status": True,
            "data": {"authorization_url": "https://checkout.paystack.com/x", "access_code": "x", "reference": "r"}
        }
        client = AsyncMock()
        client.post.return_value = response
        mock_client_cls.return_value.__aenter__.return_value = client

        connector = PaystackConnector(secret_key="sk_test")
        data = asyncio.run(connector.initialize_transaction(
            email="ada@example.com",
            amount=500000,
            reference="r",
            metadata={"orderId": "o1"},
            callback_url="https://gabz.example/payment/callback"
        ))

        assert data["authorization_url"] == "https://checkout.paystack.com/x"
        payload = client.post.call_args[1]["json"]
        assert payload["amount"] == 500000
        assert payload["currency"] == "NGN"
        assert payload["metadata"] == {"orderId": "o1"}
        assert payload["callback_url"] == "https://gabz.example/payment/callback"

    @patch("laundromat.connectors.paystack_connector.httpx.AsyncClient")
    def test_status_false_raises(self, mock_client_cls):
        response = MagicMock()
        response.json.return_value = {"status": False, "message": "Transaction reference not found"}
        client = AsyncMock()
        client.get.return_value = response
        mock_client_cls.return_value.__aenter__.return_value = client

        connector = PaystackConnector(secret_key="sk_test")
        with pytest.raises(Exception, match="Transaction reference not found"):
            asyncio.run(connector.verify_transaction("missing"))

    @patch("laundromat.connectors.paystack_connector.httpx.AsyncClient")
    def test_verify_transaction_escapes_reference(self, mock_client_cls):
        """Path separators and query characters stay inside the reference segment"""
        response = MagicMock()
        response.json.return_value = {"status": True, "data": {"status": "success"}}
        client = AsyncMock()
        client.get.return_value = response
        mock_client_cls.return_value.__aenter__.return_value = client

        connector = PaystackConnector(secret_key="sk_test", base_url="https://api.paystack.co")
        asyncio.run(connector.verify_transaction("ref/1?x=2#y"))

        url = client.get.call_args[0][0]
        assert url == "https://api.paystack.co/transaction/verify/ref%2F1%3Fx%3D2%23y"
