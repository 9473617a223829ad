"""
Paystack Connector
Handles all interactions with the Paystack REST API

Handles:
- Transaction initialization (hosted checkout)
- Transaction verification by reference
- Webhook signature verification

Author: Gabz Dev Team
Date: 2026-10-18
"""
import hashlib
import hmac
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from laundromat.core.config import settings

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-paystack-signature"


def compute_signature(body: bytes, secret: str) -> str:
    """HMAC-SHA512 of the raw body as lowercase hex"""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def verify_signature(body: bytes, signature: Optional[str], secret: Optional[str]) -> bool:
    """
    Check a webhook signature header against the raw request body

    The comparison is exact: an upper-cased hex digest does not match.
    An unset secret or missing signature never verifies.
    """
    if not secret or not signature:
        return False
    expected = compute_signature(body, secret).encode("utf-8")
    return hmac.compare_digest(expected, signature.encode("utf-8"))


class PaystackConnector:
    """
    Connector for Paystack API

    All amounts are in kobo, as Paystack expects.
    """

    def __init__(self, secret_key: str = None, base_url: str = None):
        self.secret_key = secret_key or settings.PAYSTACK_SECRET_KEY
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip("/")

        if not self.secret_key:
            raise ValueError("Paystack credentials not configured. Set PAYSTACK_SECRET_KEY")

        self.headers = {
            'Authorization': f'Bearer {self.secret_key}',
            'Content-Type': 'application/json'
        }

    async def _make_request(self, endpoint: str, method: str = "GET", payload: Optional[Dict] = None) -> Dict:
        """
        Make authenticated request to Paystack

        Returns:
            The `data` object of the Paystack envelope

        Raises:
            httpx.HTTPStatusError on non-2xx responses
            Exception when Paystack reports status=false
        """
        url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient() as client:
            if method == "GET":
                response = await client.get(url, headers=self.headers, timeout=30.0)
            elif method == "POST":
                response = await client.post(url, headers=self.headers, json=payload, timeout=30.0)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

            response.raise_for_status()
            body = response.json()

        if not body.get('status'):
            raise Exception(f"Paystack error: {body.get('message', 'unknown error')}")

        return body.get('data') or {}

    async def initialize_transaction(
        self,
        email: str,
        amount: int,
        reference: str,
        metadata: Optional[Dict[str, Any]] = None,
        callback_url: Optional[str] = None
    ) -> Dict:
        """
        Start a hosted-checkout transaction

        Args:
            email: Customer email
            amount: Amount in kobo
            reference: Unique transaction reference
            metadata: Echoed back in webhooks (orderId, customerPhone, ...)
            callback_url: Where Paystack redirects after checkout

        Returns:
            Dict with authorization_url, access_code, reference
        """
        payload = {
            'email': email,
            'amount': amount,
            'reference': reference,
            'currency': 'NGN',
            'callback_url': callback_url or settings.PAYSTACK_CALLBACK_URL,
            'metadata': metadata or {},
        }
        logger.info(f"Initializing Paystack transaction {reference} for {amount} kobo")
        return await self._make_request("/transaction/initialize", method="POST", payload=payload)

    async def verify_transaction(self, reference: str) -> Dict:
        """
        Look up a transaction by reference

        Returns:
            Transaction data; `status` is one of success, failed, abandoned...
        """
        return await self._make_request(f"/transaction/verify/{quote(reference, safe='')}")
