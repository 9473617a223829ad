"""
WhatsApp Cloud API Connector
Sends outbound text messages to customers

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Dict

import httpx

from laundromat.core.config import settings

logger = logging.getLogger(__name__)


class WhatsAppConnector:
    """
    Connector for the WhatsApp Cloud API (graph.facebook.com)

    Only plain text messages are sent; template approval is handled outside
    this service.
    """

    def __init__(self, access_token: str = None, phone_number_id: str = None, api_url: str = None):
        self.access_token = access_token or settings.WHATSAPP_ACCESS_TOKEN
        self.phone_number_id = phone_number_id or settings.WHATSAPP_PHONE_NUMBER_ID
        self.api_url = (api_url or settings.WHATSAPP_API_URL).rstrip("/")

        if not self.access_token or not self.phone_number_id:
            raise ValueError(
                "WhatsApp credentials not configured. Set WHATSAPP_ACCESS_TOKEN and WHATSAPP_PHONE_NUMBER_ID"
            )

        self.messages_url = f"{self.api_url}/{self.phone_number_id}/messages"
        self.headers = {
            'Authorization': f'Bearer {self.access_token}',
            'Content-Type': 'application/json'
        }

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """WhatsApp expects digits only, with country code (2348012345678)"""
        digits = "".join(ch for ch in phone if ch.isdigit())
        if digits.startswith("0") and len(digits) == 11:
            digits = "234" + digits[1:]
        return digits

    async def send_text(self, phone: str, body: str) -> Dict:
        """
        Send a text message

        Returns:
            Cloud API response ({"messages": [{"id": ...}], ...})

        Raises:
            httpx.HTTPStatusError on non-2xx responses
        """
        payload = {
            'messaging_product': 'whatsapp',
            'to': self.normalize_phone(phone),
            'type': 'text',
            'text': {'preview_url': False, 'body': body},
        }

        async with httpx.AsyncClient() as client:
            response = await client.post(self.messages_url, json=payload, headers=self.headers, timeout=30.0)
            response.raise_for_status()
            return response.json()
