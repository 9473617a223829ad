"""
Webhook Endpoints
Inbound callbacks from Paystack

Author: Gabz Dev Team
Date: 2026-10-18
"""
import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from laundromat.connectors.paystack_connector import SIGNATURE_HEADER
from laundromat.services.webhook_service import PaystackWebhookService

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependency: Get services
def get_webhook_service() -> PaystackWebhookService:
    return PaystackWebhookService()


@router.post("/paystack")
async def paystack_webhook(
    request: Request,
    service: PaystackWebhookService = Depends(get_webhook_service)
):
    """
    Receive a Paystack event

    - 400 when x-paystack-signature is missing or is not the HMAC-SHA512
      of the raw body under the secret key (nothing is written)
    - 200 {"status": "success"} once the event has been dispatched, even if
      the handler itself failed
    - 500 when the body cannot be processed at all
    """
    try:
        body = await request.body()
        signature = request.headers.get(SIGNATURE_HEADER)

        if not signature:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Missing signature"}
            )

        if not service.verify(body, signature):
            logger.warning("Rejected Paystack webhook with invalid signature")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Invalid signature"}
            )

        event = json.loads(body)
        await service.handle_event(event)

        return {"status": "success"}

    except Exception as e:
        logger.error(f"Paystack webhook error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Webhook processing failed"}
        )
