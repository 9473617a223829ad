"""
Payment Endpoints
Paystack checkout start and the post-checkout verification

Author: Gabz Dev Team
Date: 2026-10-18
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, get_current_user
from laundromat.services.payment_service import PaymentService

router = APIRouter()


class InitializePaymentRequest(BaseModel):
    order_id: str


# Dependency: Get services
def get_payment_service() -> PaymentService:
    return PaymentService()


@router.post("/initialize")
async def initialize_payment(
    payload: InitializePaymentRequest,
    user: TokenUser = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service)
):
    """Start a Paystack checkout for one of the caller's orders"""
    result = await service.initialize_payment(payload.order_id, user.id)
    return {
        "status": "success",
        "data": unwrap(result)
    }


@router.get("/callback")
async def payment_callback(
    reference: Optional[str] = Query(None, description="Paystack transaction reference"),
    order_id: Optional[str] = Query(None, alias="orderId", description="Order the payment belongs to"),
    service: PaymentService = Depends(get_payment_service)
):
    """
    Verify a payment after Paystack redirects back

    Always 200; the body says whether the payment went through:
    {success, message, order_id?, order_number?}
    """
    return await service.verify_callback(reference, order_id)
