"""
Receipt Endpoints
"""
from fastapi import APIRouter, Depends

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, get_current_user
from laundromat.services.receipt_service import LOAD_FAILED, ReceiptService

router = APIRouter()


def get_receipt_service() -> ReceiptService:
    return ReceiptService()


@router.get("/{order_id}")
async def get_receipt(
    order_id: str,
    user: TokenUser = Depends(get_current_user),
    service: ReceiptService = Depends(get_receipt_service)
):
    """
    Receipt for one of the caller's orders

    403 when the order belongs to someone else, 404 when it doesn't exist.
    """
    result = service.get_receipt(order_id, user.id)
    receipt = unwrap(result, overrides={LOAD_FAILED: 500})
    return {
        "status": "success",
        "data": receipt.model_dump()
    }
