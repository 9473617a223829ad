"""
Orders API Endpoints
Customer booking and order history

Author: Gabz Dev Team
Date: 2026-10-18
"""
from fastapi import APIRouter, Depends, Query, status

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, get_current_user
from laundromat.services.order_service import BookingRequest, OrderService

router = APIRouter()


def get_order_service() -> OrderService:
    return OrderService()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: BookingRequest,
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Book a pickup or delivery order

    Prices come from the service catalog; the response carries the order
    with its items and amounts in kobo.
    """
    result = service.create_order(user.id, payload)
    order = unwrap(result)
    return {
        "status": "success",
        "message": result.message,
        "data": order.to_dict()
    }


@router.get("/")
async def list_my_orders(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Orders placed by the caller, newest first"""
    orders = unwrap(service.list_customer_orders(user.id, limit=limit, offset=offset), error_status=500)
    return {
        "status": "success",
        "limit": limit,
        "offset": offset,
        "count": len(orders),
        "data": [order.to_dict() for order in orders]
    }


@router.get("/{order_id}")
async def get_my_order(
    order_id: str,
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    order = unwrap(service.get_customer_order(order_id, user.id), error_status=500)
    return {
        "status": "success",
        "data": order.to_dict()
    }
