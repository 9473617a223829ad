"""
Admin API Endpoints
Back-office order handling, service catalog and customer list.
Every route requires an active admin account.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, require_admin
from laundromat.domain.order import DeliveryType, OrderStatus, PaymentStatus
from laundromat.repositories.order_repository import OrderRepository
from laundromat.repositories.user_repository import UserRepository
from laundromat.services.catalog_service import CatalogService, ServiceCreate, ServiceUpdate
from laundromat.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    notes: Optional[str] = None
    notify_customer: bool = True


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus
    reference: Optional[str] = None


# =============================================================================
# Dependencies
# =============================================================================

def get_order_service() -> OrderService:
    return OrderService()


def get_catalog_service() -> CatalogService:
    return CatalogService()


def get_order_repository() -> OrderRepository:
    return OrderRepository()


def get_user_repository() -> UserRepository:
    return UserRepository()


# =============================================================================
# Orders
# =============================================================================

@router.get("/orders")
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    payment_status: Optional[PaymentStatus] = None,
    customer_id: Optional[str] = None,
    delivery_type: Optional[DeliveryType] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    All orders with optional filters

    Query params:
    - status: order status
    - payment_status: pending, paid or failed
    - customer_id: one customer's orders
    - delivery_type: pickup or delivery
    """
    orders = unwrap(
        service.list_orders(
            status=status_filter.value if status_filter else None,
            payment_status=payment_status.value if payment_status else None,
            customer_id=customer_id,
            delivery_type=delivery_type.value if delivery_type else None,
            limit=limit,
            offset=offset
        ),
        error_status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return {
        "status": "success",
        "limit": limit,
        "offset": offset,
        "count": len(orders),
        "data": [order.to_dict() for order in orders]
    }


@router.get("/orders/{order_id}")
async def get_order(
    order_id: str,
    admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    order = unwrap(service.get_order(order_id), error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"status": "success", "data": order.to_dict()}


@router.get("/orders/{order_id}/history")
async def get_order_history(
    order_id: str,
    admin: TokenUser = Depends(require_admin),
    repository: OrderRepository = Depends(get_order_repository)
):
    """Status and payment changes for one order, newest first"""
    try:
        history = repository.get_status_history(order_id)
    except Exception as e:
        logger.error(f"Failed to load history for {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load order history")
    return {"status": "success", "count": len(history), "data": history}


@router.patch("/orders/{order_id}/status")
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    result = await service.update_order_status(
        order_id,
        payload.status,
        admin_id=admin.id,
        notes=payload.notes,
        notify_customer=payload.notify_customer
    )
    order = unwrap(result, error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"status": "success", "message": result.message, "data": order.to_dict()}


@router.patch("/orders/{order_id}/payment-status")
async def update_payment_status(
    order_id: str,
    payload: PaymentStatusUpdate,
    admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """Manual payment update for cash on delivery / pay at store orders"""
    result = service.update_payment_status(
        order_id, payload.payment_status, admin_id=admin.id, reference=payload.reference
    )
    order = unwrap(result, error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"status": "success", "message": result.message, "data": order.to_dict()}


# =============================================================================
# Services
# =============================================================================

@router.get("/services")
async def list_services(
    admin: TokenUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    """Full catalog including deactivated services"""
    services = unwrap(service.get_all_services(), error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {
        "status": "success",
        "count": len(services),
        "data": [s.model_dump(mode="json") for s in services]
    }


@router.post("/services", status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    admin: TokenUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    result = service.create_service(payload)
    created = unwrap(result)
    return {"status": "success", "message": result.message, "data": created.model_dump(mode="json")}


@router.patch("/services/{service_id}")
async def update_service(
    service_id: str,
    payload: ServiceUpdate,
    admin: TokenUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    result = service.update_service(service_id, payload)
    updated = unwrap(result)
    return {"status": "success", "message": result.message, "data": updated.model_dump(mode="json")}


@router.delete("/services/{service_id}")
async def deactivate_service(
    service_id: str,
    admin: TokenUser = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    """Soft delete: the service stays on past orders but is no longer bookable"""
    result = service.deactivate_service(service_id)
    deactivated = unwrap(result)
    return {"status": "success", "message": result.message, "data": deactivated.model_dump(mode="json")}


# =============================================================================
# Customers
# =============================================================================

@router.get("/customers")
async def list_customers(
    is_active: Optional[bool] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: TokenUser = Depends(require_admin),
    repository: UserRepository = Depends(get_user_repository)
):
    try:
        customers = repository.find_all(is_active=is_active, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"Failed to list customers: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch customers")

    return {
        "status": "success",
        "limit": limit,
        "offset": offset,
        "count": len(customers),
        "data": [c.model_dump(mode="json") for c in customers]
    }
