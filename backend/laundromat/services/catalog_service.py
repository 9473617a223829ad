"""
Catalog Service
Service catalog reads for customers and maintenance for admins
"""
import logging
from typing import Optional

from pydantic import BaseModel, Field

from laundromat.core.database import DocumentNotFoundError
from laundromat.domain.common import ApiResponse
from laundromat.domain.service import PricingType
from laundromat.repositories.service_repository import ServiceRepository

logger = logging.getLogger(__name__)


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    pricing_type: PricingType = PricingType.PER_ITEM
    base_price: int = Field(0, ge=0)
    price_per_kg: Optional[int] = Field(None, ge=0)
    estimated_duration_hours: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    pricing_type: Optional[PricingType] = None
    base_price: Optional[int] = Field(None, ge=0)
    price_per_kg: Optional[int] = Field(None, ge=0)
    estimated_duration_hours: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CatalogService:

    def __init__(self, service_repository: Optional[ServiceRepository] = None):
        self.services = service_repository if service_repository is not None else ServiceRepository()

    def get_active_services(self) -> ApiResponse:
        try:
            return ApiResponse.ok(data=self.services.find_active())
        except Exception as e:
            logger.error(f"Failed to fetch services: {e}")
            return ApiResponse.fail("Failed to fetch services")

    def get_all_services(self) -> ApiResponse:
        try:
            return ApiResponse.ok(data=self.services.find_all())
        except Exception as e:
            logger.error(f"Failed to fetch services: {e}")
            return ApiResponse.fail("Failed to fetch services")

    def create_service(self, payload: ServiceCreate) -> ApiResponse:
        if payload.pricing_type == PricingType.PER_KG and payload.price_per_kg is None:
            return ApiResponse.fail("price_per_kg is required for per_kg services")
        try:
            service = self.services.create(payload.model_dump(mode="json"))
            logger.info(f"Service created: {service.name}")
            return ApiResponse.ok(data=service, message="Service created")
        except Exception as e:
            logger.error(f"Failed to create service: {e}")
            return ApiResponse.fail("Failed to create service")

    def update_service(self, service_id: str, payload: ServiceUpdate) -> ApiResponse:
        fields = payload.model_dump(mode="json", exclude_none=True)
        if not fields:
            return ApiResponse.fail("No fields to update")
        try:
            return ApiResponse.ok(data=self.services.update(service_id, fields), message="Service updated")
        except DocumentNotFoundError:
            return ApiResponse.fail("Service not found")
        except Exception as e:
            logger.error(f"Failed to update service {service_id}: {e}")
            return ApiResponse.fail("Failed to update service")

    def deactivate_service(self, service_id: str) -> ApiResponse:
        try:
            return ApiResponse.ok(data=self.services.deactivate(service_id), message="Service deactivated")
        except DocumentNotFoundError:
            return ApiResponse.fail("Service not found")
        except Exception as e:
            logger.error(f"Failed to deactivate service {service_id}: {e}")
            return ApiResponse.fail("Failed to deactivate service")
