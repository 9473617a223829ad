"""
Service catalog (public)
"""
from fastapi import APIRouter, Depends

from laundromat.api.common import unwrap
from laundromat.services.catalog_service import CatalogService

router = APIRouter()


def get_catalog_service() -> CatalogService:
    return CatalogService()


@router.get("/")
async def list_services(service: CatalogService = Depends(get_catalog_service)):
    """Active laundry services with prices in kobo"""
    services = unwrap(service.get_active_services(), error_status=500)
    return {
        "status": "success",
        "count": len(services),
        "data": [s.model_dump(mode="json") for s in services]
    }
