"""
Shared helpers for API routers
"""
from typing import Dict, Optional

from fastapi import HTTPException, status

from laundromat.domain.common import ApiResponse

# Service-layer error messages that map to something other than 400
ERROR_STATUS = {
    "Order not found": status.HTTP_404_NOT_FOUND,
    "Service not found": status.HTTP_404_NOT_FOUND,
    "User profile not found": status.HTTP_404_NOT_FOUND,
    "Access denied": status.HTTP_403_FORBIDDEN,
}


def unwrap(result: ApiResponse, error_status: int = status.HTTP_400_BAD_REQUEST,
           overrides: Optional[Dict[str, int]] = None):
    """Return result.data, or raise HTTPException with the service's message"""
    if result.success:
        return result.data

    status_map = {**ERROR_STATUS, **(overrides or {})}
    raise HTTPException(
        status_code=status_map.get(result.error, error_status),
        detail=result.error
    )
