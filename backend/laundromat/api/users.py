"""
Customer profile endpoints
"""
from fastapi import APIRouter, Depends

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, get_current_user
from laundromat.services.auth_service import AuthService
from laundromat.services.profile_service import ProfileService, ProfileUpdate

router = APIRouter()


def get_auth_service() -> AuthService:
    return AuthService()


def get_profile_service() -> ProfileService:
    return ProfileService()


@router.get("/me")
async def get_my_profile(
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    profile = unwrap(service.get_user_profile(user.id), error_status=404)
    return {"status": "success", "data": profile.model_dump(mode="json")}


@router.patch("/me")
async def update_my_profile(
    payload: ProfileUpdate,
    user: TokenUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update contact details and saved addresses"""
    result = service.update_profile(user.id, payload)
    profile = unwrap(result)
    return {"status": "success", "message": result.message, "data": profile.model_dump(mode="json")}
