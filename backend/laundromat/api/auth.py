"""
Authentication API endpoints
- Customer registration and login
- Admin login
- Logout and password management
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field

from laundromat.api.common import unwrap
from laundromat.core.auth import TokenUser, get_current_user, require_admin, security
from laundromat.services.auth_service import (
    ADMIN_DEACTIVATED,
    ADMIN_REQUIRED,
    INVALID_CREDENTIALS,
    AuthService,
    LoginCredentials,
    RegisterCredentials,
)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)


def get_auth_service() -> AuthService:
    return AuthService()


# =============================================================================
# Customer
# =============================================================================

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterCredentials,
    service: AuthService = Depends(get_auth_service)
):
    """Create a customer account and profile"""
    result = service.register_customer(payload)
    return {
        "status": "success",
        "message": result.message,
        "data": unwrap(result)
    }


@router.post("/login")
async def login(
    payload: LoginCredentials,
    service: AuthService = Depends(get_auth_service)
):
    result = service.login_customer(payload)
    data = unwrap(result, overrides={INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED})
    return {"status": "success", "message": result.message, "data": data}


# =============================================================================
# Admin
# =============================================================================

@router.post("/admin/login")
async def admin_login(
    payload: LoginCredentials,
    service: AuthService = Depends(get_auth_service)
):
    """Login for back-office staff; non-admins get 403"""
    result = service.login_admin(payload)
    data = unwrap(result, overrides={
        INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
        ADMIN_REQUIRED: status.HTTP_403_FORBIDDEN,
        ADMIN_DEACTIVATED: status.HTTP_403_FORBIDDEN,
    })
    return {"status": "success", "message": result.message, "data": data}


@router.get("/admin/me")
async def admin_profile(
    admin: TokenUser = Depends(require_admin),
    service: AuthService = Depends(get_auth_service)
):
    profile = unwrap(service.get_admin_profile(admin.id), error_status=status.HTTP_404_NOT_FOUND)
    return {"status": "success", "data": profile.model_dump(mode="json")}


# =============================================================================
# Session / password
# =============================================================================

@router.post("/logout")
async def logout(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    result = service.logout(credentials.credentials)
    unwrap(result, error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"status": "success", "message": result.message}


@router.post("/password-reset")
async def request_password_reset(
    payload: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service)
):
    result = service.reset_password(payload.email)
    unwrap(result, error_status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"status": "success", "message": result.message}


@router.put("/password")
async def change_password(
    payload: PasswordChange,
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    if payload.current_password == payload.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from the current password"
        )
    result = service.update_password(user.id, user.email, payload.current_password, payload.new_password)
    unwrap(result)
    return {"status": "success", "message": result.message}
