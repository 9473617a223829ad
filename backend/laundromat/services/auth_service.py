"""
Authentication Service
Customer and admin account flows on top of Supabase Auth

Each call returns an ApiResponse; Supabase errors are logged and turned
into user-facing messages.

Author: Gabz Dev Team
Date: 2026-10-18
"""
import logging
from typing import Callable, Optional

from pydantic import BaseModel, EmailStr, Field
from supabase import Client

from laundromat.core.config import settings
from laundromat.core.database import get_auth_client, get_supabase
from laundromat.domain.common import ApiResponse
from laundromat.domain.user import PhoneInfo, User, validate_nigerian_phone
from laundromat.repositories.user_repository import AdminUserRepository, UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
ADMIN_REQUIRED = "Access denied. Admin privileges required."
ADMIN_DEACTIVATED = "Admin account is deactivated"


class RegisterCredentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str
    is_whatsapp_number: bool = False


class LoginCredentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


def _session_payload(session) -> Optional[dict]:
    if session is None:
        return None
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": session.expires_at,
        "token_type": "bearer",
    }


def _auth_user_payload(auth_user, phone: str = "") -> dict:
    metadata = getattr(auth_user, "user_metadata", None) or {}
    name = " ".join(p for p in (metadata.get("first_name"), metadata.get("last_name")) if p)
    return {
        "id": auth_user.id,
        "email": auth_user.email,
        "name": name,
        "phone": phone or metadata.get("phone", ""),
        "email_verified": getattr(auth_user, "email_confirmed_at", None) is not None,
    }


class AuthService:
    """Registration, login (customer and admin), logout and password flows"""

    def __init__(
        self,
        user_repository: Optional[UserRepository] = None,
        admin_repository: Optional[AdminUserRepository] = None,
        auth_client_factory: Callable[[], Client] = get_auth_client,
        admin_client_factory: Callable[[], Client] = get_supabase
    ):
        self.users = user_repository if user_repository is not None else UserRepository()
        self.admins = admin_repository if admin_repository is not None else AdminUserRepository()
        self._auth_client_factory = auth_client_factory
        self._admin_client_factory = admin_client_factory

    def register_customer(self, credentials: RegisterCredentials) -> ApiResponse:
        """
        Create the auth account and the users profile document

        The profile starts with zeroed loyalty counters and no addresses;
        addresses are added during onboarding.
        """
        if not validate_nigerian_phone(credentials.phone):
            return ApiResponse.fail("Invalid Nigerian phone number format. Use +234XXXXXXXXXX")

        try:
            client = self._auth_client_factory()
            response = client.auth.sign_up({
                "email": credentials.email,
                "password": credentials.password,
                "options": {
                    "data": {
                        "first_name": credentials.first_name,
                        "last_name": credentials.last_name,
                        "phone": credentials.phone,
                    },
                    "email_redirect_to": f"{settings.APP_URL}/verify-email",
                },
            })
            auth_user = response.user
            if auth_user is None:
                return ApiResponse.fail("Registration failed. Please try again.")

            self.users.create(User(
                id=auth_user.id,
                email=credentials.email,
                first_name=credentials.first_name,
                last_name=credentials.last_name,
                phone=PhoneInfo(number=credentials.phone, is_whatsapp=credentials.is_whatsapp_number),
                addresses=[],
                registration_source="web",
            ))

            logger.info(f"Registered customer {auth_user.id}")
            return ApiResponse.ok(
                data={
                    "user": _auth_user_payload(auth_user, credentials.phone),
                    "session": _session_payload(response.session),
                },
                message="Registration successful. Please check your email for verification."
            )
        except Exception as e:
            logger.error(f"Registration error: {e}")
            return ApiResponse.fail(str(e) or "Registration failed. Please try again.")

    def login_customer(self, credentials: LoginCredentials) -> ApiResponse:
        try:
            client = self._auth_client_factory()
            response = client.auth.sign_in_with_password({
                "email": credentials.email,
                "password": credentials.password,
            })
            return ApiResponse.ok(
                data={
                    "user": _auth_user_payload(response.user),
                    "session": _session_payload(response.session),
                },
                message="Login successful"
            )
        except Exception as e:
            logger.error(f"Login error: {e}")
            return ApiResponse.fail(INVALID_CREDENTIALS)

    def login_admin(self, credentials: LoginCredentials) -> ApiResponse:
        """
        Sign in, then require an active admin_users document

        Non-admins and deactivated admins are signed out again and get a
        plain access-denied result. last_login is stamped on success.
        """
        try:
            client = self._auth_client_factory()
            response = client.auth.sign_in_with_password({
                "email": credentials.email,
                "password": credentials.password,
            })
        except Exception as e:
            logger.error(f"Admin login error: {e}")
            return ApiResponse.fail(INVALID_CREDENTIALS)

        try:
            admin = self.admins.find_by_id(response.user.id)
            if admin is None:
                client.auth.sign_out()
                return ApiResponse.fail(ADMIN_REQUIRED)

            if not admin.is_active:
                client.auth.sign_out()
                return ApiResponse.fail(ADMIN_DEACTIVATED)

            self.admins.update_last_login(admin.id)

            return ApiResponse.ok(
                data={
                    "user": _auth_user_payload(response.user),
                    "role": admin.role,
                    "session": _session_payload(response.session),
                },
                message="Admin login successful"
            )
        except Exception as e:
            logger.error(f"Admin lookup failed for {response.user.id}: {e}")
            return ApiResponse.fail(ADMIN_REQUIRED)

    def logout(self, access_token: str) -> ApiResponse:
        try:
            self._admin_client_factory().auth.admin.sign_out(access_token)
            return ApiResponse.ok(message="Logged out successfully")
        except Exception as e:
            logger.error(f"Logout error: {e}")
            return ApiResponse.fail("Logout failed")

    def reset_password(self, email: str) -> ApiResponse:
        try:
            self._auth_client_factory().auth.reset_password_for_email(
                email,
                {"redirect_to": f"{settings.APP_URL}/reset-password"}
            )
            return ApiResponse.ok(message="Password reset email sent")
        except Exception as e:
            logger.error(f"Password reset error: {e}")
            return ApiResponse.fail("Failed to send password reset email")

    def update_password(self, user_id: str, email: str, current_password: str, new_password: str) -> ApiResponse:
        """Re-check the current password, then set the new one"""
        try:
            self._auth_client_factory().auth.sign_in_with_password({
                "email": email,
                "password": current_password,
            })
        except Exception:
            return ApiResponse.fail("Current password is incorrect")

        try:
            self._admin_client_factory().auth.admin.update_user_by_id(user_id, {"password": new_password})
            return ApiResponse.ok(message="Password updated successfully")
        except Exception as e:
            logger.error(f"Password update error: {e}")
            return ApiResponse.fail("Failed to update password")

    def get_user_profile(self, user_id: str) -> ApiResponse:
        try:
            user = self.users.find_by_id(user_id)
            if user is None:
                return ApiResponse.fail("Failed to fetch user profile")
            return ApiResponse.ok(data=user)
        except Exception as e:
            logger.error(f"Profile fetch error: {e}")
            return ApiResponse.fail("Failed to fetch user profile")

    def get_admin_profile(self, admin_id: str) -> ApiResponse:
        try:
            admin = self.admins.find_by_id(admin_id)
            if admin is None:
                return ApiResponse.fail("Failed to fetch admin profile")
            return ApiResponse.ok(data=admin)
        except Exception as e:
            logger.error(f"Admin profile fetch error: {e}")
            return ApiResponse.fail("Failed to fetch admin profile")
