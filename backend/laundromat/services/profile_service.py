"""
Profile Service
Customer profile edits (contact details and saved addresses)
"""
import logging
from typing import List, Optional

from pydantic import BaseModel

from laundromat.core.database import DocumentNotFoundError
from laundromat.domain.common import ApiResponse
from laundromat.domain.user import Address, validate_nigerian_phone
from laundromat.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    is_whatsapp_number: Optional[bool] = None
    addresses: Optional[List[Address]] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    preferred_payment_method: Optional[str] = None


class ProfileService:

    def __init__(self, user_repository: Optional[UserRepository] = None):
        self.users = user_repository if user_repository is not None else UserRepository()

    def update_profile(self, user_id: str, payload: ProfileUpdate) -> ApiResponse:
        fields = payload.model_dump(mode="json", exclude_none=True)
        if not fields:
            return ApiResponse.fail("No fields to update")

        if "phone" in fields and not validate_nigerian_phone(fields["phone"]):
            return ApiResponse.fail("Invalid Nigerian phone number format. Use +234XXXXXXXXXX")

        addresses = fields.get("addresses")
        if addresses and not any(a.get("is_default") for a in addresses):
            addresses[0]["is_default"] = True

        try:
            user = self.users.update(user_id, fields)
            return ApiResponse.ok(data=user, message="Profile updated")
        except DocumentNotFoundError:
            return ApiResponse.fail("User profile not found")
        except Exception as e:
            logger.error(f"Failed to update profile {user_id}: {e}")
            return ApiResponse.fail("Failed to update profile")
