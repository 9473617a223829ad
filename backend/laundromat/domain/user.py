"""
User Domain Models

Customers (users collection) and back-office staff (admin_users collection).

Author: Gabz Dev Team
Date: 2026-10-18
"""
import re
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import Optional, List
from datetime import datetime


NIGERIAN_PHONE_PATTERN = re.compile(r"^\+234[789]\d{9}$")


def validate_nigerian_phone(phone: Optional[str]) -> bool:
    """Accepts +234 followed by a 10-digit mobile number (7xx, 8xx, 9xx)"""
    if not phone:
        return False
    return bool(NIGERIAN_PHONE_PATTERN.match(phone.replace(" ", "")))


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    MANAGER = "manager"
    STAFF = "staff"


class Address(BaseModel):
    """Lagos street address used for pickups and deliveries"""
    street: str
    area: str
    lga: str = "Lagos Island"
    state: str = "Lagos State"
    landmark: Optional[str] = None
    is_default: bool = False


class PhoneInfo(BaseModel):
    number: str = ""
    is_whatsapp: bool = False


class User(BaseModel):
    """
    Customer profile mirrored from the users collection

    Loyalty counters (total_orders, total_spent, loyalty_points) are kept on
    the profile document.
    """

    id: str = Field(..., description="Auth user ID (also the profile document ID)")
    email: EmailStr
    first_name: str
    last_name: str
    phone: PhoneInfo = Field(default_factory=PhoneInfo)
    addresses: List[Address] = Field(default_factory=list)

    date_of_birth: Optional[str] = None
    gender: Optional[str] = None

    is_active: bool = True
    email_verified: bool = False
    phone_verified: bool = False

    total_orders: int = Field(0, ge=0)
    total_spent: int = Field(0, ge=0, description="Lifetime spend in kobo")
    loyalty_points: int = Field(0, ge=0)

    preferred_payment_method: Optional[str] = None
    notes: Optional[str] = None
    registration_source: str = "web"
    referred_by: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        """Build from a stored row, where phone is flattened into two columns"""
        data = dict(doc)
        data["phone"] = PhoneInfo(
            number=doc.get("phone") or "",
            is_whatsapp=bool(doc.get("is_whatsapp_number", False))
        )
        data["addresses"] = doc.get("addresses") or []
        return cls(**data)

    def to_document(self) -> dict:
        data = self.model_dump(mode="json", exclude={"phone"})
        data["phone"] = self.phone.number
        data["is_whatsapp_number"] = self.phone.is_whatsapp
        return data


class AdminUser(BaseModel):
    """Back-office account; its document ID equals the auth user ID"""

    id: str
    email: EmailStr
    name: Optional[str] = None
    role: AdminRole = AdminRole.STAFF
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
