"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: Gabz Dev Team
Date: 2026-10-18
"""
from laundromat.domain.common import ApiResponse
from laundromat.domain.user import User, AdminUser, Address, PhoneInfo, UserRole, AdminRole
from laundromat.domain.service import Service, PricingType
from laundromat.domain.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    PaymentMethod,
    DeliveryType,
)

__all__ = [
    'ApiResponse',
    'User', 'AdminUser', 'Address', 'PhoneInfo', 'UserRole', 'AdminRole',
    'Service', 'PricingType',
    'Order', 'OrderItem', 'OrderStatus', 'PaymentStatus', 'PaymentMethod', 'DeliveryType',
]
