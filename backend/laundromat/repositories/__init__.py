"""
Repository Layer - Data Access

This layer handles all document-store access and returns domain models.
Repositories abstract away Supabase details from business logic.

Author: Gabz Dev Team
Date: 2026-10-18
"""
from laundromat.repositories.order_repository import OrderRepository
from laundromat.repositories.user_repository import UserRepository, AdminUserRepository
from laundromat.repositories.service_repository import ServiceRepository

__all__ = [
    'OrderRepository',
    'UserRepository',
    'AdminUserRepository',
    'ServiceRepository'
]
