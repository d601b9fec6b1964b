"""
Admin Management Use Cases

Registration, listing, lookup, updates and bootstrap seeding.
"""

from .register_admin_use_case import RegisterAdminUseCase
from .list_admins_use_case import ListAdminsUseCase
from .get_admin_use_case import GetAdminUseCase
from .update_admin_use_case import UpdateAdminUseCase
from .update_password_use_case import UpdatePasswordUseCase
from .seed_admin_use_case import SeedAdminUseCase
from .dtos import (
    AdminDetailResponse,
    AdminListResponse,
    AdminView,
    PaginationInfo,
    RegisterAdminCommand,
    RegisterAdminResponse,
    UpdateAdminCommand,
    UpdateAdminResponse,
    UpdatePasswordCommand,
)

__all__ = [
    # Use Cases
    "RegisterAdminUseCase",
    "ListAdminsUseCase",
    "GetAdminUseCase",
    "UpdateAdminUseCase",
    "UpdatePasswordUseCase",
    "SeedAdminUseCase",
    # DTOs - Commands
    "RegisterAdminCommand",
    "UpdateAdminCommand",
    "UpdatePasswordCommand",
    # DTOs - Responses
    "RegisterAdminResponse",
    "AdminListResponse",
    "AdminDetailResponse",
    "UpdateAdminResponse",
    # DTOs - Nested Models
    "AdminView",
    "PaginationInfo",
]
