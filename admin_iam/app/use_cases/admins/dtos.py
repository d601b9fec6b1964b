"""
Admin Management DTOs

Commands are built by the API layer after request validation; responses
never expose password or refresh token hashes.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from admin_iam.domain.entities import Admin, AdminRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterAdminCommand(BaseModel):
    """Validated intent to create an admin account"""

    name: str
    email: str
    password: str
    role: AdminRole
    phone: Optional[str] = None


class UpdateAdminCommand(BaseModel):
    """Fields to change; None means leave as is"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[AdminRole] = None


class UpdatePasswordCommand(BaseModel):
    old_password: Optional[str] = None
    new_password: str
    confirm_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AdminView(BaseModel):
    """Public view of an admin account"""

    id: int
    name: str
    email: str
    phone: Optional[str]
    role: AdminRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, admin: Admin) -> "AdminView":
        return cls(
            id=admin.id,
            name=admin.name,
            email=admin.email,
            phone=admin.phone,
            role=admin.role,
            created_at=admin.created_at,
            updated_at=admin.updated_at,
        )


class RegisterAdminResponse(BaseModel):
    message: str
    admin_id: int


class PaginationInfo(BaseModel):
    total_count: int
    total_pages: int
    current_page: int
    page_size: int


class AdminListResponse(BaseModel):
    admins: List[AdminView]
    pagination: PaginationInfo


class AdminDetailResponse(BaseModel):
    admin: AdminView


class UpdateAdminResponse(BaseModel):
    message: str
    admin_id: int
