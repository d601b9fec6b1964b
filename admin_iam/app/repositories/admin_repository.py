from abc import ABC, abstractmethod
from typing import List, Optional

from admin_iam.domain.entities import Admin


class DuplicateAdminError(Exception):
    """A write hit the unique constraint on email or phone"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate admin {field}")


class IAdminRepository(ABC):
    """Admin repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, admin_id: int) -> Optional[Admin]:
        """Get admin by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Admin]:
        """Get admin by email address"""
        pass

    @abstractmethod
    async def get_by_phone(self, phone: str) -> Optional[Admin]:
        """Get admin by phone number"""
        pass

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> List[Admin]:
        """Get one page of admins ordered by ID"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all admins"""
        pass

    @abstractmethod
    async def create(self, admin: Admin) -> Admin:
        """
        Create a new admin

        Raises:
            DuplicateAdminError: email or phone already taken
        """
        pass

    @abstractmethod
    async def update(self, admin: Admin) -> Admin:
        """
        Update existing admin

        Raises:
            DuplicateAdminError: email or phone already taken
        """
        pass

    @abstractmethod
    async def set_refresh_token_hash(
        self, admin_id: int, refresh_token_hash: Optional[str]
    ) -> None:
        """Overwrite the stored refresh token hash; None revokes the session"""
        pass

    @abstractmethod
    async def compare_and_set_refresh_token_hash(
        self, admin_id: int, expected_hash: str, new_hash: str
    ) -> bool:
        """
        Replace the stored hash only if it still equals expected_hash.

        Returns False when another writer changed it first.
        """
        pass
