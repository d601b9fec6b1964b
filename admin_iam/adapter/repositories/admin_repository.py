from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_iam.app.repositories.admin_repository import (
    DuplicateAdminError,
    IAdminRepository,
)
from admin_iam.domain.entities import Admin


class AdminRepository(IAdminRepository):
    """Admin repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, admin_id: int) -> Optional[Admin]:
        """Get admin by ID"""
        stmt = select(Admin).where(Admin.id == admin_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Admin]:
        """Get admin by email address"""
        stmt = select(Admin).where(Admin.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_phone(self, phone: str) -> Optional[Admin]:
        """Get admin by phone number"""
        stmt = select(Admin).where(Admin.phone == phone)
        result = await self.session.exec(stmt)
        return result.first()

    async def list_page(self, offset: int, limit: int) -> List[Admin]:
        """Get one page of admins ordered by ID"""
        stmt = select(Admin).order_by(Admin.id).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self) -> int:
        """Count all admins"""
        stmt = select(func.count()).select_from(Admin)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, admin: Admin) -> Admin:
        """Create a new admin"""
        self.session.add(admin)
        await self._flush_unique()
        await self.session.refresh(admin)
        return admin

    async def update(self, admin: Admin) -> Admin:
        """Update existing admin"""
        self.session.add(admin)
        await self._flush_unique()
        await self.session.refresh(admin)
        return admin

    async def set_refresh_token_hash(
        self, admin_id: int, refresh_token_hash: Optional[str]
    ) -> None:
        """Single-row update of the refresh token hash"""
        stmt = (
            update(Admin)
            .where(Admin.id == admin_id)
            .values(refresh_token_hash=refresh_token_hash)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def compare_and_set_refresh_token_hash(
        self, admin_id: int, expected_hash: str, new_hash: str
    ) -> bool:
        """
        Conditional update: only rotates if the stored hash is still expected_hash.

        The WHERE clause makes the check and the write one statement, so a
        concurrent rotation leaves rowcount at 0 for the loser.
        """
        stmt = (
            update(Admin)
            .where(Admin.id == admin_id, Admin.refresh_token_hash == expected_hash)
            .values(refresh_token_hash=new_hash)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def _flush_unique(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            # SQLite: "UNIQUE constraint failed: admins.phone"
            # PostgreSQL: "Key (phone)=(...) already exists"
            field = "phone" if "phone" in str(e.orig) else "email"
            raise DuplicateAdminError(field) from e
