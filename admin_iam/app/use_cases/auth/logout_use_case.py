"""
Logout Use Case

Revokes an admin's refresh session.
"""

import logging
from typing import Optional

from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.libs.result import Result, Return
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for admin logout.

    Business Rules:
    - Clears the stored refresh token hash unconditionally
    - Idempotent: succeeds when no session exists, or when no admin is known
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin_id: Optional[int]) -> Result[LogoutResponse]:
        if admin_id is not None:
            async with self.uow:
                await self.uow.admins.set_refresh_token_hash(admin_id, None)
                await self.uow.commit()
            logger.info(f"Admin logged out: admin_id={admin_id}")

        return Return.ok(LogoutResponse(status="ok", message="Logout successful"))
