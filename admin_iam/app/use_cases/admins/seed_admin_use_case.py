"""
Seed Admin Use Case

Creates the first super admin when the store is empty.
"""

import logging
from typing import Optional

from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import Admin, AdminRole
from admin_iam.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SeedAdminUseCase:
    """
    Use case for bootstrapping the first account.

    Business Rules:
    - Runs only when no admin exists yet
    - Seeded account is always super_admin
    - Name, email and password are required
    """

    def __init__(self, uow: UnitOfWork, verifier: CredentialVerifier):
        self.uow = uow
        self.verifier = verifier

    async def execute(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        phone: Optional[str] = None,
    ) -> Result[Optional[int]]:
        """
        Returns:
            Result with the new admin ID, None if seeding was skipped,
            or Error(MISSING_SEED_CREDENTIALS)
        """
        if not name or not email or not password:
            return Return.err(
                Error(
                    "MISSING_SEED_CREDENTIALS",
                    "SEED_ADMIN_NAME, SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD are required",
                )
            )

        async with self.uow:
            if await self.uow.admins.count() > 0:
                logger.info("Admin already exists, skipping seeding")
                return Return.ok(None)

            admin = Admin(
                name=name,
                email=email,
                phone=phone or None,
                password_hash=await self.verifier.hash_password(password),
                role=AdminRole.super_admin,
            )
            admin = await self.uow.admins.create(admin)
            admin_id = admin.id
            await self.uow.commit()

        logger.info(f"Admin seeded: admin_id={admin_id}")
        return Return.ok(admin_id)
