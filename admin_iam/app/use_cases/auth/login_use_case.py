"""
Login Use Case

Handles admin authentication and issues an access/refresh token pair.
"""

import logging

from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.token_service import TokenService
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.libs.result import Error, Result, Return
from .dtos import TokenPairResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for admin login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password cost the same bcrypt comparison
      and return the same INVALID_CREDENTIALS error
    - A successful login replaces any existing session (single session
      per admin)
    - Only the bcrypt hash of the refresh token is stored
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        verifier: CredentialVerifier,
    ):
        self.uow = uow
        self.token_service = token_service
        self.verifier = verifier

    async def execute(self, email: str, password: str) -> Result[TokenPairResponse]:
        """
        Execute login use case.

        Args:
            email: Admin email
            password: Plain text password

        Returns:
            Result with TokenPairResponse, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            admin = await self.uow.admins.get_by_email(email)

            # Always runs bcrypt, against a dummy hash when admin is None
            password_valid = await self.verifier.verify_password(password, admin)

            if admin is None or not password_valid:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            access_token = self.token_service.issue_access(admin.id, admin.role)
            refresh_token = self.token_service.issue_refresh(admin.id)
            refresh_token_hash = await self.verifier.hash_token(refresh_token)

            await self.uow.admins.set_refresh_token_hash(admin.id, refresh_token_hash)
            await self.uow.commit()

            logger.info(f"Admin logged in: admin_id={admin.id}")

            return Return.ok(
                TokenPairResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                )
            )
