"""
Refresh Session Use Case

Exchanges a refresh token for a new access/refresh pair, rotating the stored
hash and detecting reuse of already-rotated tokens.
"""

import logging

from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.token_service import TokenService
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import TokenClass
from admin_iam.libs.result import Error, Result, Return
from .dtos import TokenPairResponse

logger = logging.getLogger(__name__)


class RefreshSessionUseCase:
    """
    Use case for refresh token rotation.

    Session states: no session (hash is None), active (hash set),
    compromised (hash cleared after reuse, full login required).

    Business Rules:
    - Token must carry a valid refresh signature and not be expired
    - Admin must exist and have an active session
    - A cryptographically valid token that does not match the stored hash
      is a replay of a rotated token: the session is cleared
    - Rotation is compare-and-set on the stored hash, so of two concurrent
      refreshes with the same token only one wins; the loser is treated
      as reuse
    - Reuse is never retried or recovered, the admin must log in again
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

    async def execute(self, refresh_token: str) -> Result[TokenPairResponse]:
        """
        Execute refresh session use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with TokenPairResponse containing new tokens, or Error
            (INVALID_TOKEN, INVALID_SESSION, SESSION_COMPROMISED)
        """
        verified = self.token_service.verify(refresh_token, TokenClass.refresh)
        if verified.is_err():
            return Return.err(verified.error)

        admin_id = verified.value.admin_id

        async with self.uow:
            admin = await self.uow.admins.get_by_id(admin_id)

            if admin is None or admin.refresh_token_hash is None:
                return Return.err(
                    Error("INVALID_SESSION", "Unauthorized: Invalid session")
                )

            stored_hash = admin.refresh_token_hash
            token_matches = await self.verifier.verify_token(refresh_token, stored_hash)

            if not token_matches:
                return await self._compromise(admin_id)

            new_access_token = self.token_service.issue_access(admin.id, admin.role)
            new_refresh_token = self.token_service.issue_refresh(admin.id)
            new_refresh_token_hash = await self.verifier.hash_token(new_refresh_token)

            rotated = await self.uow.admins.compare_and_set_refresh_token_hash(
                admin_id, stored_hash, new_refresh_token_hash
            )
            if not rotated:
                # Another request rotated this session first
                return await self._compromise(admin_id)

            await self.uow.commit()

            logger.info(f"Session rotated: admin_id={admin_id}")

            return Return.ok(
                TokenPairResponse(
                    access_token=new_access_token,
                    refresh_token=new_refresh_token,
                )
            )

    async def _compromise(self, admin_id: int) -> Result[TokenPairResponse]:
        await self.uow.admins.set_refresh_token_hash(admin_id, None)
        await self.uow.commit()

        logger.warning(f"Token reuse detected for admin_id={admin_id}, session revoked")

        return Return.err(
            Error("SESSION_COMPROMISED", "Unauthorized: Session compromised")
        )
