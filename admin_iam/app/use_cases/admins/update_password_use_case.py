"""
Update Password Use Case

Self-service password change and privileged password reset.
"""

import logging
from datetime import datetime

from admin_iam.app.services.authorization import AdminAction, can_perform
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import AdminRole
from admin_iam.libs.result import Error, Result, Return
from .dtos import UpdateAdminResponse, UpdatePasswordCommand

logger = logging.getLogger(__name__)


class UpdatePasswordUseCase:
    """
    Use case for updating an admin password.

    Business Rules:
    - Any admin may change their own password with the correct old password
    - Super admins may reset anyone, admins may reset moderators
    - New password and confirmation must match
    - The target's refresh session is revoked on success
    - Concurrent updates to the same account are last-write-wins
    """

    def __init__(self, uow: UnitOfWork, verifier: CredentialVerifier):
        self.uow = uow
        self.verifier = verifier

    async def execute(
        self,
        requester_role: AdminRole,
        requester_id: int,
        admin_id: int,
        command: UpdatePasswordCommand,
    ) -> Result[UpdateAdminResponse]:
        """
        Execute update password use case.

        Returns:
            Result with the admin ID, or Error (PASSWORD_MISMATCH,
            ADMIN_NOT_FOUND, FORBIDDEN, OLD_PASSWORD_REQUIRED,
            INVALID_OLD_PASSWORD)
        """
        if command.new_password != command.confirm_password:
            return Return.err(
                Error(
                    "PASSWORD_MISMATCH",
                    "New password and confirmation password do not match",
                )
            )

        is_self = requester_id == admin_id

        async with self.uow:
            admin = await self.uow.admins.get_by_id(admin_id)
            if admin is None:
                return Return.err(Error("ADMIN_NOT_FOUND", "Admin not found"))

            allowed = can_perform(
                requester_role,
                AdminAction.update_password,
                target_role=AdminRole(admin.role),
                is_self=is_self,
            )
            if not allowed:
                return Return.err(
                    Error(
                        "FORBIDDEN",
                        "Forbidden: You do not have permission to update this admin's password",
                    )
                )

            if is_self:
                if not command.old_password:
                    return Return.err(
                        Error(
                            "OLD_PASSWORD_REQUIRED",
                            "Old password is required to change your own password",
                        )
                    )

                old_password_valid = await self.verifier.verify_password(
                    command.old_password, admin
                )
                if not old_password_valid:
                    return Return.err(
                        Error(
                            "INVALID_OLD_PASSWORD",
                            "The provided old password is incorrect",
                        )
                    )

            admin.password_hash = await self.verifier.hash_password(command.new_password)
            admin.refresh_token_hash = None
            admin.updated_at = datetime.utcnow()

            await self.uow.admins.update(admin)
            await self.uow.commit()

        logger.info(f"Password updated: admin_id={admin_id} by={requester_id}")

        return Return.ok(
            UpdateAdminResponse(
                message="Admin password updated successfully", admin_id=admin_id
            )
        )
