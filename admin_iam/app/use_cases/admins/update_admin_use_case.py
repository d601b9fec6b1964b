"""
Update Admin Use Case

Updates name, email, phone and role of an admin account.
"""

import logging
from datetime import datetime

from admin_iam.app.repositories.admin_repository import DuplicateAdminError
from admin_iam.app.services.authorization import AdminAction, can_perform
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import AdminRole
from admin_iam.libs.result import Error, Result, Return
from .dtos import UpdateAdminCommand, UpdateAdminResponse
from .errors import EMAIL_ALREADY_EXISTS, PHONE_ALREADY_EXISTS, conflict_error

logger = logging.getLogger(__name__)


class UpdateAdminUseCase:
    """
    Use case for updating admin details.

    Business Rules:
    - Target admin must exist
    - Role hierarchy decides whether the requester may edit the target
      (see authorization.can_perform)
    - Nobody can change their own role
    - Email and phone must stay unique
    - Only the supplied fields change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_role: AdminRole,
        requester_id: int,
        admin_id: int,
        command: UpdateAdminCommand,
    ) -> Result[UpdateAdminResponse]:
        """
        Execute update admin use case.

        Returns:
            Result with the updated admin ID, or Error
            (ADMIN_NOT_FOUND, FORBIDDEN, EMAIL_ALREADY_EXISTS, PHONE_ALREADY_EXISTS)
        """
        async with self.uow:
            admin = await self.uow.admins.get_by_id(admin_id)
            if admin is None:
                return Return.err(Error("ADMIN_NOT_FOUND", "Admin not found"))

            allowed = can_perform(
                requester_role,
                AdminAction.update_details,
                target_role=AdminRole(admin.role),
                is_self=requester_id == admin_id,
                new_role=command.role,
            )
            if not allowed:
                return Return.err(
                    Error(
                        "FORBIDDEN",
                        "Forbidden: You do not have permission to update this admin",
                    )
                )

            if command.email and command.email != admin.email:
                email_taken = await self.uow.admins.get_by_email(command.email)
                if email_taken:
                    return Return.err(EMAIL_ALREADY_EXISTS)

            if command.phone and command.phone != admin.phone:
                phone_taken = await self.uow.admins.get_by_phone(command.phone)
                if phone_taken:
                    return Return.err(PHONE_ALREADY_EXISTS)

            changes = command.model_dump(exclude_none=True)
            for field, value in changes.items():
                setattr(admin, field, value)
            admin.updated_at = datetime.utcnow()

            try:
                await self.uow.admins.update(admin)
            except DuplicateAdminError as e:
                logger.warning(f"Update conflict on {e.field}: admin_id={admin_id}")
                return Return.err(conflict_error(e.field))
            await self.uow.commit()

        logger.info(
            f"Admin updated: admin_id={admin_id} by={requester_id} fields={sorted(changes)}"
        )

        return Return.ok(
            UpdateAdminResponse(
                message="Admin details updated successfully", admin_id=admin_id
            )
        )
