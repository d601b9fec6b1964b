"""
Register Admin Use Case

Creates a new admin account on behalf of a privileged requester.
"""

import logging

from admin_iam.app.repositories.admin_repository import DuplicateAdminError
from admin_iam.app.services.authorization import AdminAction, can_perform
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import Admin, AdminRole
from admin_iam.libs.result import Error, Result, Return
from .dtos import RegisterAdminCommand, RegisterAdminResponse
from .errors import EMAIL_ALREADY_EXISTS, PHONE_ALREADY_EXISTS, conflict_error

logger = logging.getLogger(__name__)


class RegisterAdminUseCase:
    """
    Use case for registering an admin.

    Business Rules:
    - Moderators cannot register anyone
    - Admins can only register moderators
    - Super admins can register any role
    - Email must be unique, phone unique when present
    - New accounts start without a session
    """

    def __init__(self, uow: UnitOfWork, verifier: CredentialVerifier):
        self.uow = uow
        self.verifier = verifier

    async def execute(
        self, requester_role: AdminRole, command: RegisterAdminCommand
    ) -> Result[RegisterAdminResponse]:
        """
        Execute register admin use case.

        Args:
            requester_role: Current role of the requesting admin
            command: Validated registration data

        Returns:
            Result with the new admin ID, or Error
            (FORBIDDEN, EMAIL_ALREADY_EXISTS, PHONE_ALREADY_EXISTS)
        """
        if not can_perform(requester_role, AdminAction.create_account, command.role):
            return Return.err(
                Error(
                    "FORBIDDEN",
                    f"Forbidden: {requester_role.value} cannot register {command.role.value}",
                )
            )

        async with self.uow:
            existing_admin = await self.uow.admins.get_by_email(command.email)
            if existing_admin:
                return Return.err(EMAIL_ALREADY_EXISTS)

            if command.phone:
                phone_taken = await self.uow.admins.get_by_phone(command.phone)
                if phone_taken:
                    return Return.err(PHONE_ALREADY_EXISTS)

            password_hash = await self.verifier.hash_password(command.password)

            admin = Admin(
                name=command.name,
                email=command.email,
                phone=command.phone or None,
                password_hash=password_hash,
                role=command.role,
            )
            try:
                admin = await self.uow.admins.create(admin)
            except DuplicateAdminError as e:
                # Lost a race with a concurrent registration
                logger.warning(f"Registration conflict on {e.field}")
                return Return.err(conflict_error(e.field))
            admin_id = admin.id

            await self.uow.commit()

        logger.info(f"Admin registered: admin_id={admin_id} role={command.role.value}")

        return Return.ok(
            RegisterAdminResponse(
                message="Admin registered successfully", admin_id=admin_id
            )
        )
