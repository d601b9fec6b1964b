"""
Get Admin Use Case
"""

from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.libs.result import Error, Result, Return
from .dtos import AdminDetailResponse, AdminView


class GetAdminUseCase:
    """Use case for loading a single admin by ID"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin_id: int) -> Result[AdminDetailResponse]:
        async with self.uow:
            admin = await self.uow.admins.get_by_id(admin_id)
            if admin is None:
                return Return.err(Error("ADMIN_NOT_FOUND", "Admin not found"))

            return Return.ok(AdminDetailResponse(admin=AdminView.from_entity(admin)))
