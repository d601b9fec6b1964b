"""
List Admins Use Case

Paginated listing of admin accounts.
"""

import math

from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.libs.result import Result, Return
from .dtos import AdminListResponse, AdminView, PaginationInfo

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ListAdminsUseCase:
    """
    Use case for listing admins.

    Business Rules:
    - page >= 1, 1 <= limit <= 100 (enforced at the API layer)
    - Ordered by ID
    - total_pages = ceil(total_count / limit)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
    ) -> Result[AdminListResponse]:
        offset = (page - 1) * limit

        async with self.uow:
            admins = await self.uow.admins.list_page(offset, limit)
            total_count = await self.uow.admins.count()

            return Return.ok(
                AdminListResponse(
                    admins=[AdminView.from_entity(a) for a in admins],
                    pagination=PaginationInfo(
                        total_count=total_count,
                        total_pages=math.ceil(total_count / limit),
                        current_page=page,
                        page_size=limit,
                    ),
                )
            )
