"""
Request Authentication Pipeline

Ordered stages over a RequestContext. Each stage returns a new context or an
Error; run_pipeline stops at the first Error.
"""

import dataclasses
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

from admin_iam.app.services.token_service import AccessTokenPayload, TokenService
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import AdminRole, TokenClass
from admin_iam.libs.result import Error, Result, Return


@dataclass(frozen=True)
class Principal:
    """Authenticated admin as loaded from the store"""

    id: int
    role: AdminRole


@dataclass(frozen=True)
class RequestContext:
    credential: Optional[str] = None
    claims: Optional[AccessTokenPayload] = None
    principal: Optional[Principal] = None


Stage = Callable[[RequestContext], Awaitable[Result[RequestContext]]]


async def run_pipeline(
    context: RequestContext, stages: Iterable[Stage]
) -> Result[RequestContext]:
    for stage in stages:
        result = await stage(context)
        if result.is_err():
            return result
        context = result.value
    return Return.ok(context)


def require_credential() -> Stage:
    async def stage(context: RequestContext) -> Result[RequestContext]:
        if not context.credential:
            return Return.err(Error("UNAUTHORIZED", "Missing access token"))
        return Return.ok(context)

    return stage


def verify_access_token(token_service: TokenService) -> Stage:
    async def stage(context: RequestContext) -> Result[RequestContext]:
        result = token_service.verify(context.credential, TokenClass.access)
        if result.is_err():
            return Return.err(result.error)
        return Return.ok(dataclasses.replace(context, claims=result.value))

    return stage


def load_admin(uow: UnitOfWork) -> Stage:
    async def stage(context: RequestContext) -> Result[RequestContext]:
        async with uow:
            admin = await uow.admins.get_by_id(context.claims.admin_id)
            if admin is None:
                return Return.err(Error("UNAUTHORIZED", "Admin not found"))
            principal = Principal(id=admin.id, role=AdminRole(admin.role))
        return Return.ok(dataclasses.replace(context, principal=principal))

    return stage


def confirm_role_current() -> Stage:
    """Reject access tokens whose embedded role no longer matches the store"""

    async def stage(context: RequestContext) -> Result[RequestContext]:
        if context.claims.role != context.principal.role:
            return Return.err(
                Error("ROLE_CHANGED", "Role has changed, refresh the session")
            )
        return Return.ok(context)

    return stage


def require_roles(*roles: AdminRole) -> Stage:
    async def stage(context: RequestContext) -> Result[RequestContext]:
        if context.principal.role not in roles:
            return Return.err(Error("FORBIDDEN", "Insufficient privileges"))
        return Return.ok(context)

    return stage


def authentication_stages(token_service: TokenService, uow: UnitOfWork) -> list:
    return [
        require_credential(),
        verify_access_token(token_service),
        load_admin(uow),
        confirm_role_current(),
    ]
