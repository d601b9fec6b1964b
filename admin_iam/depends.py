from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admin_iam.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from admin_iam.api.error import ClientError
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.request_pipeline import (
    Principal,
    RequestContext,
    authentication_stages,
    require_roles,
    run_pipeline,
)
from admin_iam.app.services.token_service import TokenService
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.domain.entities import AdminRole, TokenClass

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

security = HTTPBearer(auto_error=False)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_credential_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier


def _access_credential(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def authenticate(*roles: AdminRole):
    """
    Build a dependency that authenticates the access token and, when roles
    are given, requires one of them.

    Raises:
        ClientError: 401 if the token is missing, invalid, expired or stale;
            403 if the role is not allowed
    """
    extra_stages = [require_roles(*roles)] if roles else []

    async def dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        uow: UnitOfWork = Depends(get_unit_of_work),
        token_service: TokenService = Depends(get_token_service),
    ) -> Principal:
        context = RequestContext(credential=_access_credential(request, credentials))
        stages = authentication_stages(token_service, uow) + extra_stages

        result = await run_pipeline(context, stages)
        if result.is_err():
            error = result.error
            if error.code == "FORBIDDEN":
                raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)

        return result.value.principal

    return dependency


get_current_admin = authenticate()


async def get_optional_admin_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> Optional[int]:
    """
    Best-effort identification for logout: a valid access token, else a
    valid refresh token cookie, else None.
    """
    access_token = _access_credential(request, credentials)
    if access_token:
        result = token_service.verify(access_token, TokenClass.access)
        if result.is_ok():
            return result.value.admin_id

    refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if refresh_token:
        result = token_service.verify(refresh_token, TokenClass.refresh)
        if result.is_ok():
            return result.value.admin_id

    return None
