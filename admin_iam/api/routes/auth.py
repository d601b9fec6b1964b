from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from admin_iam.api.error import ClientError, ServerError
from admin_iam.api.utils.cookies import clear_session_cookies, set_session_cookies
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.token_service import TokenService
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.app.use_cases.auth import (
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshSessionUseCase,
    TokenPairResponse,
)
from admin_iam.depends import (
    REFRESH_TOKEN_COOKIE,
    get_credential_verifier,
    get_optional_admin_id,
    get_token_service,
    get_unit_of_work,
)
from admin_iam.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="Admin email address")
    password: str = Field(..., min_length=1, description="Admin password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=TokenPairResponse)
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Admin Login

    Authenticates an admin and starts a new session, replacing any previous one.
    Tokens are returned in the body and set as httpOnly cookies.

    Raises:
        - 401 Unauthorized: Invalid email or password (same error either way)
        - 422 Unprocessable Entity: Invalid input
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, token_service, verifier)
    result = await use_case.execute(body.email, body.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_session_cookies(
        response, result.value, token_service, request.app.state.cookie_secure
    )
    return result.value


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    The refresh token may come from the body or the refreshToken cookie.
    """

    refresh_token: Optional[str] = Field(None, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPairResponse)
async def refresh(
    request: Request,
    response: Response,
    body: Optional[RefreshRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Refresh Session

    Exchanges a refresh token for a new pair. Presenting an already-rotated
    token revokes the session.

    Raises:
        - 401 Unauthorized: Missing/invalid/expired token, no session, or
          session compromised
        - 500 Internal Server Error: Server error
    """
    refresh_token = body.refresh_token if body and body.refresh_token else None
    if refresh_token is None:
        refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh_token:
        raise ClientError(
            Error("UNAUTHORIZED", "Refresh token is required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = RefreshSessionUseCase(uow, token_service, verifier)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "INVALID_SESSION", "SESSION_COMPROMISED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_session_cookies(
        response, result.value, token_service, request.app.state.cookie_secure
    )
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    admin_id: Optional[int] = Depends(get_optional_admin_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Admin Logout

    Clears the stored refresh session and the session cookies. Always
    succeeds, with or without a valid session.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(admin_id)

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookies(response)
    return result.value
