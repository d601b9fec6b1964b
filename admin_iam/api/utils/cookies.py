"""
Session cookies

Both tokens travel as httpOnly, SameSite=strict cookies whose max-age
matches the token lifetime.
"""

from fastapi import Response

from admin_iam.app.services.token_service import TokenService
from admin_iam.app.use_cases.auth import TokenPairResponse
from admin_iam.depends import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE


def set_session_cookies(
    response: Response,
    tokens: TokenPairResponse,
    token_service: TokenService,
    secure: bool,
) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        tokens.access_token,
        max_age=int(token_service.access_expires.total_seconds()),
        httponly=True,
        secure=secure,
        samesite="strict",
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        max_age=int(token_service.refresh_expires.total_seconds()),
        httponly=True,
        secure=secure,
        samesite="strict",
    )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
