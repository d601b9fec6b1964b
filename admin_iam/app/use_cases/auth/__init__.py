"""
Authentication Use Cases

Login, session refresh and logout.
"""

from .login_use_case import LoginUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .logout_use_case import LogoutUseCase
from .dtos import LogoutResponse, TokenPairResponse

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshSessionUseCase",
    "LogoutUseCase",
    # DTOs - Responses
    "TokenPairResponse",
    "LogoutResponse",
]
