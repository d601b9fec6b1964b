"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the auth domain.
"""

from pydantic import BaseModel


class TokenPairResponse(BaseModel):
    """Access/refresh pair returned by login and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
    message: str
