"""
Token Service

Issues and verifies signed access and refresh JWTs.
"""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Annotated, Literal, Optional, Union

from jose import JWTError, jwt
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from admin_iam.domain.entities import AdminRole, TokenClass
from admin_iam.libs.result import Error, Result, Return


class TokenConfigurationError(Exception):
    """Signing configuration is unusable; raised at startup, never per request"""


class MissingSigningKey(TokenConfigurationError):
    pass


class AccessTokenPayload(BaseModel):
    """Claims of an access token"""

    type: Literal["access"]
    admin_id: int
    role: AdminRole
    exp: int
    iat: int
    jti: str


class RefreshTokenPayload(BaseModel):
    """Claims of a refresh token"""

    type: Literal["refresh"]
    admin_id: int
    exp: int
    iat: int
    jti: str


TokenPayload = Annotated[
    Union[AccessTokenPayload, RefreshTokenPayload], Field(discriminator="type")
]

_payload_adapter = TypeAdapter(TokenPayload)


class TokenService:
    """
    Signs and verifies access/refresh token pairs.

    Business Rules:
    - Access tokens embed admin_id and role, refresh tokens admin_id only
    - Refresh tokens are signed with the refresh secret, which falls back
      to the access secret when not configured
    - Access lifetime must be strictly shorter than refresh lifetime
    - Every token carries a random jti, so no two issued tokens are equal
    - Expired, tampered or wrong-class tokens are rejected
    """

    def __init__(
        self,
        secret: Optional[str],
        refresh_secret: Optional[str] = None,
        algorithm: str = "HS256",
        access_expires: timedelta = timedelta(minutes=30),
        refresh_expires: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise MissingSigningKey("JWT_SECRET is not configured")
        if access_expires >= refresh_expires:
            raise TokenConfigurationError(
                "Access token lifetime must be shorter than refresh token lifetime"
            )

        self.algorithm = algorithm
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._secrets = {
            TokenClass.access: secret,
            TokenClass.refresh: refresh_secret or secret,
        }

    @classmethod
    def from_config(cls, config) -> "TokenService":
        return cls(
            secret=config.JWT_SECRET,
            refresh_secret=config.JWT_REFRESH_SECRET,
            algorithm=config.JWT_ALGORITHM,
            access_expires=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_expires=timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def issue_access(self, admin_id: int, role: AdminRole) -> str:
        """
        Create a short-lived access token.

        Args:
            admin_id: Admin ID
            role: Admin role at issuance time

        Returns:
            JWT token string
        """
        return self._encode(
            TokenClass.access,
            {"admin_id": admin_id, "role": AdminRole(role).value},
            self.access_expires,
        )

    def issue_refresh(self, admin_id: int) -> str:
        """
        Create a long-lived refresh token.

        Args:
            admin_id: Admin ID

        Returns:
            JWT token string
        """
        return self._encode(
            TokenClass.refresh, {"admin_id": admin_id}, self.refresh_expires
        )

    def verify(self, token: str, expected_class: TokenClass) -> Result[TokenPayload]:
        """
        Verify and decode a token of the expected class.

        Args:
            token: JWT token string
            expected_class: access or refresh; selects the verification secret

        Returns:
            Result with the typed payload, or Error(INVALID_TOKEN)
        """
        try:
            claims = jwt.decode(
                token,
                self._secrets[expected_class],
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True},
            )
            payload = _payload_adapter.validate_python(claims)
        except (JWTError, ValidationError):
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

        if payload.type != expected_class.value:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

        return Return.ok(payload)

    def _encode(self, token_class: TokenClass, claims: dict, expires: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            **claims,
            "type": token_class.value,
            "exp": now + expires,
            "iat": now,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secrets[token_class], algorithm=self.algorithm)
