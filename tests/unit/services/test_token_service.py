"""
Unit tests for TokenService
"""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from admin_iam.app.services.token_service import (
    AccessTokenPayload,
    MissingSigningKey,
    RefreshTokenPayload,
    TokenConfigurationError,
    TokenService,
)
from admin_iam.domain.entities import AdminRole, TokenClass


def test_issue_and_verify_access_token(token_service):
    token = token_service.issue_access(7, AdminRole.admin)

    result = token_service.verify(token, TokenClass.access)

    assert result.is_ok()
    payload = result.value
    assert isinstance(payload, AccessTokenPayload)
    assert payload.admin_id == 7
    assert payload.role == AdminRole.admin
    assert payload.exp > payload.iat


def test_issue_and_verify_refresh_token(token_service):
    token = token_service.issue_refresh(7)

    result = token_service.verify(token, TokenClass.refresh)

    assert result.is_ok()
    assert isinstance(result.value, RefreshTokenPayload)
    assert result.value.admin_id == 7


def test_refresh_token_carries_no_role(token_service):
    token = token_service.issue_refresh(7)
    claims = jwt.decode(token, "unit-refresh-secret", algorithms=["HS256"])
    assert "role" not in claims
    assert claims["type"] == "refresh"


def test_tokens_issued_back_to_back_differ(token_service):
    assert token_service.issue_refresh(1) != token_service.issue_refresh(1)
    assert token_service.issue_access(1, AdminRole.moderator) != token_service.issue_access(
        1, AdminRole.moderator
    )


def test_refresh_token_signed_with_refresh_secret(token_service):
    token = token_service.issue_refresh(3)

    # Verifiable with the refresh secret, not with the access secret
    jwt.decode(token, "unit-refresh-secret", algorithms=["HS256"])
    with pytest.raises(JWTError):
        jwt.decode(token, "unit-access-secret", algorithms=["HS256"])


def test_access_token_rejected_as_refresh_with_separate_secrets(token_service):
    token = token_service.issue_access(3, AdminRole.admin)
    result = token_service.verify(token, TokenClass.refresh)
    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


def test_wrong_class_rejected_with_shared_secret():
    service = TokenService(secret="shared-secret")

    access = service.issue_access(3, AdminRole.admin)
    refresh = service.issue_refresh(3)

    assert service.verify(access, TokenClass.refresh).is_err()
    assert service.verify(refresh, TokenClass.access).is_err()
    assert service.verify(refresh, TokenClass.refresh).is_ok()


def test_refresh_secret_falls_back_to_access_secret():
    service = TokenService(secret="shared-secret", refresh_secret=None)
    token = service.issue_refresh(5)
    claims = jwt.decode(token, "shared-secret", algorithms=["HS256"])
    assert claims["admin_id"] == 5


def test_expired_token_rejected():
    service = TokenService(
        secret="s", access_expires=timedelta(seconds=-10), refresh_expires=timedelta(days=7)
    )
    token = service.issue_access(1, AdminRole.admin)

    result = service.verify(token, TokenClass.access)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


def test_tampered_token_rejected(token_service):
    token = token_service.issue_access(1, AdminRole.moderator)
    forged = jwt.encode(
        {**jwt.get_unverified_claims(token), "role": "super_admin"},
        "attacker-secret",
        algorithm="HS256",
    )

    assert token_service.verify(forged, TokenClass.access).is_err()


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(token_service, garbage):
    result = token_service.verify(garbage, TokenClass.access)
    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


def test_token_missing_required_claims_rejected(token_service):
    token = jwt.encode(
        {"type": "access", "admin_id": 1, "exp": 9999999999, "iat": 1},
        "unit-access-secret",
        algorithm="HS256",
    )
    # No role and no jti
    assert token_service.verify(token, TokenClass.access).is_err()


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_signing_key_is_fatal(secret):
    with pytest.raises(MissingSigningKey):
        TokenService(secret=secret)


def test_access_lifetime_must_be_shorter_than_refresh():
    with pytest.raises(TokenConfigurationError):
        TokenService(
            secret="s",
            access_expires=timedelta(days=7),
            refresh_expires=timedelta(days=7),
        )


def test_from_config_reads_lifetimes():
    class Config:
        JWT_SECRET = "s"
        JWT_REFRESH_SECRET = None
        JWT_ALGORITHM = "HS256"
        ACCESS_TOKEN_EXPIRE_MINUTES = 15
        REFRESH_TOKEN_EXPIRE_DAYS = 3

    service = TokenService.from_config(Config)

    assert service.access_expires == timedelta(minutes=15)
    assert service.refresh_expires == timedelta(days=3)
