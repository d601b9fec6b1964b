"""
Unit tests for CredentialVerifier
"""

from unittest.mock import patch

import bcrypt
import pytest

from admin_iam.domain.entities import Admin, AdminRole


def make_admin(password_hash: str) -> Admin:
    return Admin(
        id=1,
        name="Alice",
        email="a@x.com",
        password_hash=password_hash,
        role=AdminRole.moderator,
    )


@pytest.mark.asyncio
async def test_hash_and_verify_password(verifier):
    password_hash = await verifier.hash_password("Abcdef1!")

    assert password_hash.startswith("$2")
    assert await verifier.verify_password("Abcdef1!", make_admin(password_hash))
    assert not await verifier.verify_password("Abcdef1?", make_admin(password_hash))


@pytest.mark.asyncio
async def test_absent_account_still_runs_bcrypt(verifier):
    with patch(
        "admin_iam.app.services.credential_verifier.bcrypt.checkpw",
        wraps=bcrypt.checkpw,
    ) as checkpw:
        assert await verifier.verify_password("dummy_password", None) is False

    checkpw.assert_called_once()
    # Compared against the fixed dummy hash, not a fresh salt each call
    assert checkpw.call_args.args[1] == verifier._dummy_hash.encode()


@pytest.mark.asyncio
async def test_dummy_hash_uses_configured_cost(verifier):
    assert verifier._dummy_hash.split("$")[2] == "04"


@pytest.mark.asyncio
async def test_token_hash_covers_whole_token(verifier):
    # Same 80-byte prefix, different tail: bcrypt alone would see them as equal
    prefix = "x" * 80
    token_hash = await verifier.hash_token(prefix + "first")

    assert await verifier.verify_token(prefix + "first", token_hash)
    assert not await verifier.verify_token(prefix + "second", token_hash)


@pytest.mark.asyncio
async def test_malformed_stored_hash_never_matches(verifier):
    assert not await verifier.verify_token("token", "not-a-bcrypt-hash")
    assert not await verifier.verify_password("Abcdef1!", make_admin("garbage"))
