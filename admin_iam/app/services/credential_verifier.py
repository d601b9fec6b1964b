"""
Credential Verifier

bcrypt hashing and timing-safe comparison for passwords and refresh tokens.
"""

import asyncio
import hashlib
from typing import Optional

import bcrypt

from admin_iam.domain.entities import Admin


class CredentialVerifier:
    """
    Hashes and compares secrets with bcrypt off the event loop.

    Business Rules:
    - A missing account is compared against a fixed dummy hash so the
      response time does not reveal whether the account exists
    - Refresh tokens are SHA-256 digested before bcrypt, bcrypt only reads
      the first 72 bytes and JWTs share a long common prefix
    - A malformed stored hash never matches
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        # Same cost as real hashes, computed once per process
        self._dummy_hash = bcrypt.hashpw(
            b"dummy_password", bcrypt.gensalt(rounds)
        ).decode()

    async def hash_password(self, password: str) -> str:
        return await self._hash(password.encode("utf-8"))

    async def verify_password(self, password: str, admin: Optional[Admin]) -> bool:
        """
        Check a password against an admin, or against the dummy hash if absent.

        Returns False for an absent admin and for a wrong password alike.
        """
        hash_to_compare = admin.password_hash if admin is not None else self._dummy_hash
        password_valid = await self._check(password.encode("utf-8"), hash_to_compare)
        return admin is not None and password_valid

    async def hash_token(self, token: str) -> str:
        return await self._hash(self._digest(token))

    async def verify_token(self, token: str, token_hash: str) -> bool:
        return await self._check(self._digest(token), token_hash)

    @staticmethod
    def _digest(token: str) -> bytes:
        return hashlib.sha256(token.encode("utf-8")).hexdigest().encode()

    async def _hash(self, secret: bytes) -> str:
        hashed = await asyncio.to_thread(bcrypt.hashpw, secret, bcrypt.gensalt(self.rounds))
        return hashed.decode()

    async def _check(self, secret: bytes, hashed: str) -> bool:
        try:
            return await asyncio.to_thread(bcrypt.checkpw, secret, hashed.encode())
        except ValueError:
            # Invalid salt or secret over bcrypt's 72-byte limit
            return False
