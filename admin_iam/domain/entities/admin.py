"""
Admin Entity

Represents an administrator account and its single refresh session.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import AdminRole


class Admin(SQLModel, table=True):
    """
    Admin entity - identity record for the admin panel.

    Business Rules:
    - Email must be unique across all admins
    - Phone is optional but unique when present
    - Password stored as bcrypt hash
    - refresh_token_hash holds the one active session; None means logged out
    - Never hard-deleted
    """

    __tablename__ = "admins"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, unique=True, max_length=16)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: AdminRole = Field(default=AdminRole.moderator)

    refresh_token_hash: Optional[str] = Field(default=None, max_length=60)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_admin_role", "role"),)
