"""
Admin IAM Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class AdminRole(str, Enum):
    """
    Admin role with a total order: moderator < admin < super_admin.

    Comparison operators use the rank, not the string value.
    """

    moderator = "moderator"
    admin = "admin"
    super_admin = "super_admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, AdminRole):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, AdminRole):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, AdminRole):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, AdminRole):
            return NotImplemented
        return self.rank >= other.rank


_ROLE_RANK = {
    AdminRole.moderator: 1,
    AdminRole.admin: 2,
    AdminRole.super_admin: 3,
}


class TokenClass(str, Enum):
    """Signed token class; each class is verified with its own secret"""

    access = "access"
    refresh = "refresh"
