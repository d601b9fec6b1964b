"""
Admin IAM Domain Entities

All domain entities organized by model.
"""

from .enums import AdminRole, TokenClass
from .admin import Admin

__all__ = [
    # Enums
    "AdminRole",
    "TokenClass",
    # Entities
    "Admin",
]
