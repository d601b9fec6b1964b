"""
Role Authorization Engine

Pure decision function over the moderator < admin < super_admin hierarchy.
Callers map a False result to 403 Forbidden.
"""

from enum import Enum
from typing import Optional

from admin_iam.domain.entities import AdminRole


class AdminAction(str, Enum):
    """Mutating operations on admin accounts"""

    create_account = "create_account"
    update_details = "update_details"
    update_password = "update_password"


def can_perform(
    requesting_role: AdminRole,
    action: AdminAction,
    target_role: Optional[AdminRole] = None,
    is_self: bool = False,
    new_role: Optional[AdminRole] = None,
) -> bool:
    """
    Decide whether a requester may perform an action on a target.

    Args:
        requesting_role: Current role of the requester
        action: Requested action
        target_role: Role being created (create_account) or the target's
            current role (update_details, update_password)
        is_self: Requester and target are the same account
        new_role: Role being assigned by update_details, None if unchanged

    Returns:
        True if allowed
    """
    if action == AdminAction.update_details:
        return _can_update_details(requesting_role, target_role, is_self, new_role)

    if requesting_role == AdminRole.super_admin:
        return True

    if action == AdminAction.create_account:
        if requesting_role == AdminRole.admin:
            return target_role == AdminRole.moderator
        return False

    if action == AdminAction.update_password:
        if is_self:
            return True
        if requesting_role == AdminRole.admin:
            return target_role == AdminRole.moderator
        return False

    return False


def _can_update_details(
    requesting_role: AdminRole,
    target_role: Optional[AdminRole],
    is_self: bool,
    new_role: Optional[AdminRole],
) -> bool:
    changes_role = new_role is not None and new_role != target_role

    # Nobody changes their own role, super_admin included
    if is_self and changes_role:
        return False

    if requesting_role == AdminRole.super_admin:
        return True

    if requesting_role == AdminRole.admin:
        if target_role != AdminRole.moderator:
            return False
        return new_role is None or new_role < AdminRole.admin

    # Moderators may edit details on any account but never send a role field
    return new_role is None
