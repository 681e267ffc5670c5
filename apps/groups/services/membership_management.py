"""
Membership management service.

Member removal itself is unconditional; refusing to empty a group is the
caller's job through check_member_can_leave().
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership

from .exceptions import (
    GroupNotFoundError,
    LastMemberError,
)

logger = logging.getLogger(__name__)


def get_group_members(*, group_id: UUID) -> List[User]:
    """
    Get all members of a group, in joining order.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return list(
        User.objects
        .filter(group_memberships__group_id=group_id)
        .order_by('group_memberships__joined_at')
    )


def check_member_can_leave(*, group_id: UUID, user_id: UUID) -> None:
    """
    Refuse a removal that would leave the group without members.

    Raises:
        GroupNotFoundError: If group doesn't exist
        LastMemberError: If user_id is the only remaining member
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    member_ids = list(
        GroupMembership.objects
        .filter(group_id=group_id)
        .values_list('user_id', flat=True)
    )
    if len(member_ids) <= 1 and any(str(m) == str(user_id) for m in member_ids):
        raise LastMemberError(
            "Cannot leave group with only one member. Delete the group instead."
        )


@transaction.atomic
def delete_member(*, group_id: UUID, user_id: UUID) -> bool:
    """
    Remove a user from a group.

    Returns:
        True if a membership was removed, False if the user was not a member
    """
    deleted, _ = (
        GroupMembership.objects
        .filter(group_id=group_id, user_id=user_id)
        .delete()
    )

    if deleted:
        logger.info("Removed user %s from group %s", user_id, group_id)
    return bool(deleted)
