"""
Group management service.

Handles group creation, lookup and deletion with proper transaction safety.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership

from .exceptions import (
    GroupNotFoundError,
    GroupValidationError,
    NotMemberError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_group(*, name: str, founder: User) -> Group:
    """
    Create a new group with its founder as the only member.

    Args:
        name: Group name (surrounding whitespace is stripped)
        founder: User creating the group

    Returns:
        Created Group instance

    Raises:
        GroupValidationError: If the name is empty
    """
    name = (name or '').strip()
    if not name:
        raise GroupValidationError("Group name is required")

    group = Group.objects.create(name=name)
    GroupMembership.objects.create(user=founder, group=group)

    logger.info("User %s created group %s", founder.id, group.id)
    return group


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with its members and cars prefetched.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=GroupMembership.objects.select_related('user')
                ),
                'cars',
            )
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def get_user_groups(*, user: User) -> List[Group]:
    """Return every group the user belongs to (empty list when none)."""
    return list(
        Group.objects
        .filter(memberships__user=user)
        .prefetch_related('memberships', 'cars')
        .distinct()
    )


@transaction.atomic
def delete_group(*, group_id: UUID, user: User) -> None:
    """
    Delete a group (member only).

    Cars are deleted first, then the group; cascading deletes remove the
    memberships and pending invitations.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not a member
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.has_member(user):
        raise NotMemberError("Only group members can delete the group")

    deleted_cars, _ = group.cars.all().delete()
    group.delete()

    logger.info("User %s deleted group %s with %s car(s)", user.id, group_id, deleted_cars)
