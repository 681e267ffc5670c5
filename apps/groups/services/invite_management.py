"""
Invite management service.

Handles email invitations into a group: sending, listing, accepting
and declining.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, Invitation
from apps.notifications.services import notify_invitation

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    SelfInvitationError,
    AlreadyMemberError,
    InvitationNotFoundError,
    InvalidInvitationError,
)

logger = logging.getLogger(__name__)


def send_invitation(*, group_id: UUID, invited_by: User, email: str) -> Invitation:
    """
    Invite an email address into a group and alert the invitee's device.

    The duplicate check reads the current member list; it is not a
    uniqueness constraint, so two concurrent invitations can both succeed.

    Args:
        group_id: UUID of the group
        invited_by: Member sending the invitation
        email: Address of the person to invite

    Returns:
        Created Invitation instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If invited_by is not a member
        SelfInvitationError: If email is the inviter's own address
        AlreadyMemberError: If email already belongs to a member
    """
    email = email.strip().lower()

    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.has_member(invited_by):
        raise NotMemberError("You must be a member to invite people to this group")

    if email == invited_by.email.lower():
        raise SelfInvitationError("You cannot invite yourself")

    if email in {e.lower() for e in group.member_emails()}:
        raise AlreadyMemberError(f"{email} is already a member of {group.name}")

    invitation = Invitation.objects.create(
        email=email,
        group=group,
        group_name=group.name,
        invited_by=invited_by,
    )
    logger.info("Invitation %s sent to group %s", invitation.id, group.id)

    notify_invitation(email=email, group_name=group.name)

    return invitation


def get_invitations_for_email(*, email: str) -> List[Invitation]:
    """Return pending invitations addressed to email, newest first."""
    return list(
        Invitation.objects
        .filter(email=email.strip().lower())
        .order_by('-created_at')
    )


def get_invitation(*, invitation_id: UUID) -> Invitation:
    """
    Raises:
        InvitationNotFoundError: If the invitation was accepted, declined or never existed
    """
    try:
        return Invitation.objects.select_related('group').get(id=invitation_id)
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")


@transaction.atomic
def accept_invitation(*, user: User, group_id: UUID, invitation_id: UUID) -> GroupMembership:
    """
    Join the group of an invitation and consume the invitation.

    Membership creation and invitation deletion share one transaction,
    so a failure leaves neither half behind.

    Returns:
        The (possibly pre-existing) GroupMembership

    Raises:
        InvitationNotFoundError: If the invitation does not exist
        InvalidInvitationError: If the invitation belongs to another group
    """
    try:
        invitation = (
            Invitation.objects
            .select_for_update()
            .get(id=invitation_id)
        )
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")

    if str(invitation.group_id) != str(group_id):
        raise InvalidInvitationError("Invitation does not belong to this group")

    membership, created = GroupMembership.objects.get_or_create(
        user=user,
        group_id=group_id,
    )
    invitation.delete()

    if created:
        logger.info("User %s joined group %s via invitation", user.id, group_id)
    return membership


def remove_invitation(*, invitation_id: UUID) -> None:
    """
    Delete an invitation (decline).

    Raises:
        InvitationNotFoundError: If the invitation does not exist
    """
    deleted, _ = Invitation.objects.filter(id=invitation_id).delete()
    if not deleted:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")
