"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
Multi-row state changes run inside a single transaction.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    GroupValidationError,
    NotMemberError,
    LastMemberError,
    InvitationNotFoundError,
    SelfInvitationError,
    AlreadyMemberError,
    InvalidInvitationError,
)

from .group_management import (
    create_group,
    get_group_by_id,
    get_user_groups,
    delete_group,
)

from .membership_management import (
    get_group_members,
    check_member_can_leave,
    delete_member,
)

from .invite_management import (
    send_invitation,
    get_invitations_for_email,
    get_invitation,
    accept_invitation,
    remove_invitation,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'GroupValidationError',
    'NotMemberError',
    'LastMemberError',
    'InvitationNotFoundError',
    'SelfInvitationError',
    'AlreadyMemberError',
    'InvalidInvitationError',

    # Group Management
    'create_group',
    'get_group_by_id',
    'get_user_groups',
    'delete_group',

    # Membership Management
    'get_group_members',
    'check_member_can_leave',
    'delete_member',

    # Invite Management
    'send_invitation',
    'get_invitations_for_email',
    'get_invitation',
    'accept_invitation',
    'remove_invitation',
]
