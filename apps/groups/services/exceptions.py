"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist or is inaccessible."""
    pass


class GroupValidationError(GroupsServiceError):
    """Raised when group input is invalid (e.g. an empty name)."""
    pass


class NotMemberError(GroupsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class LastMemberError(GroupsServiceError):
    """Raised when removing a member would leave the group empty."""
    pass


class InvitationNotFoundError(GroupsServiceError):
    """Raised when an invitation does not exist (already accepted or declined)."""
    pass


class SelfInvitationError(GroupsServiceError):
    """Raised when a user tries to invite their own email address."""
    pass


class AlreadyMemberError(GroupsServiceError):
    """Raised when the invited email already belongs to a group member."""
    pass


class InvalidInvitationError(GroupsServiceError):
    """Raised when an invitation does not match the group it is accepted for."""
    pass
