from rest_framework import permissions


class IsGroupMember(permissions.BasePermission):
    """
    Permission: User must be a member of the group.
    """

    message = "You must be a member of this group"

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        return obj.has_member(request.user)


class IsInvitee(permissions.BasePermission):
    """
    Permission: Invitation must be addressed to the user's email.
    """

    message = "This invitation is not addressed to you"

    def has_object_permission(self, request, view, obj):
        # obj is an Invitation instance
        return obj.email.lower() == request.user.email.lower()
