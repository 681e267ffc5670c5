from rest_framework import permissions


class IsCarGroupMember(permissions.BasePermission):
    """
    Permission: User must be a member of the group owning the car.
    """

    message = "You must be a member of this car's group"

    def has_object_permission(self, request, view, obj):
        # obj is a Car instance
        return obj.group.has_member(request.user)
