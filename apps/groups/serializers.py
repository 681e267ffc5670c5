from rest_framework import serializers
from .models import Group, Invitation


class GroupSerializer(serializers.ModelSerializer):
    """Group with the ids of its members and cars."""

    members = serializers.SerializerMethodField()
    cars = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = ['id', 'name', 'members', 'cars']
        read_only_fields = fields

    def get_members(self, obj):
        return [str(membership.user_id) for membership in obj.memberships.all()]

    def get_cars(self, obj):
        return [str(car.id) for car in obj.cars.all()]


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name']


class InvitationSerializer(serializers.ModelSerializer):
    """Pending invitation as shown to the invitee."""

    groupId = serializers.UUIDField(source='group_id', read_only=True)
    groupName = serializers.CharField(source='group_name', read_only=True)

    class Meta:
        model = Invitation
        fields = ['id', 'email', 'groupId', 'groupName']
        read_only_fields = fields


class SendInvitationSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)


class AcceptInvitationSerializer(serializers.Serializer):
    groupId = serializers.UUIDField(required=False)


class RemoveMemberSerializer(serializers.Serializer):
    userId = serializers.UUIDField(required=True)
