from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Group, GroupMembership, Invitation
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    InvitationSerializer,
    SendInvitationSerializer,
    AcceptInvitationSerializer,
    RemoveMemberSerializer,
)
from .permissions import IsGroupMember, IsInvitee

from apps.accounts.serializers import UserPublicSerializer
from apps.cars.serializers import CarSerializer, CarCreateSerializer
from apps.cars.services import (
    add_car_to_group,
    get_group_cars,
    release_claims_held_by,
    CarValidationError,
)
from apps.groups.services import (
    create_group,
    delete_group,
    get_group_by_id,
    get_group_members,
    check_member_can_leave,
    delete_member,
    send_invitation,
    get_invitations_for_email,
    accept_invitation,
    remove_invitation,
    # Exceptions
    GroupNotFoundError,
    GroupValidationError,
    NotMemberError,
    LastMemberError,
    InvitationNotFoundError,
    SelfInvitationError,
    AlreadyMemberError,
    InvalidInvitationError,
)


class GroupViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.CreateModelMixin,
                   mixins.DestroyModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for groups.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get the groups the user is member of
    create: Create a new group with the user as its only member
    retrieve: Get a specific group (members only)
    destroy: Delete a group together with its cars (members only)
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated, IsGroupMember]
    pagination_class = None

    def get_queryset(self):
        queryset = Group.objects.prefetch_related('memberships', 'cars')
        if self.action == 'list':
            # Only groups where user is a member
            return queryset.filter(memberships__user=self.request.user).distinct()
        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return GroupCreateSerializer
        return GroupSerializer

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = create_group(
                name=serializer.validated_data['name'],
                founder=request.user,
            )
        except GroupValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = GroupSerializer(get_group_by_id(group_id=group.id))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        """Delete a group and its cars."""
        group = self.get_object()

        try:
            delete_group(group_id=group.id, user=request.user)
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: UserPublicSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the group."""
        group = self.get_object()
        members = get_group_members(group_id=group.id)
        serializer = UserPublicSerializer(members, many=True)
        return Response(serializer.data)

    @extend_schema(request=SendInvitationSerializer, responses={201: InvitationSerializer})
    @action(detail=True, methods=['post'])
    def invite(self, request, pk=None):
        """Invite someone into the group by email."""
        group = self.get_object()
        serializer = SendInvitationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invitation = send_invitation(
                group_id=group.id,
                invited_by=request.user,
                email=serializer.validated_data['email'],
            )
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (SelfInvitationError, AlreadyMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = InvitationSerializer(invitation)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group. The last member has to delete the group instead."""
        group = self.get_object()

        try:
            check_member_can_leave(group_id=group.id, user_id=request.user.id)
        except LastMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        release_claims_held_by(user=request.user, group_id=group.id)
        delete_member(group_id=group.id, user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=RemoveMemberSerializer, responses={204: None})
    @action(detail=True, methods=['delete'])
    def remove_member(self, request, pk=None):
        """Remove a member from the group."""
        group = self.get_object()
        serializer = RemoveMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = serializer.validated_data['userId']

        membership = (
            GroupMembership.objects
            .select_related('user')
            .filter(group=group, user_id=user_id)
            .first()
        )
        if membership is None:
            return Response(
                {'error': 'User is not a member of this group'},
                status=status.HTTP_404_NOT_FOUND
            )

        try:
            check_member_can_leave(group_id=group.id, user_id=user_id)
        except LastMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        release_claims_held_by(user=membership.user, group_id=group.id)
        delete_member(group_id=group.id, user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: CarSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def cars(self, request, pk=None):
        """Get the cars of the group."""
        group = self.get_object()
        serializer = CarSerializer(get_group_cars(group_id=group.id), many=True)
        return Response(serializer.data)

    @extend_schema(request=CarCreateSerializer, responses={201: CarSerializer})
    @action(detail=True, methods=['post'])
    def add_car(self, request, pk=None):
        """Add a car to the group."""
        group = self.get_object()
        serializer = CarCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            car = add_car_to_group(
                group_id=group.id,
                user=request.user,
                name=serializer.validated_data['name'],
                icon=serializer.validated_data['icon'],
            )
        except CarValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(CarSerializer(car).data, status=status.HTTP_201_CREATED)


class InvitationViewSet(mixins.ListModelMixin,
                        mixins.DestroyModelMixin,
                        viewsets.GenericViewSet):
    """
    Invitations addressed to the current user.

    list: Pending invitations for the user's email
    accept: Join the group and consume the invitation
    destroy: Decline the invitation
    """

    serializer_class = InvitationSerializer
    permission_classes = [IsAuthenticated, IsInvitee]
    pagination_class = None
    queryset = Invitation.objects.select_related('group')

    def list(self, request, *args, **kwargs):
        invitations = get_invitations_for_email(email=request.user.email)
        return Response(self.get_serializer(invitations, many=True).data)

    @extend_schema(request=AcceptInvitationSerializer, responses={200: GroupSerializer})
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        """Accept an invitation."""
        invitation = self.get_object()
        serializer = AcceptInvitationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group_id = serializer.validated_data.get('groupId', invitation.group_id)

        try:
            accept_invitation(user=request.user, group_id=group_id, invitation_id=invitation.id)
        except InvitationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidInvitationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(GroupSerializer(get_group_by_id(group_id=group_id)).data)

    def destroy(self, request, *args, **kwargs):
        """Decline an invitation."""
        invitation = self.get_object()

        try:
            remove_invitation(invitation_id=invitation.id)
        except InvitationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
