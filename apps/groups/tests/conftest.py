import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group, GroupMembership, Invitation


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def founder(db):
    """User who creates the group."""
    return User.objects.create_user(
        email='founder@example.com',
        password='FounderPass123!',
        first_name='Fiona',
        last_name='Founder',
        last_login=timezone.now(),
    )


@pytest.fixture
def member_user(db):
    """Second member of the group."""
    return User.objects.create_user(
        email='member@example.com',
        password='MemberPass123!',
        first_name='Mark',
        last_name='Member',
        fcm_token='member-device-token',
        last_login=timezone.now(),
    )


@pytest.fixture
def invitee(db):
    """User who is not yet in the group."""
    return User.objects.create_user(
        email='invitee@example.com',
        password='InviteePass123!',
        first_name='Ivy',
        last_name='Invitee',
        fcm_token='invitee-device-token',
        last_login=timezone.now(),
    )


@pytest.fixture
def outsider(db):
    """User outside every group."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='OutsiderPass123!',
        first_name='Otto',
    )


@pytest.fixture
def founder_client(founder):
    return _client_for(founder)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def invitee_client(invitee):
    return _client_for(invitee)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def group(db, founder):
    """Group with the founder as its only member."""
    group = Group.objects.create(name='Family')
    GroupMembership.objects.create(user=founder, group=group)
    return group


@pytest.fixture
def group_with_members(group, member_user):
    GroupMembership.objects.create(user=member_user, group=group)
    return group


@pytest.fixture
def car(group):
    return Car.objects.create(group=group, name="Mom's Mazda", icon='sedan')


@pytest.fixture
def invitation(group, founder, invitee):
    return Invitation.objects.create(
        email=invitee.email,
        group=group,
        group_name=group.name,
        invited_by=founder,
    )
