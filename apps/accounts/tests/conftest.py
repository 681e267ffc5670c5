from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group, GroupMembership


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user who just logged in."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        first_name='Test',
        last_name='User',
        last_login=timezone.now(),
    )


@pytest.fixture
def stale_user(db):
    """Create a user whose last login is an hour old."""
    return User.objects.create_user(
        email='staleuser@example.com',
        password='StalePass123!',
        first_name='Stale',
        last_name='User',
        last_login=timezone.now() - timedelta(hours=1),
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        first_name='Inactive',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        first_name='Other',
        last_name='User',
        last_login=timezone.now(),
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def stale_client(stale_user):
    client = APIClient()
    refresh = RefreshToken.for_user(stale_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def user_with_reset_token(db):
    """Create a user with a password reset token."""
    user = User.objects.create_user(
        email='resetuser@example.com',
        password='OldPass123!',
        first_name='Reset',
    )
    user.password_reset_token = 'valid-reset-token-12345'
    user.password_reset_expires_at = timezone.now() + timedelta(minutes=30)
    user.save()
    return user


@pytest.fixture
def solo_group(user):
    """Group where user is the only member, with one car."""
    group = Group.objects.create(name='Solo Garage')
    GroupMembership.objects.create(user=user, group=group)
    Car.objects.create(group=group, name='Solo Car')
    return group


@pytest.fixture
def shared_group(user, other_user):
    """Group shared by user and other_user, with a car user is driving."""
    group = Group.objects.create(name='Family')
    GroupMembership.objects.create(user=user, group=group)
    GroupMembership.objects.create(user=other_user, group=group)
    Car.objects.create(
        group=group,
        name='Family Van',
        currently_in_use=True,
        currently_used_by=user,
        currently_used_by_full_name=user.get_full_name(),
    )
    return group
