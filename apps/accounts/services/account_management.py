"""
Account management service.

Deleting an account cascades across groups and cars: groups the user is
the last member of disappear together with their cars, every other group
only loses the member and any car claim the member still holds.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from apps.cars.models import Car
from apps.cars.services import release_claims_held_by
from apps.groups.models import Group, GroupMembership

from .exceptions import (
    InvalidCredentialsError,
    ReauthenticationRequiredError,
    UserNotFoundError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def requires_reauthentication(user: User, now=None) -> bool:
    """Return True when the user's last login is older than the reauth window."""
    if user.last_login is None:
        return True

    window = timedelta(minutes=settings.ACCOUNT_REAUTH_WINDOW_MINUTES)
    return user.last_login < (now or timezone.now()) - window


def delete_user_account(*, user_id: UUID, password: Optional[str] = None) -> None:
    """
    Delete an account and detach it from every group.

    The freshness check runs before anything is touched: a stale session
    must re-enter the password, otherwise nothing is deleted.

    Args:
        user_id: User's ID
        password: Current password, required when the last login is stale

    Raises:
        UserNotFoundError: If user does not exist
        ReauthenticationRequiredError: If the session is stale and no password was given
        InvalidCredentialsError: If the given password is wrong
    """
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if password:
        if not user.check_password(password):
            raise InvalidCredentialsError("Invalid password")
    elif requires_reauthentication(user):
        raise ReauthenticationRequiredError(
            "Please log in again before deleting your account"
        )

    _delete_account_cascade(user)


@transaction.atomic
def _delete_account_cascade(user: User) -> None:
    group_ids = list(
        GroupMembership.objects
        .filter(user=user)
        .values_list('group_id', flat=True)
    )

    for group in Group.objects.select_for_update().filter(id__in=group_ids):
        if group.memberships.count() <= 1:
            # Last member leaves: the group and its cars go with them
            deleted_cars, _ = Car.objects.filter(group=group).delete()
            group.delete()
            logger.info(
                "Deleted group %s and %s car(s) with the account of its last member %s",
                group.id, deleted_cars, user.id,
            )
        else:
            release_claims_held_by(user=user, group_id=group.id)
            GroupMembership.objects.filter(group=group, user=user).delete()
            logger.info("Removed user %s from group %s", user.id, group.id)

    # Claims on cars outside the user's groups cannot outlive the account either
    release_claims_held_by(user=user)

    for token in OutstandingToken.objects.filter(user=user):
        BlacklistedToken.objects.get_or_create(token=token)

    user_id = user.id
    user.delete()
    logger.info("Deleted account %s", user_id)
