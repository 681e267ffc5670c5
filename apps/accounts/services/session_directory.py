"""
Session directory service.

Resolves an authenticated principal to the profile the client shows and
tracks the logout transition by revoking the refresh token.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import UserNotFoundError, InvalidTokenError

User = get_user_model()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUserDetails:
    user_id: str
    user_email: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def get_session_user_details(*, user_id: UUID) -> SessionUserDetails:
    """
    Resolve a logged-in user id to its profile details.

    Raises:
        UserNotFoundError: If the profile does not exist or is inactive
    """
    try:
        user = User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    return SessionUserDetails(
        user_id=str(user.id),
        user_email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def save_device_token(*, user_id: UUID, fcm_token: str) -> User:
    """
    Store the push token of the user's current device.

    Raises:
        UserNotFoundError: If user does not exist
    """
    updated = User.objects.filter(id=user_id).update(fcm_token=fcm_token)
    if not updated:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    return User.objects.get(id=user_id)


def logout_user(*, refresh_token: str) -> None:
    """
    End a session by blacklisting its refresh token.

    Raises:
        InvalidTokenError: If the token is malformed, expired or already revoked
    """
    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        raise InvalidTokenError(str(e))

    logger.info("Refresh token revoked on logout")


def get_user_details(*, user_ids: Iterable[UUID], viewer: Optional[User] = None) -> List[User]:
    """
    Load profiles for the given ids, skipping ids that do not resolve.

    With a viewer, only users sharing at least one group with the viewer
    are returned.
    """
    users = User.objects.filter(id__in=list(user_ids), is_active=True)
    if viewer is not None:
        users = users.filter(
            group_memberships__group__memberships__user=viewer
        ).distinct()

    return list(users.order_by('first_name', 'last_name', 'email'))
