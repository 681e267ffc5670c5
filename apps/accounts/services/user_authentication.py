"""User authentication service."""

from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, email: str, password: str, fcm_token: Optional[str] = None) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.
    The login time is what the account deletion freshness check relies on.

    Args:
        email: User's email
        password: User's password
        fcm_token: Push token of the device logging in, saved when given

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=email.strip().lower())
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_fields = ['last_login']
    user.last_login = timezone.now()

    if fcm_token:
        user.fcm_token = fcm_token
        update_fields.append('fcm_token')

    user.save(update_fields=update_fields)

    return user
