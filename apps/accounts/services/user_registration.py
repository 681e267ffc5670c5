"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    fcm_token: str = ""
) -> User:
    """
    Register a new user and store the profile fields.

    Args:
        email: User's email address (stored lower-cased)
        password: User's password (will be hashed)
        first_name: First name shown to group members
        last_name: Last name shown to group members
        fcm_token: Optional push token of the registering device

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If registration fails
    """
    email = email.strip().lower()

    if User.objects.filter(email=email).exists():
        raise UserRegistrationError(f"An account with email {email} already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            fcm_token=fcm_token or '',
            # Registering opens a session just like logging in
            last_login=timezone.now(),
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    logger.info("Registered user %s", user.id)
    return user
