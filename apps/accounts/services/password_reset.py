"""
Password reset service.

A reset request stores a single-use token with an expiry on the user and
mails it to them once the transaction commits. Confirming with a live
token sets the new password and burns the token.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from .exceptions import UserNotFoundError, InvalidTokenError

User = get_user_model()

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Reset your TagAuto password"


def _reset_email_body(user, reset_token: str) -> str:
    lines = [
        f"Hi {user.first_name or user.email},",
        "",
        "Someone asked to reset the password of your TagAuto account.",
    ]
    if settings.PASSWORD_RESET_URL:
        lines.append(f"Open this link to choose a new one: {settings.PASSWORD_RESET_URL}?token={reset_token}")
    else:
        lines.append(f"Use this code to choose a new one: {reset_token}")
    lines += [
        "",
        f"The code expires in {settings.PASSWORD_RESET_TIMEOUT_MINUTES} minutes.",
        "If you did not ask for this, you can ignore this email.",
    ]
    return "\n".join(lines)


def send_password_reset_email(user, reset_token: str) -> bool:
    """
    Mail the reset token to the user.

    Returns:
        True if the mail backend accepted the message
    """
    try:
        sent = send_mail(
            subject=RESET_EMAIL_SUBJECT,
            message=_reset_email_body(user, reset_token),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
        )
    except OSError:
        # smtplib errors are OSError subclasses
        logger.exception("Could not send password reset email to user %s", user.id)
        return False

    logger.info("Password reset email sent to user %s", user.id)
    return bool(sent)


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Generate a password reset token and mail it to the user.

    Requesting again replaces the previous token.

    Args:
        email: User's email address

    Returns:
        Reset token

    Raises:
        UserNotFoundError: If user does not exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=email.strip().lower(), is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    reset_token = secrets.token_urlsafe(32)
    user.password_reset_token = reset_token
    user.password_reset_expires_at = timezone.now() + timedelta(
        minutes=settings.PASSWORD_RESET_TIMEOUT_MINUTES
    )
    user.save(update_fields=['password_reset_token', 'password_reset_expires_at'])

    transaction.on_commit(lambda: send_password_reset_email(user, reset_token))

    return reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Raises:
        InvalidTokenError: If token is unknown, already used or expired
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(
                password_reset_token=token,
                password_reset_expires_at__gt=timezone.now(),
                is_active=True,
            )
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires_at = None
    user.save(update_fields=['password', 'password_reset_token', 'password_reset_expires_at'])

    logger.info("Password reset completed for user %s", user.id)
    return user
