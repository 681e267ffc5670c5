"""
Push notification dispatch.

Sends alerts through Firebase Cloud Messaging with the Firebase Admin SDK.
Delivery is fire-and-forget from the caller's point of view:
notify_invitation() never raises, so an unreachable device cannot undo the
action that triggered the alert.
"""

import logging

import firebase_admin
from firebase_admin import credentials, messaging
from firebase_admin.exceptions import FirebaseError
from django.conf import settings

from apps.accounts.models import User

from .exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)

INVITATION_TITLE = "New Group Invitation 🎉"
INVITATION_LINK = "group-invitation"


def get_firebase_app():
    """
    Return the default Firebase app, initialising it on first use.

    Returns:
        The app, or None when FCM_CREDENTIALS_FILE is not set

    Raises:
        NotificationDeliveryError: If the service-account file can't be loaded
    """
    credentials_file = settings.FCM_CREDENTIALS_FILE
    if not credentials_file:
        return None

    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    try:
        cred = credentials.Certificate(credentials_file)
    except (OSError, ValueError) as e:
        raise NotificationDeliveryError(f"Invalid Firebase credentials: {e}") from e

    logger.info("Initialised Firebase app from %s", credentials_file)
    return firebase_admin.initialize_app(cred)


def send_push_notification(*, device_token: str, title: str, body: str, link: str) -> bool:
    """
    Send one push notification to a device.

    Args:
        device_token: FCM registration token of the receiving device
        title: Notification title
        body: Notification body
        link: Deep link the app opens when the notification is tapped

    Returns:
        True if FCM accepted the message, False if push is not configured

    Raises:
        NotificationDeliveryError: If FCM rejects the message or is unreachable
    """
    app = get_firebase_app()
    if app is None:
        logger.debug("FCM_CREDENTIALS_FILE not set, skipping push to device")
        return False

    message = messaging.Message(
        token=device_token,
        notification=messaging.Notification(title=title, body=body),
        data={"link": link},
    )

    try:
        message_id = messaging.send(message, app=app)
    except (FirebaseError, ValueError) as e:
        raise NotificationDeliveryError(f"Failed to send push notification: {e}") from e

    logger.debug("FCM accepted message %s", message_id)
    return True


def notify_invitation(*, email: str, group_name: str) -> bool:
    """
    Alert the owner of email that they were invited to group_name.

    Returns:
        True if a notification was sent
    """
    device_token = (
        User.objects
        .filter(email=email.strip().lower(), is_active=True)
        .values_list('fcm_token', flat=True)
        .first()
    )
    if not device_token:
        logger.info("No device token registered for invitee, skipping invitation push")
        return False

    try:
        return send_push_notification(
            device_token=device_token,
            title=INVITATION_TITLE,
            body=f'You are invited to the group "{group_name}"',
            link=INVITATION_LINK,
        )
    except NotificationDeliveryError as e:
        logger.warning("Invitation push failed: %s", e)
        return False
