"""Services for push notification delivery."""

from .exceptions import (
    NotificationsServiceError,
    NotificationDeliveryError,
)
from .push_dispatch import send_push_notification, notify_invitation

__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationDeliveryError',
    # Services
    'send_push_notification',
    'notify_invitation',
]
