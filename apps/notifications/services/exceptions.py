"""Domain-specific exceptions for notification services."""


class NotificationsServiceError(Exception):
    """Base exception for notification services."""
    pass


class NotificationDeliveryError(NotificationsServiceError):
    """Raised when the push transport rejects or fails a delivery."""
    pass
