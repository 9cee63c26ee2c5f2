"""Notification dispatch adapters."""

from .expo import ExpoPushNotificationDispatcher, is_expo_push_token
from .log import LogfireNotificationDispatcher
from .recording import RecordingNotificationDispatcher, SentNotification

__all__ = [
    "ExpoPushNotificationDispatcher",
    "LogfireNotificationDispatcher",
    "RecordingNotificationDispatcher",
    "SentNotification",
    "is_expo_push_token",
]
