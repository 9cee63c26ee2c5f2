"""Notification infrastructure providers."""

from dishka import Scope, provide

from bailago.adapter.notification import (
    ExpoPushNotificationDispatcher,
    LogfireNotificationDispatcher,
)
from bailago.config import PushSettings
from bailago.domain.service import NotificationDispatcher
from bailago.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(self, push_settings: PushSettings) -> NotificationDispatcher:
        """Provide notification dispatcher.

        Returns:
            Expo push dispatcher falling back to logging when push is
            enabled, otherwise the logging dispatcher alone
        """
        log_dispatcher = LogfireNotificationDispatcher()
        if not push_settings.enabled:
            return log_dispatcher

        return ExpoPushNotificationDispatcher(
            push_url=push_settings.expo_push_url,
            fallback=log_dispatcher,
            access_token=push_settings.expo_access_token,
            timeout=push_settings.timeout_seconds,
        )
