"""Notification dispatcher that only logs."""

from typing import Any

import logfire

from bailago.domain.model.user import UserView
from bailago.domain.service.ports import NotificationDispatcher, NotificationKind

# Payload keys that must never reach the logs verbatim
_SECRET_KEYS = frozenset({"token"})


def redact(payload: dict[str, Any]) -> dict[str, Any]:
    """Shorten secrets in a payload before logging it."""
    return {
        key: (str(value)[:6] + "..." if key in _SECRET_KEYS and value else value)
        for key, value in payload.items()
    }


class LogfireNotificationDispatcher(NotificationDispatcher):
    """Writes every notification to logfire instead of delivering it.

    Used in development and wherever no mail or push transport is
    configured.
    """

    async def notify(
        self, kind: NotificationKind, recipient: UserView, payload: dict[str, Any]
    ) -> None:
        logfire.info(
            "Notification dispatched",
            kind=kind.value,
            recipient_id=str(recipient.id),
            **redact(payload),
        )
