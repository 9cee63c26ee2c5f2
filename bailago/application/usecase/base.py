"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

import logfire

from bailago.domain.model.user import UserView
from bailago.domain.service.ports import NotificationDispatcher, NotificationKind


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


async def notify_quietly(
    dispatcher: NotificationDispatcher,
    kind: NotificationKind,
    recipient: UserView,
    payload: dict[str, Any],
) -> bool:
    """Dispatch a notification after a committed state change.

    Delivery failures are logged and swallowed: the state change stands.

    Returns:
        True if the dispatcher accepted the notification
    """
    try:
        await dispatcher.notify(kind, recipient, payload)
    except Exception as e:
        logfire.error(
            "Notification dispatch failed",
            kind=kind.value,
            recipient_id=str(recipient.id),
            error=str(e),
        )
        return False
    return True
