"""In-memory notification dispatcher for tests."""

from dataclasses import dataclass, field
from typing import Any

from bailago.domain.model.user import UserView
from bailago.domain.service.ports import NotificationDispatcher, NotificationKind
from bailago.domain.value import UserId


@dataclass
class SentNotification:
    kind: NotificationKind
    recipient_id: UserId
    payload: dict[str, Any] = field(default_factory=dict)


class RecordingNotificationDispatcher(NotificationDispatcher):
    """Records notifications instead of sending them.

    Set ``fail`` to make every dispatch raise, to exercise the
    fire-and-forget handling of callers.
    """

    def __init__(self) -> None:
        self.sent: list[SentNotification] = []
        self.fail = False

    async def notify(
        self, kind: NotificationKind, recipient: UserView, payload: dict[str, Any]
    ) -> None:
        if self.fail:
            raise RuntimeError("Notification transport unavailable")
        self.sent.append(
            SentNotification(kind=kind, recipient_id=recipient.id, payload=dict(payload))
        )

    def of_kind(self, kind: NotificationKind) -> list[SentNotification]:
        return [n for n in self.sent if n.kind == kind]

    def clear(self) -> None:
        self.sent.clear()
