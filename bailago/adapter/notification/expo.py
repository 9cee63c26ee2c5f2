"""Expo push notification dispatcher.

Sends push-worthy notifications (DJ requests, invites, new participants)
through the Expo push API. Email-only kinds are handed to a fallback
dispatcher, since mail delivery is outside this service.
"""

import re
from typing import Any

import httpx
import logfire

from bailago.adapter.error import ProviderError
from bailago.domain.model.user import UserView
from bailago.domain.service.ports import NotificationDispatcher, NotificationKind

_EXPO_TOKEN_PATTERN = re.compile(r"^Expo(nent)?PushToken\[.+\]$")


def is_expo_push_token(token: str | None) -> bool:
    """Check whether a string looks like an Expo push token."""
    return bool(token) and _EXPO_TOKEN_PATTERN.match(token) is not None


def render_push(kind: NotificationKind, payload: dict[str, Any]) -> tuple[str, str] | None:
    """Build the (title, body) of a push message.

    Args:
        kind: Notification kind
        payload: Kind-specific data

    Returns:
        Title and body, or None if the kind is not sent as a push
    """
    title = payload.get("event_title") or payload.get("group_name") or ""
    if kind == NotificationKind.NEW_PARTICIPANT:
        return "New participant!", f'{payload.get("participant_name", "Someone")} joins "{title}"'
    if kind == NotificationKind.DJ_REQUEST:
        return "New DJ request", f'{payload.get("dj_name", "Someone")} wants to DJ "{title}"'
    if kind == NotificationKind.DJ_APPROVED:
        return "You're the DJ!", f'Your DJ request for "{title}" was approved'
    if kind == NotificationKind.GROUP_INVITE:
        return "Group invite", f'{payload.get("invited_by", "Someone")} invited you to "{title}"'
    return None


class ExpoPushNotificationDispatcher(NotificationDispatcher):
    """Dispatcher that delivers push notifications via Expo."""

    def __init__(
        self,
        push_url: str,
        fallback: NotificationDispatcher,
        access_token: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Expo push dispatcher.

        Args:
            push_url: Expo push send endpoint
            fallback: Dispatcher for kinds that are not push notifications
            access_token: Optional Expo access token
            timeout: HTTP timeout in seconds
        """
        self.push_url = push_url
        self.fallback = fallback
        self.access_token = access_token
        self.timeout = timeout

    async def notify(
        self, kind: NotificationKind, recipient: UserView, payload: dict[str, Any]
    ) -> None:
        """Send a push message, or hand non-push kinds to the fallback.

        Raises:
            ProviderError: If the Expo API rejects the message
        """
        rendered = render_push(kind, payload)
        if rendered is None:
            await self.fallback.notify(kind, recipient, payload)
            return

        if not recipient.push_enabled or not is_expo_push_token(recipient.push_token):
            logfire.info(
                "Push skipped, no valid token",
                kind=kind.value,
                recipient_id=str(recipient.id),
            )
            return

        title, body = rendered
        message = {
            "to": recipient.push_token,
            "sound": "default",
            "title": title,
            "body": body,
            "data": {"type": kind.value, **payload},
        }
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.push_url,
                    json=[message],
                    headers=headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Expo push HTTP error", error=str(e), kind=kind.value)
            raise ProviderError("expo", f"HTTP error during push: {e}")

        if response.status_code != 200:
            logfire.error(
                "Expo push failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(
                "expo", f"Push request failed: {response.status_code}", response.status_code
            )

        tickets = response.json().get("data", [])
        delivered = sum(1 for t in tickets if t.get("status") == "ok")
        logfire.info(
            "Push sent",
            kind=kind.value,
            recipient_id=str(recipient.id),
            delivered=delivered,
            tickets=len(tickets),
        )
