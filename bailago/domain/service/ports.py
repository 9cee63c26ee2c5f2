"""Collaborator interfaces the registries depend on.

Concrete implementations live in ``bailago.adapter``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any

from bailago.domain.model.user import UserView


class NotificationKind(str, Enum):
    """Kinds of notifications the domain emits."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
    PASSWORD_CHANGED = "password_changed"
    WELCOME = "welcome"
    INACTIVITY_WARNING = "inactivity_warning"
    DELETION_WARNING = "deletion_warning"
    DJ_REQUEST = "dj_request"
    DJ_APPROVED = "dj_approved"
    GROUP_INVITE = "group_invite"
    NEW_PARTICIPANT = "new_participant"


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC-aware time."""
        pass


class PasswordHasher(ABC):
    """One-way credential hashing."""

    @abstractmethod
    async def hash(self, plaintext: str) -> str:
        """Hash a plaintext password.

        Args:
            plaintext: Password to hash

        Returns:
            Encoded hash, salt included
        """
        pass

    @abstractmethod
    async def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash.

        Args:
            plaintext: Candidate password
            hashed: Stored hash

        Returns:
            True if they match
        """
        pass


class TokenGenerator(ABC):
    """Issuer of opaque one-time tokens."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new unguessable token."""
        pass


class NotificationDispatcher(ABC):
    """Outbound notifications (email, push).

    Delivery is best effort. Callers dispatch after their state change has
    been saved and never roll back on a dispatch failure.
    """

    @abstractmethod
    async def notify(
        self, kind: NotificationKind, recipient: UserView, payload: dict[str, Any]
    ) -> None:
        """Send a notification.

        Args:
            kind: Notification kind
            recipient: User to notify
            payload: Kind-specific data (token, event title, ...)
        """
        pass
