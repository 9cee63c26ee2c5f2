"""In-memory user repository."""

from contextlib import AbstractAsyncContextManager
from typing import Optional

from bailago.domain.model.user import User
from bailago.domain.repository.user import UserRepository
from bailago.domain.value import AuthProvider, UserId
from bailago.persistence.store import EntityStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository."""

    def __init__(self) -> None:
        self._store: EntityStore[UserId, User] = EntityStore()

    def atomic(self) -> AbstractAsyncContextManager:
        return self._store.lock

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a non-deleted user by email, ignoring case."""
        needle = email.strip().lower()
        return self._store.find_first(
            lambda u: not u.is_deleted and u.email.lower() == needle
        )

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a non-deleted user by username."""
        return self._store.find_first(
            lambda u: not u.is_deleted and u.username == username
        )

    async def find_by_nickname(self, nickname: str) -> Optional[User]:
        """Find a non-deleted user by nickname."""
        return self._store.find_first(
            lambda u: not u.is_deleted and u.nickname is not None and u.nickname == nickname
        )

    async def find_by_display_name(self, display_name: str) -> Optional[User]:
        """Find a non-deleted user by display name, ignoring case."""
        needle = display_name.lower()
        return self._store.find_first(
            lambda u: not u.is_deleted and u.display_name.lower() == needle
        )

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[User]:
        """Find a non-deleted user by provider identity."""
        return self._store.find_first(
            lambda u: not u.is_deleted
            and u.provider == provider
            and u.provider_id == provider_id
        )

    async def find_by_verification_token(self, token: str) -> Optional[User]:
        """Find a user by email-verification token."""
        return self._store.find_first(lambda u: u.email_verification_token == token)

    async def find_by_reset_token(self, token: str) -> Optional[User]:
        """Find a user by password-reset token."""
        return self._store.find_first(lambda u: u.password_reset_token == token)

    async def find_all(self, include_deleted: bool = False) -> list[User]:
        """List users in creation order."""
        if include_deleted:
            return self._store.values()
        return self._store.filter(lambda u: not u.is_deleted)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        return self._store.put(user.id, user)
