"""User repository interface."""

from abc import abstractmethod
from typing import Optional

from bailago.domain.model.user import User
from bailago.domain.repository.base import Repository
from bailago.domain.value import AuthProvider, UserId


class UserRepository(Repository):
    """Repository for User aggregate.

    Unique-field lookups (email, username, nickname) ignore deleted
    accounts unless asked otherwise: uniqueness only holds among
    non-deleted users.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found (deleted or not), None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a non-deleted user by email (case-insensitive).

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a non-deleted user by username."""
        pass

    @abstractmethod
    async def find_by_nickname(self, nickname: str) -> Optional[User]:
        """Find a non-deleted user by nickname."""
        pass

    @abstractmethod
    async def find_by_display_name(self, display_name: str) -> Optional[User]:
        """Find the first non-deleted user whose display name matches, ignoring case."""
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[User]:
        """Find a non-deleted user by their external provider identity.

        Args:
            provider: The authentication provider
            provider_id: The user's ID on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_verification_token(self, token: str) -> Optional[User]:
        """Find a user holding the given email-verification token."""
        pass

    @abstractmethod
    async def find_by_reset_token(self, token: str) -> Optional[User]:
        """Find a user holding the given password-reset token."""
        pass

    @abstractmethod
    async def find_all(self, include_deleted: bool = False) -> list[User]:
        """List users in creation order.

        Args:
            include_deleted: Whether to include anonymized accounts

        Returns:
            List of users
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
