"""Persistence infrastructure providers."""

from dishka import Scope, provide

from bailago.domain.repository import (
    EventRepository,
    GroupRepository,
    InviteRepository,
    UserRepository,
)
from bailago.persistence.repository.inmemory import (
    InMemoryEventRepository,
    InMemoryGroupRepository,
    InMemoryInviteRepository,
    InMemoryUserRepository,
)
from bailago.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using process-wide in-memory stores.

    Repositories are APP-scoped: every request container shares the same
    stores, and state lives as long as the process.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide User repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_event_repository(self) -> EventRepository:
        """Provide Event repository."""
        return InMemoryEventRepository()

    @provide(scope=Scope.APP)
    def get_group_repository(self) -> GroupRepository:
        """Provide Group repository."""
        return InMemoryGroupRepository()

    @provide(scope=Scope.APP)
    def get_invite_repository(self) -> InviteRepository:
        """Provide Invite repository."""
        return InMemoryInviteRepository()
