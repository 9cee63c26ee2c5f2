"""In-memory repository implementations."""

from .event import InMemoryEventRepository
from .group import InMemoryGroupRepository
from .invite import InMemoryInviteRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryEventRepository",
    "InMemoryGroupRepository",
    "InMemoryInviteRepository",
    "InMemoryUserRepository",
]
