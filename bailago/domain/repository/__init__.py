"""Repository interfaces for BailaGo domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from bailago.domain.repository.base import Repository
from bailago.domain.repository.event import EventRepository
from bailago.domain.repository.group import GroupRepository
from bailago.domain.repository.invite import InviteRepository
from bailago.domain.repository.user import UserRepository

__all__ = [
    "Repository",
    "UserRepository",
    "EventRepository",
    "GroupRepository",
    "InviteRepository",
]
