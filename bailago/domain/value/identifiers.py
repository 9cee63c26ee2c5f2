"""Strongly typed identifiers for BailaGo domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
EventId = NewType("EventId", UUID)
LocationId = NewType("LocationId", UUID)
GroupId = NewType("GroupId", UUID)
InviteId = NewType("InviteId", UUID)
