"""Create group use case."""

from uuid import UUID

from pydantic import BaseModel

from bailago.application.usecase.base import BaseUseCase
from bailago.domain.model.group import Group
from bailago.domain.outcome import Outcome
from bailago.domain.service import CreateGroupInput, GroupRegistry, UserRegistry
from bailago.domain.value import UserId


class CreateGroupRequest(CreateGroupInput):
    """Create group request."""

    user_id: str  # From authenticated user


class CreateGroupResponse(BaseModel):
    """Create group response."""

    group: Group


class CreateGroupUseCase(BaseUseCase):
    """Use case for creating a group. The creator becomes its admin."""

    def __init__(self, group_registry: GroupRegistry, user_registry: UserRegistry) -> None:
        """Initialize create group use case.

        Args:
            group_registry: Group registry
            user_registry: User registry
        """
        self.group_registry = group_registry
        self.user_registry = user_registry

    async def execute(self, request: CreateGroupRequest) -> Outcome[CreateGroupResponse]:
        creator = await self.user_registry.get_by_id(UserId(UUID(request.user_id)))
        if not creator.ok:
            return Outcome.from_failure(creator.failure)

        group = await self.group_registry.create(request, creator.value)
        return Outcome.success(CreateGroupResponse(group=group))
