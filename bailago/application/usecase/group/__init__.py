"""Group use cases."""

from bailago.application.usecase.group.create_group import (
    CreateGroupRequest,
    CreateGroupResponse,
    CreateGroupUseCase,
)
from bailago.application.usecase.group.invite_member import (
    InviteMemberRequest,
    InviteMemberResponse,
    InviteMemberUseCase,
)
from bailago.application.usecase.group.leave_group import (
    LeaveGroupRequest,
    LeaveGroupResponse,
    LeaveGroupUseCase,
)
from bailago.application.usecase.group.list_pending_invites import (
    ListPendingInvitesRequest,
    ListPendingInvitesResponse,
    ListPendingInvitesUseCase,
    PendingInvite,
)
from bailago.application.usecase.group.manage_group import (
    ChangeMemberRoleRequest,
    ChangeMemberRoleUseCase,
    DeleteGroupRequest,
    DeleteGroupResponse,
    DeleteGroupUseCase,
    GroupResponse,
    RemoveMemberRequest,
    RemoveMemberUseCase,
    UpdateGroupRequest,
    UpdateGroupUseCase,
)
from bailago.application.usecase.group.respond_to_invite import (
    AcceptInviteResponse,
    AcceptInviteUseCase,
    InviteDecisionRequest,
    RejectInviteResponse,
    RejectInviteUseCase,
)

__all__ = [
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "ChangeMemberRoleRequest",
    "ChangeMemberRoleUseCase",
    "CreateGroupRequest",
    "CreateGroupResponse",
    "CreateGroupUseCase",
    "DeleteGroupRequest",
    "DeleteGroupResponse",
    "DeleteGroupUseCase",
    "GroupResponse",
    "InviteDecisionRequest",
    "InviteMemberRequest",
    "InviteMemberResponse",
    "InviteMemberUseCase",
    "LeaveGroupRequest",
    "LeaveGroupResponse",
    "LeaveGroupUseCase",
    "ListPendingInvitesRequest",
    "ListPendingInvitesResponse",
    "ListPendingInvitesUseCase",
    "PendingInvite",
    "RejectInviteResponse",
    "RejectInviteUseCase",
    "RemoveMemberRequest",
    "RemoveMemberUseCase",
    "UpdateGroupRequest",
    "UpdateGroupUseCase",
]
