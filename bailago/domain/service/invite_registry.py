"""Group invite registry domain service."""

from datetime import timedelta
from uuid import uuid4

import logfire

from bailago.domain.model.invite import GroupInvite
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.repository import InviteRepository
from bailago.domain.service.ports import Clock
from bailago.domain.value import GroupId, InviteId, InviteStatus, UserId

from .base import Service


class InviteRegistry(Service):
    """Domain service for group invites.

    Accepting an invite only flips its status. Adding the membership is
    the caller's job, through the group registry.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        clock: Clock,
        expiry: timedelta = timedelta(days=7),
    ) -> None:
        """Initialize invite registry.

        Args:
            invite_repository: Invite repository
            clock: Time source
            expiry: Lifetime of a new invite
        """
        self.invite_repository = invite_repository
        self.clock = clock
        self.expiry = expiry

    async def create(
        self,
        group_id: GroupId,
        invited_user_id: UserId,
        invited_by_user_id: UserId,
    ) -> GroupInvite:
        """Invite a user into a group.

        If a pending invite already exists for the pair it is returned
        unchanged, expired or not, instead of creating a duplicate.

        Args:
            group_id: Target group
            invited_user_id: Invitee
            invited_by_user_id: Admin sending the invite

        Returns:
            The pending invite for the pair
        """
        with logfire.span(
            "invite_registry.create",
            group_id=str(group_id),
            invited_user_id=str(invited_user_id),
        ):
            async with self.invite_repository.atomic():
                existing = await self.invite_repository.find_pending(group_id, invited_user_id)
                if existing:
                    logfire.info("Pending invite reused", invite_id=str(existing.id))
                    return existing

                now = self.clock.now()
                invite = GroupInvite(
                    id=InviteId(uuid4()),
                    group_id=group_id,
                    invited_user_id=invited_user_id,
                    invited_by_user_id=invited_by_user_id,
                    status=InviteStatus.PENDING,
                    created_at=now,
                    expires_at=now + self.expiry,
                )
                saved = await self.invite_repository.save(invite)

            logfire.info(
                "Invite created",
                invite_id=str(saved.id),
                group_id=str(group_id),
                invited_by_user_id=str(invited_by_user_id),
            )
            return saved

    async def accept(self, invite_id: InviteId) -> Outcome[GroupInvite]:
        """Accept a pending, unexpired invite.

        Returns:
            Accepted invite, NOT_FOUND, INVALID_STATE if it was already
            resolved, or EXPIRED
        """
        with logfire.span("invite_registry.accept", invite_id=str(invite_id)):
            async with self.invite_repository.atomic():
                invite = await self.invite_repository.find_by_id(invite_id)
                if not invite:
                    return Outcome.fail(FailureKind.NOT_FOUND, "Invite not found")
                if invite.status != InviteStatus.PENDING:
                    logfire.warn(
                        "Invite already resolved",
                        invite_id=str(invite_id),
                        status=invite.status.value,
                    )
                    return Outcome.fail(FailureKind.INVALID_STATE, "Invite already resolved")
                if invite.is_expired(self.clock.now()):
                    logfire.warn("Invite expired", invite_id=str(invite_id))
                    return Outcome.fail(FailureKind.EXPIRED, "Invite expired")

                accepted = invite.model_copy(update={"status": InviteStatus.ACCEPTED})
                await self.invite_repository.save(accepted)

            logfire.info("Invite accepted", invite_id=str(invite_id))
            return Outcome.success(accepted)

    async def reject(self, invite_id: InviteId) -> Outcome[GroupInvite]:
        """Reject an invite.

        Pending invites are rejected even after expiry. Rejecting twice is
        a no-op; an accepted invite cannot be rejected.

        Returns:
            Rejected invite, NOT_FOUND, or INVALID_STATE for an accepted one
        """
        with logfire.span("invite_registry.reject", invite_id=str(invite_id)):
            async with self.invite_repository.atomic():
                invite = await self.invite_repository.find_by_id(invite_id)
                if not invite:
                    return Outcome.fail(FailureKind.NOT_FOUND, "Invite not found")
                if invite.status == InviteStatus.REJECTED:
                    return Outcome.success(invite)
                if invite.status == InviteStatus.ACCEPTED:
                    logfire.warn("Cannot reject an accepted invite", invite_id=str(invite_id))
                    return Outcome.fail(FailureKind.INVALID_STATE, "Invite already accepted")

                rejected = invite.model_copy(update={"status": InviteStatus.REJECTED})
                await self.invite_repository.save(rejected)

            logfire.info("Invite rejected", invite_id=str(invite_id))
            return Outcome.success(rejected)

    async def find_by_id(self, invite_id: InviteId) -> GroupInvite | None:
        return await self.invite_repository.find_by_id(invite_id)

    async def find_pending_for_user(self, user_id: UserId) -> list[GroupInvite]:
        """List the pending invites a user can still accept."""
        now = self.clock.now()
        invites = await self.invite_repository.find_by_invited_user(
            user_id, InviteStatus.PENDING
        )
        return [i for i in invites if not i.is_expired(now)]

    async def find_by_group(self, group_id: GroupId) -> list[GroupInvite]:
        return await self.invite_repository.find_by_group(group_id)

    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every invite of a group, whatever its status."""
        with logfire.span("invite_registry.delete_by_group", group_id=str(group_id)):
            async with self.invite_repository.atomic():
                count = await self.invite_repository.delete_by_group(group_id)
            logfire.info("Group invites deleted", group_id=str(group_id), count=count)
            return count
