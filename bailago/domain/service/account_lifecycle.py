"""Account inactivity lifecycle.

Accounts move through active -> inactive -> deactivated (deletion
scheduled) -> deleted based on how long ago the user was last active.
A daily sweep applies the transitions; any user activity before the
deletion date brings the account back to active.
"""

import asyncio
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

import logfire
from pydantic import BaseModel, Field

from bailago.domain.model.user import UserView
from bailago.domain.outcome import FailureKind, Outcome
from bailago.domain.service.ports import Clock, NotificationDispatcher, NotificationKind
from bailago.domain.value import AccountStatus, UserId

from .base import Service
from .user_registry import UserRegistry

_DAY = timedelta(days=1)


class LifecycleAction(str, Enum):
    """Transition applied to one account by the sweep."""

    MARKED_INACTIVE = "marked_inactive"
    SCHEDULED_FOR_DELETION = "scheduled_for_deletion"
    DELETED = "deleted"


class SweepFailure(BaseModel):
    user_id: UserId
    error: str


class SweepResult(BaseModel):
    """Aggregate outcome of one sweep."""

    deactivated_count: int = 0
    deleted_count: int = 0
    warnings_sent: int = 0
    failures: list[SweepFailure] = Field(default_factory=list)


class InactivityStatus(BaseModel):
    """Lifecycle state of one account, as shown to its owner."""

    status: AccountStatus
    last_active_at: datetime
    deactivated_at: Optional[datetime] = None
    scheduled_deletion_at: Optional[datetime] = None
    days_until_deletion: Optional[int] = None


class AccountLifecycleManager(Service):
    """Domain service driving the inactivity state machine."""

    def __init__(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
        clock: Clock,
        inactive_after: timedelta = timedelta(days=90),
        schedule_deletion_after: timedelta = timedelta(days=180),
        deletion_grace: timedelta = timedelta(days=7),
        deleted_email_domain: str = "deleted.local",
        deleted_display_name: str = "Deleted user",
    ) -> None:
        """Initialize account lifecycle manager.

        Args:
            user_registry: Registry owning the accounts
            notification_dispatcher: Sink for inactivity and deletion warnings
            clock: Time source
            inactive_after: Idle time before an account is marked inactive
            schedule_deletion_after: Idle time before deletion is scheduled
            deletion_grace: Delay between scheduling and anonymization
            deleted_email_domain: Domain of the placeholder email of deleted accounts
            deleted_display_name: Display name written over deleted accounts
        """
        if schedule_deletion_after <= inactive_after:
            raise ValueError("schedule_deletion_after must exceed inactive_after")
        self.user_registry = user_registry
        self.notification_dispatcher = notification_dispatcher
        self.clock = clock
        self.inactive_after = inactive_after
        self.schedule_deletion_after = schedule_deletion_after
        self.deletion_grace = deletion_grace
        self.deleted_email_domain = deleted_email_domain
        self.deleted_display_name = deleted_display_name

    def _anonymized(self, user: UserView) -> dict[str, Any]:
        """Field changes scrubbing personal data from a deleted account."""
        return {
            "status": AccountStatus.DELETED,
            "email": f"deleted_{user.id}@{self.deleted_email_domain}",
            "display_name": self.deleted_display_name,
            "first_name": "",
            "last_name": "",
            "nickname": None,
            "bio": None,
            "avatar_url": None,
            "favorite_dances": frozenset(),
            "push_token": None,
            "push_enabled": False,
            "password_hash": None,
            "provider_id": None,
            "email_verification_token": None,
            "email_verification_expires": None,
            "password_reset_token": None,
            "password_reset_expires": None,
        }

    def decide(
        self, user: UserView, now: datetime
    ) -> tuple[LifecycleAction, dict[str, Any]] | None:
        """Pick the transition due for an account, if any.

        Deletion beats scheduling, which beats the inactivity mark, so a
        user first seen far past both thresholds is scheduled directly.

        Args:
            user: Current state of the account
            now: Evaluation time

        Returns:
            The action and its field changes, or None if nothing is due
        """
        if user.status == AccountStatus.DELETED:
            return None

        if user.scheduled_deletion_at is not None:
            if now >= user.scheduled_deletion_at:
                return LifecycleAction.DELETED, self._anonymized(user)
            return None

        idle = now - user.last_active_at
        if idle >= self.schedule_deletion_after:
            return LifecycleAction.SCHEDULED_FOR_DELETION, {
                "status": AccountStatus.DEACTIVATED,
                "deactivated_at": user.deactivated_at or now,
                "scheduled_deletion_at": now + self.deletion_grace,
            }
        if idle >= self.inactive_after and user.status == AccountStatus.ACTIVE:
            return LifecycleAction.MARKED_INACTIVE, {
                "status": AccountStatus.INACTIVE,
                "deactivated_at": now,
            }
        return None

    async def _warn(self, kind: NotificationKind, user: UserView, payload: dict[str, Any]) -> bool:
        """Dispatch a warning. Failures are logged, never raised."""
        try:
            await self.notification_dispatcher.notify(kind, user, payload)
        except Exception as e:
            logfire.error(
                "Lifecycle warning dispatch failed",
                kind=kind.value,
                user_id=str(user.id),
                error=str(e),
            )
            return False
        return True

    async def _sweep_one(self, user_id: UserId, result: SweepResult) -> None:
        now = self.clock.now()
        applied: list[LifecycleAction] = []
        before: list[UserView] = []

        def mutate(current: UserView) -> dict[str, Any] | None:
            decision = self.decide(current, now)
            if decision is None:
                return None
            action, changes = decision
            applied.append(action)
            before.append(current)
            return changes

        updated = await self.user_registry.transition(user_id, mutate)
        if updated is None:
            return

        action = applied[0]
        logfire.info("Account transitioned", user_id=str(user_id), action=action.value)

        if action == LifecycleAction.DELETED:
            result.deleted_count += 1
        elif action == LifecycleAction.SCHEDULED_FOR_DELETION:
            # Warn the pre-transition address, still the user's real one
            sent = await self._warn(
                NotificationKind.DELETION_WARNING,
                before[0],
                {"scheduled_deletion_at": updated.scheduled_deletion_at.isoformat()},
            )
            if sent:
                result.warnings_sent += 1
        elif action == LifecycleAction.MARKED_INACTIVE:
            result.deactivated_count += 1
            await self._warn(
                NotificationKind.INACTIVITY_WARNING,
                updated,
                {"inactive_days": self.inactive_after.days},
            )

    async def check_inactive_accounts(self) -> SweepResult:
        """Run one sweep over every non-deleted account.

        Each decision is re-evaluated against the freshly read account
        inside the user store lock, so activity recorded while the sweep
        runs always wins. One account failing does not stop the sweep.

        Returns:
            Counts of transitions and warnings, plus per-user failures
        """
        with logfire.span("account_lifecycle.check_inactive_accounts"):
            result = SweepResult()
            users = await self.user_registry.list_users(include_deleted=False)

            for user in users:
                try:
                    await self._sweep_one(user.id, result)
                except Exception as e:
                    logfire.error(
                        "Account transition failed",
                        user_id=str(user.id),
                        error=str(e),
                    )
                    result.failures.append(SweepFailure(user_id=user.id, error=str(e)))

            logfire.info(
                "Inactivity sweep completed",
                evaluated=len(users),
                deactivated=result.deactivated_count,
                deleted=result.deleted_count,
                warnings_sent=result.warnings_sent,
                failures=len(result.failures),
            )
            return result

    async def record_activity(self, user_id: UserId) -> Outcome[UserView]:
        """Record user activity, bringing a dormant account back to active.

        Args:
            user_id: Active user

        Returns:
            Updated view, NOT_FOUND, or INVALID_STATE for a deleted account
        """
        deleted = False

        def mutate(current: UserView) -> dict[str, Any] | None:
            nonlocal deleted
            if current.status == AccountStatus.DELETED:
                deleted = True
                return None
            return {
                "status": AccountStatus.ACTIVE,
                "last_active_at": self.clock.now(),
                "deactivated_at": None,
                "scheduled_deletion_at": None,
            }

        updated = await self.user_registry.transition(user_id, mutate)
        if deleted:
            logfire.warn("Activity on deleted account ignored", user_id=str(user_id))
            return Outcome.fail(FailureKind.INVALID_STATE, "Account has been deleted")
        if updated is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
        return Outcome.success(updated)

    async def reactivate_account(self, user_id: UserId) -> Outcome[UserView]:
        """Explicit, user-invoked reactivation."""
        with logfire.span("account_lifecycle.reactivate_account", user_id=str(user_id)):
            outcome = await self.record_activity(user_id)
            if outcome.ok:
                logfire.info("Account reactivated", user_id=str(user_id))
            return outcome

    async def get_inactivity_status(self, user_id: UserId) -> Outcome[InactivityStatus]:
        """Read the lifecycle state of an account.

        ``days_until_deletion`` is the ceiling of the remaining time in days
        when a deletion is scheduled, and never negative.
        """
        user = await self.user_registry.find_by_id(user_id)
        if user is None:
            return Outcome.fail(FailureKind.NOT_FOUND, "User not found")

        days_until_deletion = None
        if user.scheduled_deletion_at is not None:
            remaining = user.scheduled_deletion_at - self.clock.now()
            days_until_deletion = max(0, math.ceil(remaining / _DAY))

        return Outcome.success(
            InactivityStatus(
                status=user.status,
                last_active_at=user.last_active_at,
                deactivated_at=user.deactivated_at,
                scheduled_deletion_at=user.scheduled_deletion_at,
                days_until_deletion=days_until_deletion,
            )
        )

    async def run_periodically(self, interval: timedelta, stop_event: asyncio.Event) -> int:
        """Sweep every ``interval`` until ``stop_event`` is set.

        Args:
            interval: Delay between two sweeps
            stop_event: Set to stop the loop; a sweep in progress completes

        Returns:
            Number of sweeps run
        """
        sweeps = 0
        while not stop_event.is_set():
            await self.check_inactive_accounts()
            sweeps += 1
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval.total_seconds())
            except asyncio.TimeoutError:
                continue
        logfire.info("Inactivity sweep loop stopped", sweeps=sweeps)
        return sweeps
