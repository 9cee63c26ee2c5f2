"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from bailago.config import InvitationSettings, LifecycleSettings, TokenSettings
from bailago.domain.repository import (
    EventRepository,
    GroupRepository,
    InviteRepository,
    UserRepository,
)
from bailago.domain.service import (
    AccountLifecycleManager,
    Clock,
    EventRegistry,
    GroupRegistry,
    InviteRegistry,
    NotificationDispatcher,
    PasswordHasher,
    TokenGenerator,
    UserRegistry,
)
from bailago.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; they hold no state of their own, so
    every request sees the same repositories through fresh instances.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_registry(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_generator: TokenGenerator,
        clock: Clock,
        token_settings: TokenSettings,
    ) -> UserRegistry:
        """Provide user registry."""
        return UserRegistry(
            user_repository=user_repository,
            password_hasher=password_hasher,
            token_generator=token_generator,
            clock=clock,
            verification_ttl=timedelta(hours=token_settings.email_verification_ttl_hours),
            reset_ttl=timedelta(hours=token_settings.password_reset_ttl_hours),
        )

    @provide
    def get_account_lifecycle(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
        clock: Clock,
        lifecycle_settings: LifecycleSettings,
    ) -> AccountLifecycleManager:
        """Provide account lifecycle manager with thresholds from settings."""
        return AccountLifecycleManager(
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
            clock=clock,
            inactive_after=timedelta(days=lifecycle_settings.inactive_after_days),
            schedule_deletion_after=timedelta(
                days=lifecycle_settings.schedule_deletion_after_days
            ),
            deletion_grace=timedelta(days=lifecycle_settings.deletion_grace_days),
            deleted_email_domain=lifecycle_settings.deleted_email_domain,
            deleted_display_name=lifecycle_settings.deleted_display_name,
        )

    @provide
    def get_event_registry(self, event_repository: EventRepository, clock: Clock) -> EventRegistry:
        """Provide event registry."""
        return EventRegistry(event_repository=event_repository, clock=clock)

    @provide
    def get_invite_registry(
        self,
        invite_repository: InviteRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InviteRegistry:
        """Provide invite registry."""
        return InviteRegistry(
            invite_repository=invite_repository,
            clock=clock,
            expiry=timedelta(days=invitation_settings.expiry_days),
        )

    @provide
    def get_group_registry(
        self,
        group_repository: GroupRepository,
        event_registry: EventRegistry,
        invite_registry: InviteRegistry,
        clock: Clock,
    ) -> GroupRegistry:
        """Provide group registry."""
        return GroupRegistry(
            group_repository=group_repository,
            event_registry=event_registry,
            invite_registry=invite_registry,
            clock=clock,
        )
