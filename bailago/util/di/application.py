"""Application layer DI providers."""

from dishka import Scope, provide

from bailago.application.usecase.account import (
    GetInactivityStatusUseCase,
    ReactivateAccountUseCase,
)
from bailago.application.usecase.auth import (
    AuthenticateUseCase,
    LoginUseCase,
    OAuthLoginUseCase,
    RegisterUserUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    VerifyEmailUseCase,
)
from bailago.application.usecase.event import (
    CreateEventUseCase,
    DecideDjRequestUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    JoinEventUseCase,
    LeaveEventUseCase,
    ListEventsUseCase,
    RequestDjUseCase,
    UpdateEventUseCase,
)
from bailago.application.usecase.group import (
    AcceptInviteUseCase,
    ChangeMemberRoleUseCase,
    CreateGroupUseCase,
    DeleteGroupUseCase,
    InviteMemberUseCase,
    LeaveGroupUseCase,
    ListPendingInvitesUseCase,
    RejectInviteUseCase,
    RemoveMemberUseCase,
    UpdateGroupUseCase,
)
from bailago.application.usecase.user import UpdateProfileUseCase, UpdatePushTokenUseCase
from bailago.domain.service import (
    AccountLifecycleManager,
    EventRegistry,
    GroupRegistry,
    InviteRegistry,
    NotificationDispatcher,
    UserRegistry,
)
from bailago.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(user_registry=user_registry, account_lifecycle=account_lifecycle)

    @provide(scope=Scope.REQUEST)
    def get_oauth_login_use_case(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
        notification_dispatcher: NotificationDispatcher,
    ) -> OAuthLoginUseCase:
        """Provide OAuth login use case."""
        return OAuthLoginUseCase(
            user_registry=user_registry,
            account_lifecycle=account_lifecycle,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_authenticate_use_case(
        self,
        user_registry: UserRegistry,
        account_lifecycle: AccountLifecycleManager,
    ) -> AuthenticateUseCase:
        """Provide authenticate use case."""
        return AuthenticateUseCase(
            user_registry=user_registry, account_lifecycle=account_lifecycle
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_email_use_case(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> VerifyEmailUseCase:
        """Provide verify email use case."""
        return VerifyEmailUseCase(
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_request_password_reset_use_case(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> RequestPasswordResetUseCase:
        """Provide request password reset use case."""
        return RequestPasswordResetUseCase(
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_use_case(
        self,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> ResetPasswordUseCase:
        """Provide reset password use case."""
        return ResetPasswordUseCase(
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_inactivity_status_use_case(
        self, account_lifecycle: AccountLifecycleManager
    ) -> GetInactivityStatusUseCase:
        """Provide get inactivity status use case."""
        return GetInactivityStatusUseCase(account_lifecycle=account_lifecycle)

    @provide(scope=Scope.REQUEST)
    def get_reactivate_account_use_case(
        self, account_lifecycle: AccountLifecycleManager
    ) -> ReactivateAccountUseCase:
        """Provide reactivate account use case."""
        return ReactivateAccountUseCase(account_lifecycle=account_lifecycle)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(self, user_registry: UserRegistry) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(user_registry=user_registry)

    @provide(scope=Scope.REQUEST)
    def get_update_push_token_use_case(
        self, user_registry: UserRegistry
    ) -> UpdatePushTokenUseCase:
        """Provide update push token use case."""
        return UpdatePushTokenUseCase(user_registry=user_registry)

    # Event use cases
    @provide(scope=Scope.REQUEST)
    def get_create_event_use_case(
        self,
        event_registry: EventRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
    ) -> CreateEventUseCase:
        """Provide create event use case."""
        return CreateEventUseCase(
            event_registry=event_registry,
            group_registry=group_registry,
            user_registry=user_registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_events_use_case(
        self, event_registry: EventRegistry, group_registry: GroupRegistry
    ) -> ListEventsUseCase:
        """Provide list events use case."""
        return ListEventsUseCase(event_registry=event_registry, group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_get_event_use_case(
        self, event_registry: EventRegistry, group_registry: GroupRegistry
    ) -> GetEventUseCase:
        """Provide get event use case."""
        return GetEventUseCase(event_registry=event_registry, group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_update_event_use_case(
        self, event_registry: EventRegistry, group_registry: GroupRegistry
    ) -> UpdateEventUseCase:
        """Provide update event use case."""
        return UpdateEventUseCase(event_registry=event_registry, group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_delete_event_use_case(self, event_registry: EventRegistry) -> DeleteEventUseCase:
        """Provide delete event use case."""
        return DeleteEventUseCase(event_registry=event_registry)

    @provide(scope=Scope.REQUEST)
    def get_join_event_use_case(
        self,
        event_registry: EventRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> JoinEventUseCase:
        """Provide join event use case."""
        return JoinEventUseCase(
            event_registry=event_registry,
            group_registry=group_registry,
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_leave_event_use_case(self, event_registry: EventRegistry) -> LeaveEventUseCase:
        """Provide leave event use case."""
        return LeaveEventUseCase(event_registry=event_registry)

    @provide(scope=Scope.REQUEST)
    def get_request_dj_use_case(
        self,
        event_registry: EventRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> RequestDjUseCase:
        """Provide request DJ use case."""
        return RequestDjUseCase(
            event_registry=event_registry,
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_decide_dj_request_use_case(
        self,
        event_registry: EventRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> DecideDjRequestUseCase:
        """Provide decide DJ request use case."""
        return DecideDjRequestUseCase(
            event_registry=event_registry,
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    # Group use cases
    @provide(scope=Scope.REQUEST)
    def get_create_group_use_case(
        self, group_registry: GroupRegistry, user_registry: UserRegistry
    ) -> CreateGroupUseCase:
        """Provide create group use case."""
        return CreateGroupUseCase(group_registry=group_registry, user_registry=user_registry)

    @provide(scope=Scope.REQUEST)
    def get_update_group_use_case(self, group_registry: GroupRegistry) -> UpdateGroupUseCase:
        """Provide update group use case."""
        return UpdateGroupUseCase(group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_delete_group_use_case(self, group_registry: GroupRegistry) -> DeleteGroupUseCase:
        """Provide delete group use case."""
        return DeleteGroupUseCase(group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_invite_member_use_case(
        self,
        group_registry: GroupRegistry,
        invite_registry: InviteRegistry,
        user_registry: UserRegistry,
        notification_dispatcher: NotificationDispatcher,
    ) -> InviteMemberUseCase:
        """Provide invite member use case."""
        return InviteMemberUseCase(
            group_registry=group_registry,
            invite_registry=invite_registry,
            user_registry=user_registry,
            notification_dispatcher=notification_dispatcher,
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self,
        invite_registry: InviteRegistry,
        group_registry: GroupRegistry,
        user_registry: UserRegistry,
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(
            invite_registry=invite_registry,
            group_registry=group_registry,
            user_registry=user_registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_reject_invite_use_case(self, invite_registry: InviteRegistry) -> RejectInviteUseCase:
        """Provide reject invite use case."""
        return RejectInviteUseCase(invite_registry=invite_registry)

    @provide(scope=Scope.REQUEST)
    def get_list_pending_invites_use_case(
        self, invite_registry: InviteRegistry, group_registry: GroupRegistry
    ) -> ListPendingInvitesUseCase:
        """Provide list pending invites use case."""
        return ListPendingInvitesUseCase(
            invite_registry=invite_registry, group_registry=group_registry
        )

    @provide(scope=Scope.REQUEST)
    def get_leave_group_use_case(self, group_registry: GroupRegistry) -> LeaveGroupUseCase:
        """Provide leave group use case."""
        return LeaveGroupUseCase(group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_remove_member_use_case(self, group_registry: GroupRegistry) -> RemoveMemberUseCase:
        """Provide remove member use case."""
        return RemoveMemberUseCase(group_registry=group_registry)

    @provide(scope=Scope.REQUEST)
    def get_change_member_role_use_case(
        self, group_registry: GroupRegistry
    ) -> ChangeMemberRoleUseCase:
        """Provide change member role use case."""
        return ChangeMemberRoleUseCase(group_registry=group_registry)
