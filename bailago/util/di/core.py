"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from bailago.config import (
    InvitationSettings,
    LifecycleSettings,
    PushSettings,
    SecuritySettings,
    Settings,
    TokenSettings,
)
from bailago.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_lifecycle_settings(self, settings: Settings) -> LifecycleSettings:
        return settings.lifecycle

    @provide(scope=Scope.APP)
    def provide_token_settings(self, settings: Settings) -> TokenSettings:
        return settings.tokens

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_security_settings(self, settings: Settings) -> SecuritySettings:
        return settings.security

    @provide(scope=Scope.APP)
    def provide_push_settings(self, settings: Settings) -> PushSettings:
        return settings.push
