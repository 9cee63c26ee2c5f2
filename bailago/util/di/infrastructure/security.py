"""Credential hashing and token infrastructure providers."""

from dishka import Scope, provide

from bailago.adapter.security import BcryptPasswordHasher, SecretsTokenGenerator
from bailago.config import SecuritySettings
from bailago.domain.service import PasswordHasher, TokenGenerator
from bailago.util.di.base import ProviderBase


class SecurityProvider(ProviderBase):
    """Security component base."""

    __mock_component__ = "security"


class ProdSecurityProvider(SecurityProvider):
    """Production security provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_password_hasher(self, security_settings: SecuritySettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return BcryptPasswordHasher(rounds=security_settings.bcrypt_rounds)

    @provide(scope=Scope.APP)
    def get_token_generator(self) -> TokenGenerator:
        """Provide URL-safe random token generator."""
        return SecretsTokenGenerator()
