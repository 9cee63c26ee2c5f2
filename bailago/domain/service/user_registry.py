"""User registry domain service."""

import re
from datetime import timedelta
from typing import Any, Callable, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bailago.domain.model.user import User, UserView, to_user_view
from bailago.domain.outcome import Failure, FailureKind, Outcome
from bailago.domain.repository import UserRepository
from bailago.domain.service.ports import Clock, PasswordHasher, TokenGenerator
from bailago.domain.value import AccountStatus, AuthProvider, DanceType, OAuthProfile, UserId

from .base import Service

PASSWORD_MIN_LENGTH = 6
# In UTF-8 bytes; bcrypt refuses longer input
PASSWORD_MAX_BYTES = 72

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

_INVALID_TOKEN = "Invalid or expired token"


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= PASSWORD_MAX_BYTES


def check_password_length(password: str) -> str:
    """Validate that bcrypt can hash the whole password.

    Raises:
        ValueError: If the UTF-8 encoding is longer than 72 bytes
    """
    if not password_fits(password):
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes")
    return password


class RegisterUserInput(BaseModel):
    """Local (email + password) registration input."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    username: str = Field(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    display_name: str = Field(min_length=2, max_length=50)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=30)
    first_name: str = ""
    last_name: str = ""
    favorite_dances: frozenset[DanceType] = frozenset()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_length(value)


class Registration(BaseModel):
    """Result of a local registration.

    Carries the verification token so the caller can send the email.
    """

    user: UserView
    verification_token: str


class UserUpdate(BaseModel):
    """Partial user update. Only explicitly set fields are merged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: Optional[EmailStr] = None
    username: Optional[str] = Field(
        default=None, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH
    )
    nickname: Optional[str] = Field(default=None, max_length=30)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=200)
    favorite_dances: Optional[frozenset[DanceType]] = None

    @field_validator("nickname")
    @classmethod
    def blank_nickname_clears(cls, value: Optional[str]) -> Optional[str]:
        """A blank nickname removes it rather than claiming the empty one."""
        return value or None


class ProfileUpdate(BaseModel):
    """Profile-only update (display name, bio, favorite dances, avatar)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    display_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=200)
    favorite_dances: Optional[frozenset[DanceType]] = None
    avatar_url: Optional[str] = None


# Fields the profile update may touch. Identity fields are excluded.
_PROFILE_FIELDS = frozenset(ProfileUpdate.model_fields)

# Fields an update may explicitly clear by passing None
_NULLABLE_FIELDS = frozenset({"nickname", "avatar_url", "bio"})


def _explicit_changes(data: BaseModel) -> dict[str, Any]:
    """Collect explicitly set fields, ignoring None for required ones."""
    return {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_FIELDS
    }


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRegistry(Service):
    """Domain service owning user accounts.

    Every method returns ``UserView`` projections. The ``User`` entity with
    its credential hash and tokens never leaves this class.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_generator: TokenGenerator,
        clock: Clock,
        verification_ttl: timedelta = timedelta(hours=24),
        reset_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        """Initialize user registry.

        Args:
            user_repository: User repository
            password_hasher: Credential hashing capability
            token_generator: One-time token issuer
            clock: Time source
            verification_ttl: Lifetime of email-verification tokens
            reset_ttl: Lifetime of password-reset tokens
        """
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.token_generator = token_generator
        self.clock = clock
        self.verification_ttl = verification_ttl
        self.reset_ttl = reset_ttl

    async def _find_conflict(
        self,
        email: str | None = None,
        username: str | None = None,
        nickname: str | None = None,
        exclude: UserId | None = None,
    ) -> Failure | None:
        """Check identity fields for uniqueness among non-deleted users."""
        if email is not None:
            existing = await self.user_repository.find_by_email(email)
            if existing and existing.id != exclude:
                return Failure(FailureKind.CONFLICT, "Email already registered", "email_taken")
        if username is not None:
            existing = await self.user_repository.find_by_username(username)
            if existing and existing.id != exclude:
                return Failure(FailureKind.CONFLICT, "Username already taken", "username_taken")
        if nickname is not None:
            existing = await self.user_repository.find_by_nickname(nickname)
            if existing and existing.id != exclude:
                return Failure(FailureKind.CONFLICT, "Nickname already taken", "nickname_taken")
        return None

    async def create(self, data: RegisterUserInput) -> Outcome[Registration]:
        """Register a local account.

        Args:
            data: Registration input

        Returns:
            The new user's view and its email-verification token, or a
            CONFLICT failure if email, username or nickname is taken
        """
        email = _normalize_email(data.email)
        with logfire.span("user_registry.create", username=data.username):
            # Fail fast before paying for the hash
            conflict = await self._find_conflict(email, data.username, data.nickname)
            if conflict:
                logfire.warn("Registration conflict", code=conflict.code)
                return Outcome.from_failure(conflict)

            password_hash = await self.password_hasher.hash(data.password)
            token = self.token_generator.generate()

            async with self.user_repository.atomic():
                conflict = await self._find_conflict(email, data.username, data.nickname)
                if conflict:
                    logfire.warn("Registration conflict", code=conflict.code)
                    return Outcome.from_failure(conflict)

                now = self.clock.now()
                user = User(
                    id=UserId(uuid4()),
                    email=email,
                    username=data.username,
                    nickname=data.nickname,
                    first_name=data.first_name,
                    last_name=data.last_name,
                    display_name=data.display_name,
                    favorite_dances=data.favorite_dances,
                    password_hash=password_hash,
                    provider=AuthProvider.LOCAL,
                    email_verified=False,
                    email_verification_token=token,
                    email_verification_expires=now + self.verification_ttl,
                    last_active_at=now,
                    created_at=now,
                    updated_at=now,
                )
                await self.user_repository.save(user)

            logfire.info("User registered", user_id=str(user.id))
            return Outcome.success(
                Registration(user=to_user_view(user), verification_token=token)
            )

    async def _unique_username(self, base: str) -> str:
        """Find a free username derived from ``base``: base, base2, base3..."""
        base = re.sub(r"[^a-z0-9_.]", "", base.lower())
        if len(base) < USERNAME_MIN_LENGTH:
            base = f"dancer{base}"
        base = base[:USERNAME_MAX_LENGTH]

        candidate = base
        suffix = 2
        while await self.user_repository.find_by_username(candidate):
            tail = str(suffix)
            candidate = f"{base[: USERNAME_MAX_LENGTH - len(tail)]}{tail}"
            suffix += 1
        return candidate

    async def create_from_oauth(
        self,
        provider: AuthProvider,
        provider_id: str,
        email: str,
        profile: OAuthProfile | None = None,
    ) -> Outcome[UserView]:
        """Create a pre-verified account on first OAuth login.

        Args:
            provider: OAuth provider
            provider_id: Provider-assigned user id
            email: Email reported by the provider
            profile: Optional profile data from the provider

        Returns:
            The new user's view, or CONFLICT if the email or the provider
            identity is already registered
        """
        if provider == AuthProvider.LOCAL:
            raise ValueError("create_from_oauth requires an OAuth provider")

        profile = profile or OAuthProfile()
        email = _normalize_email(email)
        with logfire.span(
            "user_registry.create_from_oauth",
            provider=provider.value,
            provider_id=provider_id,
        ):
            async with self.user_repository.atomic():
                if await self.user_repository.find_by_provider_identity(provider, provider_id):
                    logfire.warn("OAuth identity already registered", provider=provider.value)
                    return Outcome.fail(
                        FailureKind.CONFLICT, "Account already exists", "identity_taken"
                    )
                conflict = await self._find_conflict(email=email)
                if conflict:
                    logfire.warn("OAuth registration conflict", code=conflict.code)
                    return Outcome.from_failure(conflict)

                username = await self._unique_username(
                    profile.username or email.split("@", 1)[0]
                )
                full_name = " ".join(
                    part for part in (profile.first_name, profile.last_name) if part
                )
                now = self.clock.now()
                user = User(
                    id=UserId(uuid4()),
                    email=email,
                    username=username,
                    first_name=profile.first_name or "",
                    last_name=profile.last_name or "",
                    display_name=profile.display_name or full_name or username,
                    avatar_url=profile.avatar_url,
                    provider=provider,
                    provider_id=provider_id,
                    email_verified=True,
                    last_active_at=now,
                    created_at=now,
                    updated_at=now,
                )
                await self.user_repository.save(user)

            logfire.info(
                "OAuth user created",
                user_id=str(user.id),
                provider=provider.value,
                username=username,
            )
            return Outcome.success(to_user_view(user))

    async def _merge(self, user_id: UserId, changes: dict[str, Any]) -> Outcome[UserView]:
        """Merge field changes into a live account, rechecking uniqueness."""
        async with self.user_repository.atomic():
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
            if user.is_deleted:
                return Outcome.fail(FailureKind.INVALID_STATE, "Account has been deleted")

            conflict = await self._find_conflict(
                email=changes.get("email"),
                username=changes.get("username"),
                nickname=changes.get("nickname"),
                exclude=user.id,
            )
            if conflict:
                logfire.warn("User update conflict", user_id=str(user_id), code=conflict.code)
                return Outcome.from_failure(conflict)

            updated = user.model_copy(update={**changes, "updated_at": self.clock.now()})
            await self.user_repository.save(updated)
        return Outcome.success(to_user_view(updated))

    async def update(self, user_id: UserId, data: UserUpdate) -> Outcome[UserView]:
        """Merge explicitly set fields into a user.

        Args:
            user_id: User to update
            data: Fields to change; unset fields are left alone

        Returns:
            Updated view, NOT_FOUND, INVALID_STATE for a deleted account, or
            CONFLICT on a duplicate identity field
        """
        changes = _explicit_changes(data)
        if changes.get("email") is not None:
            changes["email"] = _normalize_email(changes["email"])
        with logfire.span(
            "user_registry.update", user_id=str(user_id), fields=sorted(changes)
        ):
            outcome = await self._merge(user_id, changes)
            if outcome.ok:
                logfire.info("User updated", user_id=str(user_id))
            return outcome

    async def update_profile(self, user_id: UserId, data: ProfileUpdate) -> Outcome[UserView]:
        """Merge profile fields only."""
        changes = {
            k: v for k, v in _explicit_changes(data).items() if k in _PROFILE_FIELDS
        }
        with logfire.span("user_registry.update_profile", user_id=str(user_id)):
            return await self._merge(user_id, changes)

    async def update_push_token(
        self, user_id: UserId, push_token: str | None, enabled: bool | None = None
    ) -> Outcome[UserView]:
        """Set or clear the push token, optionally toggling push delivery."""
        changes: dict[str, Any] = {"push_token": push_token}
        if enabled is not None:
            changes["push_enabled"] = enabled
        with logfire.span("user_registry.update_push_token", user_id=str(user_id)):
            return await self._merge(user_id, changes)

    async def validate_credential(self, user_id: UserId, plaintext: str) -> bool:
        """Check a password against the stored hash.

        Returns:
            False for unknown, deleted or OAuth-only accounts
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user or user.is_deleted or user.password_hash is None:
            return False
        return await self.password_hasher.verify(plaintext, user.password_hash)

    async def verify_email(self, token: str) -> Outcome[UserView]:
        """Mark an email as verified.

        Expired tokens are reported exactly like unknown ones.
        """
        with logfire.span("user_registry.verify_email"):
            async with self.user_repository.atomic():
                user = await self.user_repository.find_by_verification_token(token)
                if not user or user.is_deleted:
                    logfire.warn("Unknown verification token")
                    return Outcome.fail(FailureKind.NOT_FOUND, _INVALID_TOKEN)
                now = self.clock.now()
                if user.email_verification_expires is None or now >= user.email_verification_expires:
                    logfire.warn("Expired verification token", user_id=str(user.id))
                    return Outcome.fail(FailureKind.NOT_FOUND, _INVALID_TOKEN)

                updated = user.model_copy(
                    update={
                        "email_verified": True,
                        "email_verification_token": None,
                        "email_verification_expires": None,
                        "updated_at": now,
                    }
                )
                await self.user_repository.save(updated)

            logfire.info("Email verified", user_id=str(user.id))
            return Outcome.success(to_user_view(updated))

    async def create_password_reset_token(self, email: str) -> Outcome[str]:
        """Issue a single-use password-reset token.

        Args:
            email: Account email

        Returns:
            The token, or NOT_FOUND if no live account has this email
        """
        with logfire.span("user_registry.create_password_reset_token"):
            token = self.token_generator.generate()
            async with self.user_repository.atomic():
                user = await self.user_repository.find_by_email(_normalize_email(email))
                if not user:
                    logfire.warn("Password reset requested for unknown email")
                    return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
                now = self.clock.now()
                await self.user_repository.save(
                    user.model_copy(
                        update={
                            "password_reset_token": token,
                            "password_reset_expires": now + self.reset_ttl,
                            "updated_at": now,
                        }
                    )
                )
            logfire.info("Password reset token issued", user_id=str(user.id))
            return Outcome.success(token)

    async def reset_password(self, token: str, new_password: str) -> Outcome[UserView]:
        """Replace the credential using a reset token. The token is single-use."""
        with logfire.span("user_registry.reset_password"):
            if not password_fits(new_password):
                return Outcome.fail(
                    FailureKind.INVARIANT_VIOLATION,
                    f"Password must not exceed {PASSWORD_MAX_BYTES} bytes",
                    "password_too_long",
                )

            if not await self.user_repository.find_by_reset_token(token):
                logfire.warn("Unknown password reset token")
                return Outcome.fail(FailureKind.NOT_FOUND, _INVALID_TOKEN)

            password_hash = await self.password_hasher.hash(new_password)

            async with self.user_repository.atomic():
                # Re-read: the token may have been used while hashing
                user = await self.user_repository.find_by_reset_token(token)
                if not user or user.is_deleted:
                    return Outcome.fail(FailureKind.NOT_FOUND, _INVALID_TOKEN)
                now = self.clock.now()
                if user.password_reset_expires is None or now >= user.password_reset_expires:
                    logfire.warn("Expired password reset token", user_id=str(user.id))
                    return Outcome.fail(FailureKind.NOT_FOUND, _INVALID_TOKEN)

                updated = user.model_copy(
                    update={
                        "password_hash": password_hash,
                        "password_reset_token": None,
                        "password_reset_expires": None,
                        "updated_at": now,
                    }
                )
                await self.user_repository.save(updated)

            logfire.info("Password reset", user_id=str(user.id))
            return Outcome.success(to_user_view(updated))

    async def transition(
        self,
        user_id: UserId,
        mutate: Callable[[UserView], Optional[dict[str, Any]]],
    ) -> UserView | None:
        """Atomically apply a computed change to a user.

        ``mutate`` is called inside the lock with the freshly read user and
        returns the field changes, or None to leave the user untouched.
        Changes may name fields the view does not carry (the credential
        hash, tokens) to clear them.

        Args:
            user_id: User to transition
            mutate: Decision function over the current state

        Returns:
            The new view if a change was written, None otherwise
        """
        async with self.user_repository.atomic():
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                return None
            changes = mutate(to_user_view(user))
            if not changes:
                return None
            updated = user.model_copy(update={**changes, "updated_at": self.clock.now()})
            await self.user_repository.save(updated)
        return to_user_view(updated)

    async def get_by_id(self, user_id: UserId) -> Outcome[UserView]:
        """Get a user, failing with NOT_FOUND for unknown ids."""
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            return Outcome.fail(FailureKind.NOT_FOUND, "User not found")
        return Outcome.success(to_user_view(user))

    async def find_by_id(self, user_id: UserId) -> UserView | None:
        user = await self.user_repository.find_by_id(user_id)
        return to_user_view(user) if user else None

    async def find_by_email(self, email: str) -> UserView | None:
        user = await self.user_repository.find_by_email(_normalize_email(email))
        return to_user_view(user) if user else None

    async def find_by_username(self, username: str) -> UserView | None:
        user = await self.user_repository.find_by_username(username)
        return to_user_view(user) if user else None

    async def find_by_nickname(self, nickname: str) -> UserView | None:
        user = await self.user_repository.find_by_nickname(nickname)
        return to_user_view(user) if user else None

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_id: str
    ) -> UserView | None:
        user = await self.user_repository.find_by_provider_identity(provider, provider_id)
        return to_user_view(user) if user else None

    async def search_by_handle(self, handle: str) -> UserView | None:
        """Resolve a handle typed by a user.

        Tries the username, then the nickname, then the display name
        (case-insensitive). A leading ``@`` is ignored.
        """
        handle = handle.strip().lstrip("@")
        if not handle:
            return None
        user = (
            await self.user_repository.find_by_username(handle)
            or await self.user_repository.find_by_nickname(handle)
            or await self.user_repository.find_by_display_name(handle)
        )
        return to_user_view(user) if user else None

    async def list_users(self, include_deleted: bool = False) -> list[UserView]:
        users = await self.user_repository.find_all(include_deleted=include_deleted)
        return [to_user_view(u) for u in users]

    async def count_by_status(self) -> dict[AccountStatus, int]:
        """Count every account by lifecycle status."""
        counts = {status: 0 for status in AccountStatus}
        for user in await self.user_repository.find_all(include_deleted=True):
            counts[user.status] += 1
        return counts
