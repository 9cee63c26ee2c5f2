"""Unit tests for the in-memory repositories."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from bailago.domain.model.invite import GroupInvite
from bailago.domain.model.user import User
from bailago.domain.value import (
    AccountStatus,
    AuthProvider,
    GroupId,
    InviteId,
    InviteStatus,
    UserId,
)
from bailago.persistence.repository.inmemory import (
    InMemoryInviteRepository,
    InMemoryUserRepository,
)

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_user(username: str, **overrides) -> User:
    fields = {
        "id": UserId(uuid4()),
        "email": f"{username}@example.com",
        "username": username,
        "display_name": username.capitalize(),
    }
    fields.update(overrides)
    return User(**fields)


def make_invite(group_id: GroupId, user_id: UserId, **overrides) -> GroupInvite:
    fields = {
        "id": InviteId(uuid4()),
        "group_id": group_id,
        "invited_user_id": user_id,
        "invited_by_user_id": UserId(uuid4()),
        "created_at": NOW,
        "expires_at": NOW + timedelta(days=7),
    }
    fields.update(overrides)
    return GroupInvite(**fields)


class TestInMemoryUserRepository:
    """Tests for user lookups."""

    @pytest.mark.asyncio
    async def test_find_by_email_ignores_case(self):
        repo = InMemoryUserRepository()
        user = await repo.save(make_user("maria"))

        found = await repo.find_by_email("MARIA@Example.com")

        assert found == user

    @pytest.mark.asyncio
    async def test_lookups_skip_deleted_users(self):
        """Deleted accounts free their identity fields."""
        # Arrange
        repo = InMemoryUserRepository()
        deleted = await repo.save(
            make_user("ghost", nickname="boo", status=AccountStatus.DELETED)
        )

        # Act & Assert
        assert await repo.find_by_email("ghost@example.com") is None
        assert await repo.find_by_username("ghost") is None
        assert await repo.find_by_nickname("boo") is None
        assert await repo.find_by_id(deleted.id) == deleted

    @pytest.mark.asyncio
    async def test_find_by_provider_identity(self):
        repo = InMemoryUserRepository()
        user = await repo.save(
            make_user("oauth", provider=AuthProvider.GOOGLE, provider_id="g-123")
        )

        assert await repo.find_by_provider_identity(AuthProvider.GOOGLE, "g-123") == user
        assert await repo.find_by_provider_identity(AuthProvider.INSTAGRAM, "g-123") is None

    @pytest.mark.asyncio
    async def test_find_all_excludes_deleted_by_default(self):
        repo = InMemoryUserRepository()
        alive = await repo.save(make_user("alive"))
        gone = await repo.save(make_user("gone", status=AccountStatus.DELETED))

        assert await repo.find_all() == [alive]
        assert await repo.find_all(include_deleted=True) == [alive, gone]


class TestInMemoryInviteRepository:
    """Tests for invite storage."""

    @pytest.mark.asyncio
    async def test_second_pending_invite_for_pair_is_refused(self):
        # Arrange
        repo = InMemoryInviteRepository()
        group_id = GroupId(uuid4())
        user_id = UserId(uuid4())
        await repo.save(make_invite(group_id, user_id))

        # Act & Assert
        with pytest.raises(ValueError, match="Duplicate pending invite"):
            await repo.save(make_invite(group_id, user_id))

    @pytest.mark.asyncio
    async def test_new_pending_invite_allowed_after_resolution(self):
        # Arrange
        repo = InMemoryInviteRepository()
        group_id = GroupId(uuid4())
        user_id = UserId(uuid4())
        first = await repo.save(make_invite(group_id, user_id))
        await repo.save(first.model_copy(update={"status": InviteStatus.REJECTED}))

        # Act
        second = await repo.save(make_invite(group_id, user_id))

        # Assert
        assert await repo.find_pending(group_id, user_id) == second
        assert len(await repo.find_by_invited_user(user_id)) == 2
        assert await repo.find_by_invited_user(user_id, InviteStatus.PENDING) == [second]

    @pytest.mark.asyncio
    async def test_delete_by_group_only_touches_that_group(self):
        repo = InMemoryInviteRepository()
        doomed_group = GroupId(uuid4())
        kept_group = GroupId(uuid4())
        await repo.save(make_invite(doomed_group, UserId(uuid4())))
        await repo.save(make_invite(doomed_group, UserId(uuid4())))
        kept = await repo.save(make_invite(kept_group, UserId(uuid4())))

        assert await repo.delete_by_group(doomed_group) == 2
        assert await repo.find_by_group(doomed_group) == []
        assert await repo.find_by_group(kept_group) == [kept]
