"""Unit tests for the profile and push token use cases."""

from uuid import uuid4

import pydantic
import pytest
from dishka import AsyncContainer

from bailago.application.usecase.user import (
    UpdateProfileRequest,
    UpdateProfileUseCase,
    UpdatePushTokenRequest,
    UpdatePushTokenUseCase,
)
from bailago.domain.outcome import FailureKind
from bailago.domain.service import UserRegistry
from bailago.domain.value import AccountStatus, DanceType
from tests.conftest import register
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateProfileUseCase:
    """Tests for UpdateProfileUseCase."""

    @pytest.mark.asyncio
    async def test_update_profile_fields(self, unit_env: AsyncContainer):
        # Arrange
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(UpdateProfileUseCase)
        user = await register(user_registry, "maria")

        # Act
        outcome = await use_case.execute(
            UpdateProfileRequest(
                user_id=str(user.id),
                display_name="Maria G",
                bio="Salsa on2 lover",
                favorite_dances=frozenset({DanceType.SALSA, DanceType.BACHATA}),
            )
        )

        # Assert
        assert outcome.value.user.display_name == "Maria G"
        assert outcome.value.user.bio == "Salsa on2 lover"
        assert outcome.value.user.favorite_dances == frozenset(
            {DanceType.SALSA, DanceType.BACHATA}
        )
        assert outcome.value.user.username == "maria"
        assert outcome.value.user.email == "maria@example.com"

    @pytest.mark.asyncio
    async def test_bio_can_be_cleared(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(UpdateProfileUseCase)
        user = await register(user_registry, "maria")
        await use_case.execute(UpdateProfileRequest(user_id=str(user.id), bio="Hello"))

        outcome = await use_case.execute(UpdateProfileRequest(user_id=str(user.id), bio=None))

        assert outcome.value.user.bio is None

    def test_long_bio_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            UpdateProfileRequest(user_id=str(uuid4()), bio="x" * 201)

    @pytest.mark.asyncio
    async def test_deleted_user_cannot_update(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(UpdateProfileUseCase)
        user = await register(user_registry, "maria")
        await user_registry.transition(user.id, lambda _: {"status": AccountStatus.DELETED})

        outcome = await use_case.execute(
            UpdateProfileRequest(user_id=str(user.id), display_name="Ghost")
        )

        assert outcome.kind == FailureKind.INVALID_STATE


class TestUpdatePushTokenUseCase:
    """Tests for UpdatePushTokenUseCase."""

    @pytest.mark.asyncio
    async def test_set_and_clear_token(self, unit_env: AsyncContainer):
        user_registry = await unit_env.get(UserRegistry)
        use_case = await unit_env.get(UpdatePushTokenUseCase)
        user = await register(user_registry, "maria")

        set_outcome = await use_case.execute(
            UpdatePushTokenRequest(
                user_id=str(user.id), push_token="ExponentPushToken[abc]", push_enabled=True
            )
        )
        cleared = await use_case.execute(UpdatePushTokenRequest(user_id=str(user.id)))

        assert set_outcome.value.user.push_token == "ExponentPushToken[abc]"
        assert set_outcome.value.user.push_enabled is True
        assert cleared.value.user.push_token is None
        assert cleared.value.user.push_enabled is True
