"""Test configuration and shared builders."""

from datetime import date, datetime, timezone
from typing import Any
from uuid import uuid4

from bailago.domain.model.user import UserView
from bailago.domain.service import (
    CreateEventInput,
    LocationInput,
    RegisterUserInput,
    UserRegistry,
)
from bailago.domain.value import AccountStatus, AuthProvider, DanceType

DEFAULT_PASSWORD = "salsa-night-42"


def register_input(username: str, **overrides: Any) -> RegisterUserInput:
    """Build a valid registration for ``username``.

    Email and display name are derived from the username so several users
    can be registered in one test without clashing.
    """
    fields: dict[str, Any] = {
        "email": f"{username}@example.com",
        "username": username,
        "display_name": username.capitalize(),
        "password": DEFAULT_PASSWORD,
    }
    fields.update(overrides)
    return RegisterUserInput(**fields)


async def register(user_registry: UserRegistry, username: str, **overrides: Any) -> UserView:
    """Register a user and return its view. Fails the test on conflict."""
    outcome = await user_registry.create(register_input(username, **overrides))
    assert outcome.ok, outcome.failure
    return outcome.value.user


def event_input(**overrides: Any) -> CreateEventInput:
    """Build a valid public salsa event, optionally overriding fields."""
    fields: dict[str, Any] = {
        "title": "Salsa Social",
        "description": "Open floor, all levels",
        "dance_type": DanceType.SALSA,
        "location": LocationInput(name="Sala Rio", address="Calle 1", city="Madrid"),
        "date": date(2025, 3, 14),
        "start_time": "21:00",
        "end_time": "23:30",
    }
    fields.update(overrides)
    return CreateEventInput(**fields)


def user_view(**overrides: Any) -> UserView:
    """Build a standalone active user view, for adapters that only read it."""
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fields: dict[str, Any] = {
        "id": uuid4(),
        "email": "maria@example.com",
        "username": "maria",
        "display_name": "Maria",
        "provider": AuthProvider.LOCAL,
        "email_verified": True,
        "push_token": "ExponentPushToken[abc123]",
        "push_enabled": True,
        "status": AccountStatus.ACTIVE,
        "last_active_at": now,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return UserView(**fields)
