"""Test harness building DI environments.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from bailago.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields a request-scoped container for service access
    - Closes the container afterwards

    Every fixture invocation gets fresh repositories, a fresh frozen clock
    and a fresh recording dispatcher, since all of them are REQUEST-scoped
    in the mock providers.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Real bcrypt work factor and random tokens
        security_env = create_env_fixture(unmock={"security"})

        @pytest.mark.asyncio
        async def test_create_group(unit_env):
            registry = await unit_env.get(GroupRegistry)
            group = await registry.create(CreateGroupInput(name="Salsa"), creator)
            assert group.is_admin(creator.id)
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
