"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables; tests/conftest.py provides
defaults for everything required.
"""

from dishka import Provider
from fastapi import FastAPI
import pytest_asyncio

from quest.interface.api.app import create_app
from quest.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_login(unit_env):
            login = await unit_env.get(LoginUseCase)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_test_app(
    unmock: set[Component] | None = None, overrides: list[Provider] | None = None
) -> FastAPI:
    """Build the FastAPI app on a fresh test container."""
    return create_app(
        container=build_test_container(unmock=unmock or set(), overrides=overrides)
    )
