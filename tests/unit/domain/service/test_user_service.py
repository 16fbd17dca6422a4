"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from quest.domain.error import NotFoundError
from quest.domain.model import User
from quest.domain.service import UserService
from quest.domain.value import UserId
from quest.persistence.repository.inmemory import InMemoryStore, InMemoryUserRepository


class TestGetById:
    """Tests for UserService.get_by_id()."""

    @pytest.mark.asyncio
    async def test_returns_user(self):
        store = InMemoryStore()
        user = User(id=UserId(uuid4()), email="a@example.com")
        store.users[user.id] = user

        assert await UserService(InMemoryUserRepository(store)).get_by_id(user.id) == user

    @pytest.mark.asyncio
    async def test_missing_user_raises(self):
        service = UserService(InMemoryUserRepository())

        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))
