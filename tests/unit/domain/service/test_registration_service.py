"""Unit tests for RegistrationService."""

import pytest

from quest.config import AccountSettings
from quest.domain.model import AccountConflict, AccountCreated
from quest.domain.service import RegistrationService
from quest.domain.value import AuthProvider, CharacterCode, OAuthProviderInfo
from quest.persistence.repository.inmemory import (
    InMemoryAccountRegistrationRepository,
    InMemoryStore,
)

ALICE = OAuthProviderInfo(
    provider=AuthProvider.GOOGLE,
    provider_user_id="google-alice",
    email="alice@example.com",
    display_name="Alice",
    avatar_url="https://example.com/alice.png",
)


def make_service(
    store: InMemoryStore, settings: AccountSettings | None = None
) -> RegistrationService:
    return RegistrationService(
        registration_repository=InMemoryAccountRegistrationRepository(store),
        account_settings=settings or AccountSettings(),
    )


class TestBootstrap:
    """Tests for RegistrationService.bootstrap()."""

    @pytest.mark.asyncio
    async def test_creates_user_identity_and_character(self):
        """A new account gets its identity and an active starter character."""
        store = InMemoryStore()

        outcome = await make_service(store).bootstrap(ALICE)

        assert isinstance(outcome, AccountCreated)
        assert outcome.user.email == "alice@example.com"
        assert outcome.user.name == "Alice"
        assert outcome.user.avatar_url == "https://example.com/alice.png"
        assert outcome.identity.user_id == outcome.user.id
        assert outcome.identity.provider == AuthProvider.GOOGLE
        assert outcome.identity.provider_user_id == "google-alice"
        assert outcome.identity.provider_email == "alice@example.com"
        assert outcome.character.user_id == outcome.user.id
        assert outcome.character.character_code == CharacterCode.TRAECHAN
        assert outcome.character.nickname == "トレちゃん"
        assert outcome.character.level == 1
        assert outcome.character.experience == 0
        assert outcome.character.is_active is True

        assert list(store.users) == [outcome.user.id]
        assert store.identities == [outcome.identity]
        assert store.characters == [outcome.character]

    @pytest.mark.asyncio
    async def test_starter_character_is_configurable(self):
        """The starter character comes from account settings."""
        settings = AccountSettings(
            default_character_code="MASTER", default_character_nickname="Sensei"
        )

        outcome = await make_service(InMemoryStore(), settings).bootstrap(ALICE)

        assert isinstance(outcome, AccountCreated)
        assert outcome.character.character_code == CharacterCode.MASTER
        assert outcome.character.nickname == "Sensei"

    @pytest.mark.asyncio
    async def test_second_bootstrap_conflicts_and_writes_nothing(self):
        """Bootstrapping a linked identity reports a conflict."""
        store = InMemoryStore()
        service = make_service(store)
        first = await service.bootstrap(ALICE)

        outcome = await service.bootstrap(ALICE)

        assert outcome == AccountConflict(
            provider=AuthProvider.GOOGLE, provider_user_id="google-alice"
        )
        assert list(store.users) == [first.user.id]
        assert len(store.identities) == 1
        assert len(store.characters) == 1

    @pytest.mark.asyncio
    async def test_profile_fields_are_optional(self):
        """Missing email, name and avatar still yield an account."""
        info = OAuthProviderInfo(provider=AuthProvider.GOOGLE, provider_user_id="bare")

        outcome = await make_service(InMemoryStore()).bootstrap(info)

        assert isinstance(outcome, AccountCreated)
        assert outcome.user.email is None
        assert outcome.user.name is None
