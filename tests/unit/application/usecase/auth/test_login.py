"""Unit tests for LoginUseCase."""

import asyncio
from datetime import datetime, timezone
from uuid import UUID, uuid4

from dishka import AsyncContainer
import pytest

from quest.adapter.google import GoogleOAuthClient, MockGoogleOAuthClient
from quest.application.usecase.auth.login import LoginRequest, LoginUseCase
from quest.config import AccountSettings, AuthSettings, load_settings
from quest.domain.error import (
    AccountProvisioningFailedError,
    IdentityExchangeFailedError,
    UnsupportedProviderError,
)
from quest.domain.model import AccountConflict, User, UserIdentity
from quest.domain.repository import AccountRegistrationRepository
from quest.domain.service import (
    AuthService,
    JWTService,
    RegistrationService,
    UserIdentityService,
)
from quest.domain.value import AuthProvider, OAuthProviderInfo, UserId, UserIdentityId
from quest.persistence.repository.inmemory import (
    InMemoryAccountRegistrationRepository,
    InMemoryStore,
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

GOOGLE_USER = MockGoogleOAuthClient.DEFAULT_IDENTITY


class SlowIdentityRepository(InMemoryUserIdentityRepository):
    """Yields to the event loop after every lookup.

    Lets concurrent logins all miss the identity before any of them
    registers it, the worst case for the registration race.
    """

    async def find_by_provider(self, provider, provider_user_id):
        identity = await super().find_by_provider(provider, provider_user_id)
        await asyncio.sleep(0)
        return identity


class FailingRegistrationRepository(AccountRegistrationRepository):
    """Registration that fails as a broken database would."""

    async def register(self, user, identity, character):
        raise RuntimeError("database unavailable")


class AlwaysConflictRegistrationRepository(AccountRegistrationRepository):
    """Registration that reports a conflict but never links anything."""

    async def register(self, user, identity, character):
        return AccountConflict(
            provider=identity.provider, provider_user_id=identity.provider_user_id
        )


class RaceLosingRegistrationRepository(InMemoryAccountRegistrationRepository):
    """A concurrent login registers the same identity just before we do."""

    def __init__(self, store: InMemoryStore, winner: User):
        super().__init__(store)
        self.store = store
        self.winner = winner

    async def register(self, user, identity, character):
        self.store.users[self.winner.id] = self.winner
        self.store.identities.append(
            UserIdentity(
                id=UserIdentityId(uuid4()),
                user_id=self.winner.id,
                provider=identity.provider,
                provider_user_id=identity.provider_user_id,
            )
        )
        return await super().register(user, identity, character)


def build_login_use_case(
    store: InMemoryStore,
    auth_settings: AuthSettings,
    oauth_client: GoogleOAuthClient | None = None,
    identity_repository: InMemoryUserIdentityRepository | None = None,
    registration_repository: AccountRegistrationRepository | None = None,
) -> LoginUseCase:
    return LoginUseCase(
        auth_service=AuthService(
            {AuthProvider.GOOGLE: oauth_client or MockGoogleOAuthClient()}
        ),
        jwt_service=JWTService(auth_settings),
        user_identity_service=UserIdentityService(
            user_identity_repository=identity_repository
            or InMemoryUserIdentityRepository(store),
            user_repository=InMemoryUserRepository(store),
        ),
        registration_service=RegistrationService(
            registration_repository=registration_repository
            or InMemoryAccountRegistrationRepository(store),
            account_settings=AccountSettings(),
        ),
    )


def login_request(code: str = "auth-code") -> LoginRequest:
    return LoginRequest(provider=AuthProvider.GOOGLE, code=code, state="state-123")


@pytest.fixture
def auth_settings() -> AuthSettings:
    return load_settings().auth


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_login_creates_account(self, auth_settings):
        """First login for an identity creates user, identity and character."""
        # Arrange
        store = InMemoryStore()
        login_use_case = build_login_use_case(store, auth_settings)

        # Act
        response = await login_use_case.execute(login_request())

        # Assert
        assert response.is_new_account is True
        assert response.user.email == GOOGLE_USER.email
        assert response.user.name == GOOGLE_USER.display_name
        assert response.user.avatar_url == GOOGLE_USER.avatar_url

        assert len(store.users) == 1
        assert len(store.identities) == 1
        assert len(store.characters) == 1
        identity = store.identities[0]
        assert str(identity.user_id) == response.user_id
        assert identity.provider_user_id == GOOGLE_USER.provider_user_id
        assert store.characters[0].is_active is True

    @pytest.mark.asyncio
    async def test_token_is_issued_for_the_account(self, auth_settings):
        """The session token's subject is the logged-in user."""
        login_use_case = build_login_use_case(InMemoryStore(), auth_settings)

        response = await login_use_case.execute(login_request())

        payload = JWTService(auth_settings).verify_token(response.token)
        assert payload.user_id == response.user_id
        assert response.user.id == response.user_id

    @pytest.mark.asyncio
    async def test_returning_login_uses_existing_account(self, auth_settings):
        """A second login for the same identity does not create a new account."""
        # Arrange
        store = InMemoryStore()
        login_use_case = build_login_use_case(store, auth_settings)
        first = await login_use_case.execute(login_request("code-1"))

        # Act
        second = await login_use_case.execute(login_request("code-2"))

        # Assert
        assert second.is_new_account is False
        assert second.user_id == first.user_id
        assert len(store.users) == 1
        assert len(store.identities) == 1
        assert len(store.characters) == 1

    @pytest.mark.asyncio
    async def test_existing_identity_logs_into_its_user(self, auth_settings):
        """A pre-existing link is used as-is."""
        # Arrange
        store = InMemoryStore()
        user = User(
            id=UserId(uuid4()),
            email="old@example.com",
            name="Old Name",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        store.users[user.id] = user
        store.identities.append(
            UserIdentity(
                id=UserIdentityId(uuid4()),
                user_id=user.id,
                provider=AuthProvider.GOOGLE,
                provider_user_id=GOOGLE_USER.provider_user_id,
            )
        )
        login_use_case = build_login_use_case(store, auth_settings)

        # Act
        response = await login_use_case.execute(login_request())

        # Assert
        assert response.is_new_account is False
        assert response.user_id == str(user.id)
        assert response.user.name == "Old Name"
        assert store.characters == []

    @pytest.mark.asyncio
    async def test_different_identities_get_different_accounts(self, auth_settings):
        """Distinct subjects never share an account, even with the same email."""
        store = InMemoryStore()
        client = MockGoogleOAuthClient(
            identities={
                "code-a": OAuthProviderInfo(
                    provider=AuthProvider.GOOGLE,
                    provider_user_id="subject-a",
                    email="same@example.com",
                ),
                "code-b": OAuthProviderInfo(
                    provider=AuthProvider.GOOGLE,
                    provider_user_id="subject-b",
                    email="same@example.com",
                ),
            }
        )
        login_use_case = build_login_use_case(store, auth_settings, oauth_client=client)

        a = await login_use_case.execute(login_request("code-a"))
        b = await login_use_case.execute(login_request("code-b"))

        assert a.is_new_account and b.is_new_account
        assert a.user_id != b.user_id
        assert len(store.users) == 2

    @pytest.mark.asyncio
    async def test_concurrent_first_logins_create_one_account(self, auth_settings):
        """Racing first logins for one identity converge on a single account."""
        # Arrange
        store = InMemoryStore()
        client = MockGoogleOAuthClient()
        login_use_case = build_login_use_case(
            store,
            auth_settings,
            oauth_client=client,
            identity_repository=SlowIdentityRepository(store),
        )
        attempts = 10

        # Act
        responses = await asyncio.gather(
            *(
                login_use_case.execute(login_request(f"code-{i}"))
                for i in range(attempts)
            )
        )

        # Assert
        assert len(store.users) == 1
        assert len(store.identities) == 1
        assert len(store.characters) == 1
        assert {r.user_id for r in responses} == {str(store.identities[0].user_id)}
        assert sum(r.is_new_account for r in responses) == 1
        assert sorted(client.exchanged_codes) == sorted(
            f"code-{i}" for i in range(attempts)
        )

    @pytest.mark.asyncio
    async def test_lost_race_recovers_winning_account(self, auth_settings):
        """A conflict during bootstrap resolves to the concurrent winner."""
        # Arrange
        store = InMemoryStore()
        winner = User(id=UserId(uuid4()), email="winner@example.com")
        login_use_case = build_login_use_case(
            store,
            auth_settings,
            registration_repository=RaceLosingRegistrationRepository(store, winner),
        )

        # Act
        response = await login_use_case.execute(login_request())

        # Assert
        assert response.is_new_account is False
        assert response.user_id == str(winner.id)
        assert list(store.users) == [winner.id]
        assert store.characters == []

    @pytest.mark.asyncio
    async def test_rejected_code_creates_nothing(self, auth_settings):
        """A failed exchange surfaces as IdentityExchangeFailedError."""
        store = InMemoryStore()
        login_use_case = build_login_use_case(store, auth_settings)

        with pytest.raises(IdentityExchangeFailedError):
            await login_use_case.execute(login_request("invalid-code"))

        assert store.users == {}
        assert store.identities == []

    @pytest.mark.asyncio
    async def test_storage_failure_is_provisioning_failure(self, auth_settings):
        """Bootstrap errors other than the race become provisioning failures."""
        login_use_case = build_login_use_case(
            InMemoryStore(),
            auth_settings,
            registration_repository=FailingRegistrationRepository(),
        )

        with pytest.raises(AccountProvisioningFailedError) as exc_info:
            await login_use_case.execute(login_request())

        assert exc_info.value.provider == "google"
        assert exc_info.value.provider_user_id == GOOGLE_USER.provider_user_id
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_conflict_without_linked_account_fails(self, auth_settings):
        """A conflict that does not resolve is never retried indefinitely."""
        login_use_case = build_login_use_case(
            InMemoryStore(),
            auth_settings,
            registration_repository=AlwaysConflictRegistrationRepository(),
        )

        with pytest.raises(AccountProvisioningFailedError):
            await login_use_case.execute(login_request())

    @pytest.mark.asyncio
    async def test_unregistered_provider_is_unsupported(self, auth_settings):
        """A provider without a client is rejected before any exchange."""
        login_use_case = LoginUseCase(
            auth_service=AuthService({}),
            jwt_service=JWTService(auth_settings),
            user_identity_service=UserIdentityService(
                InMemoryUserIdentityRepository(), InMemoryUserRepository()
            ),
            registration_service=RegistrationService(
                InMemoryAccountRegistrationRepository(), AccountSettings()
            ),
        )

        with pytest.raises(UnsupportedProviderError):
            await login_use_case.execute(login_request())


class TestLoginUseCaseWiring:
    """LoginUseCase resolved from the test container."""

    @pytest.mark.asyncio
    async def test_container_login_round_trip(self, unit_env: AsyncContainer):
        """The container wires a working login against in-memory storage."""
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        first = await login_use_case.execute(login_request("code-1"))
        second = await login_use_case.execute(login_request("code-2"))

        assert first.is_new_account is True
        assert second.is_new_account is False
        assert first.user_id == second.user_id
        assert UUID(jwt_service.verify_token(second.token).user_id) == UUID(
            first.user_id
        )
