"""Domain value objects for Quest."""

from quest.domain.value.identifiers import UserCharacterId, UserId, UserIdentityId
from quest.domain.value.types import AuthProvider, CharacterCode, OAuthProviderInfo

__all__ = [
    # Identifiers
    "UserId",
    "UserIdentityId",
    "UserCharacterId",
    # Types
    "AuthProvider",
    "CharacterCode",
    "OAuthProviderInfo",
]
