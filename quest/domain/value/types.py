"""Domain value objects for Quest.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from quest.domain.value.common import ValueObject


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    GOOGLE = "google"


class CharacterCode(str, Enum):
    """Companion characters a user can own."""

    TRAECHAN = "TRAECHAN"
    MASTER = "MASTER"


class OAuthProviderInfo(ValueObject):
    """Verified identity returned by an OAuth provider."""

    provider: AuthProvider
    provider_user_id: str  # Permanent subject id assigned by the provider
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    @field_validator("provider_user_id")
    @classmethod
    def validate_provider_user_id(cls, v: str) -> str:
        """Validate the subject id is present and bounded."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Provider user id must be 1-255 characters")
        return v
