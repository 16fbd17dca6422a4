"""JWT token domain service."""

from collections.abc import Callable
from datetime import datetime, timezone

import logfire

from quest.config import AuthSettings
from quest.domain.value import UserId
from quest.util.jwt import (
    TokenExpiredError,
    TokenInvalidError,
    TokenPayload,
    create_token,
    verify_token,
)

from .base import Service


def _utc_clock() -> datetime:
    return datetime.now(timezone.utc)


class JWTService(Service):
    """Domain service for session token operations.

    Tokens are stateless: verification needs only the signing secret and the
    current time, never a database lookup.
    """

    def __init__(
        self,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings (secret, algorithm, TTL)
            clock: Source of the current time, defaults to UTC wall clock
        """
        self.auth_settings = auth_settings
        self.clock = clock or _utc_clock

    def create_token(self, user_id: UserId) -> str:
        """Create a session token for a user.

        Args:
            user_id: User ID

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=str(user_id)):
            token = create_token(str(user_id), self.auth_settings, self.clock())
            logfire.info("JWT token created", user_id=str(user_id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            TokenInvalidError: If token is malformed or tampered with
            TokenExpiredError: If token is past its expiry
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings, self.clock())
            except TokenExpiredError:
                logfire.info("JWT token expired")
                raise
            except TokenInvalidError as e:
                logfire.warn("JWT token rejected", error=str(e))
                raise
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload
