"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import BaseModel, ValidationError

from quest.config import AuthSettings


class TokenPayload(BaseModel):
    """Decoded session token."""

    user_id: str
    issued_at: datetime
    expires_at: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenInvalidError(JWTError):
    """Token is malformed or its signature does not verify."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but the token is past its expiry."""

    pass


def create_token(user_id: str, settings: AuthSettings, now: datetime) -> str:
    """Create a signed session token for the user.

    ``iat`` is ``now`` truncated to whole seconds and ``exp`` is counted from
    that, so a token can live up to one second less than the configured
    lifetime.

    Args:
        user_id: User ID
        settings: Authentication settings
        now: Issue time

    Returns:
        Encoded JWT token
    """
    issued_at = int(now.timestamp())
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + settings.jwt_expiry_seconds,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings, now: datetime) -> TokenPayload:
    """Verify and decode a session token.

    The signature is checked by PyJWT; expiry is checked here against ``now``
    so that a token is rejected from the exact second it expires.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        now: Verification time

    Returns:
        Token payload if valid

    Raises:
        TokenInvalidError: If the token is malformed or tampered with
        TokenExpiredError: If the token is authentic but expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={
                "verify_exp": False,
                "verify_iat": False,
                "require": ["sub", "iat", "exp"],
            },
        )
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {e}") from e

    if not _has_canonical_signature(token):
        raise TokenInvalidError("Invalid token: non-canonical signature encoding")

    try:
        payload = TokenPayload(
            user_id=claims["sub"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
    except (TypeError, ValueError, OverflowError, ValidationError) as e:
        raise TokenInvalidError(f"Invalid token claims: {e}") from e

    if now >= payload.expires_at:
        raise TokenExpiredError("Token has expired")

    return payload


def _has_canonical_signature(token: str) -> bool:
    """Check the signature segment round-trips through base64url.

    The last base64 character carries padding bits the decoder ignores, so
    two different strings can decode to the same signature. Only the
    canonical spelling is accepted.
    """
    signature = token.encode("utf-8").rsplit(b".", 1)[-1]
    return base64url_encode(base64url_decode(signature)) == signature


def expires_in(settings: AuthSettings) -> timedelta:
    """Lifetime of tokens issued with these settings."""
    return timedelta(seconds=settings.jwt_expiry_seconds)
