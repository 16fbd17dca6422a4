"""Bearer session guard for protected routes."""

import logging
from uuid import UUID

from fastapi import HTTPException, Request, status
from fastapi.security.utils import get_authorization_scheme_param

from quest.domain.service import JWTService
from quest.domain.value import UserId
from quest.interface.error import NoCredentialError
from quest.util.jwt import TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)


class SessionGuard:
    """Authenticates requests from their ``Authorization`` header."""

    def __init__(self, jwt_service: JWTService) -> None:
        self.jwt_service = jwt_service

    def authenticate(self, authorization: str | None) -> UserId:
        """Return the user a bearer token was issued to.

        Args:
            authorization: Raw ``Authorization`` header value, if any

        Returns:
            The authenticated user's ID

        Raises:
            NoCredentialError: If there is no bearer credential
            TokenInvalidError: If the token is malformed or tampered with
            TokenExpiredError: If the token is past its expiry
        """
        scheme, credentials = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "bearer" or not credentials:
            raise NoCredentialError("Missing bearer credential")

        payload = self.jwt_service.verify_token(credentials)

        try:
            return UserId(UUID(payload.user_id))
        except ValueError as e:
            raise TokenInvalidError("Invalid token subject") from e


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_session(request: Request) -> UserId:
    """FastAPI dependency that admits only requests with a valid session.

    The cause of a rejection is logged but never returned: every failure
    produces the same 401 response.

    Args:
        request: Incoming request

    Returns:
        The authenticated user's ID, also stored on ``request.state.user_id``

    Raises:
        HTTPException: 401 if the request is not authenticated
    """
    guard = await request.state.dishka_container.get(SessionGuard)

    try:
        user_id = guard.authenticate(request.headers.get("Authorization"))
    except NoCredentialError:
        logger.info(f"Session rejected: cause=no_credential path={request.url.path}")
        raise _unauthorized()
    except TokenExpiredError:
        logger.info(f"Session rejected: cause=token_expired path={request.url.path}")
        raise _unauthorized()
    except TokenInvalidError:
        logger.warning(
            f"Session rejected: cause=token_invalid path={request.url.path}"
        )
        raise _unauthorized()

    request.state.user_id = user_id
    return user_id
