"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from quest.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from quest.application.usecase.auth.get_current_user import CurrentUserResponse
from quest.application.usecase.auth.login import LoginRequest, UserSummary
from quest.config import Settings
from quest.domain.error import (
    AccountProvisioningFailedError,
    IdentityExchangeFailedError,
    NotFoundError,
    UnsupportedProviderError,
)
from quest.domain.service import AuthService
from quest.domain.value import AuthProvider, UserId
from quest.interface.api.security import require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

STATE_COOKIE = "oauth_state"
STATE_COOKIE_MAX_AGE = 600  # 10 minutes to complete the consent screen


class SessionTokenResponse(BaseModel):
    """Session issued after a successful OAuth callback."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires
    is_new_account: bool
    user: UserSummary


def _parse_provider(provider: str) -> AuthProvider:
    try:
        return AuthProvider(provider)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported provider: {provider}",
        )


def _login_error_redirect(settings: Settings, error: str) -> RedirectResponse:
    """Send the browser back to the frontend login page with an opaque code."""
    response = RedirectResponse(
        url=f"{settings.frontend_url}/login?error={error}",
        status_code=status.HTTP_302_FOUND,
    )
    response.delete_cookie(key=STATE_COOKIE, path="/")
    return response


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    user_id: UserId = Depends(require_session),
) -> CurrentUserResponse:
    """Get the authenticated user's profile.

    Requires ``Authorization: Bearer <token>``.

    Raises:
        HTTPException: 401 without a valid session, 404 if the user is gone

    Example:
        GET /auth/me

        Response:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "email": "alice@example.com",
            "name": "Alice",
            "avatar_url": "https://...",
            "created_at": "2025-01-15T12:34:56Z",
            "identities": [{"provider": "google", "provider_email": "alice@example.com"}]
        }
    """
    try:
        return await get_current_user_use_case.execute(user_id)
    except NotFoundError:
        # Valid token for a user that no longer exists
        logger.warning(f"Session user not found: user_id={user_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )


@router.get("/{provider}")
async def initiate_login(
    provider: str,
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the browser to the provider's consent screen.

    A random state value is sent to the provider and kept in a short-lived
    HTTP-only cookie; the callback only proceeds if both match.

    Example:
        GET /auth/google

        Redirects to: https://accounts.google.com/o/oauth2/v2/auth?...
        Sets cookie: oauth_state
    """
    auth_provider = _parse_provider(provider)
    state = secrets.token_urlsafe(32)

    try:
        auth_url = await auth_service.initiate_login(auth_provider, state)
    except UnsupportedProviderError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported provider: {provider}",
        )

    logger.info(f"Initiating {auth_provider.value} login")

    response = RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        max_age=STATE_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path="/",
    )
    return response


@router.get("/{provider}/callback", response_model=SessionTokenResponse)
async def oauth_callback(
    provider: str,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth_state: str | None = Cookie(default=None),
):
    """Complete the OAuth flow and issue a session token.

    Args:
        provider: Provider name from the path (e.g. ``google``)
        response: Response used to clear the state cookie
        login_use_case: Login use case from DI
        settings: Application settings from DI
        code: Authorization code from the provider
        state: State value echoed by the provider
        error: Error reported by the provider (e.g. consent denied)
        oauth_state: State value stored when the flow was initiated

    Returns:
        Session token and user summary, or a 302 redirect to the frontend
        login page with ``error=auth_failed|provisioning_failed|unexpected``

    Example:
        GET /auth/google/callback?code=abc123&state=xyz789

        Response:
        {
            "token": "eyJ...",
            "token_type": "bearer",
            "expires_in": 2592000,
            "is_new_account": true,
            "user": {...}
        }
    """
    auth_provider = _parse_provider(provider)

    if error or not code or not state:
        logger.warning(
            f"OAuth callback without code: provider={auth_provider.value}, error={error}"
        )
        return _login_error_redirect(settings, "auth_failed")

    if not oauth_state or not secrets.compare_digest(oauth_state, state):
        logger.warning(f"OAuth state mismatch: provider={auth_provider.value}")
        return _login_error_redirect(settings, "auth_failed")

    try:
        login_response = await login_use_case.execute(
            LoginRequest(provider=auth_provider, code=code, state=state)
        )
    except UnsupportedProviderError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported provider: {provider}",
        )
    except IdentityExchangeFailedError as e:
        logger.error(f"OAuth exchange failed: {e}")
        return _login_error_redirect(settings, "auth_failed")
    except AccountProvisioningFailedError as e:
        logger.error(f"Account provisioning failed: {e}")
        return _login_error_redirect(settings, "provisioning_failed")
    except Exception as e:
        logger.exception(f"Unexpected error during OAuth callback: {type(e).__name__}")
        return _login_error_redirect(settings, "unexpected")

    logger.info(
        f"Login successful: user_id={login_response.user_id}, "
        f"is_new_account={login_response.is_new_account}"
    )

    response.delete_cookie(key=STATE_COOKIE, path="/")
    return SessionTokenResponse(
        token=login_response.token,
        expires_in=settings.auth.jwt_expiry_seconds,
        is_new_account=login_response.is_new_account,
        user=login_response.user,
    )
