"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .jwt_service import JWTService
from .registration_service import RegistrationService
from .user_identity_service import UserIdentityService
from .user_service import UserService

__all__ = [
    "AuthService",
    "JWTService",
    "OAuthClient",
    "RegistrationService",
    "Service",
    "UserIdentityService",
    "UserService",
]
