"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnsupportedProviderError(DomainError):
    """Raised when no OAuth client is registered for a provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class IdentityExchangeFailedError(DomainError):
    """Raised when an authorization code cannot be exchanged for an identity.

    Covers invalid or expired codes and an unreachable provider. The message
    is for logs only; callers see a generic "authentication failed".
    """

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Identity exchange with {provider} failed: {reason}")


class AccountProvisioningFailedError(DomainError):
    """Raised when a new account could not be bootstrapped."""

    def __init__(self, provider: str, provider_user_id: str, reason: str):
        self.provider = provider
        self.provider_user_id = provider_user_id
        self.reason = reason
        super().__init__(
            f"Could not provision account for {provider}:{provider_user_id}: {reason}"
        )
