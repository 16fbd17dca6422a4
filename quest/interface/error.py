"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class NoCredentialError(InterfaceError):
    """Request carries no bearer credential."""

    pass
