"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold repositories and settings injected by the container and
    never touch HTTP or the DI container themselves.
    """

    pass
