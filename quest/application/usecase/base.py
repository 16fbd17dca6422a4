"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Application entry point that orchestrates domain services.

    Use cases own no state beyond their injected collaborators and are
    created per request by the DI container.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
