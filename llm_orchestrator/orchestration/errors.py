"""Orchestration-specific error definitions."""

from typing import List, Tuple


class OrchestratorError(Exception):
    """Base exception for orchestration errors."""
    pass


class SelectionError(OrchestratorError):
    """No registered provider satisfies the selection criteria."""

    def __init__(self, message: str = "no suitable model for task"):
        super().__init__(message)


class NoActiveProviderError(OrchestratorError):
    """A call was made before any provider was registered."""

    def __init__(self, message: str = "no active model selected"):
        super().__init__(message)


class ProviderNotFoundError(OrchestratorError):
    """The provider id is not registered."""

    def __init__(self, message: str, provider_id: str):
        self.provider_id = provider_id
        super().__init__(message)


class AllProvidersFailedError(OrchestratorError):
    """
    Every provider in the fallback chain failed.

    Attributes:
        attempts: ``(provider_id, error_message)`` per provider tried, in order
    """

    def __init__(self, attempts: List[Tuple[str, str]]):
        self.attempts = list(attempts)
        last_error = self.attempts[-1][1] if self.attempts else "no providers tried"
        tried = ", ".join(provider_id for provider_id, _ in self.attempts)
        super().__init__(f"All providers failed ({tried}): {last_error}")

    @property
    def last_error(self) -> str:
        return self.attempts[-1][1] if self.attempts else ""
