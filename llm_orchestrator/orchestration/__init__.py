"""Provider registry, selection and fallback."""

from .errors import (
    OrchestratorError,
    SelectionError,
    NoActiveProviderError,
    ProviderNotFoundError,
    AllProvidersFailedError,
)
from .ledger import LedgerBook
from .orchestrator import LLMOrchestrator
from .factory import create_default_orchestrator

__all__ = [
    "OrchestratorError",
    "SelectionError",
    "NoActiveProviderError",
    "ProviderNotFoundError",
    "AllProvidersFailedError",
    "LedgerBook",
    "LLMOrchestrator",
    "create_default_orchestrator",
]
