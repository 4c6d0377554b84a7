"""
LLM Orchestrator - Multi-provider LLM access with selection and fallback.

This package puts several LLM vendors behind one interface:
- OpenAI
- Anthropic
- Cohere
- Google (Gemini)
- Mistral

Features:
- Uniform generation and embedding results
- Task-based provider selection by language coverage and price
- Sequential fallback across providers
- Per-provider performance and cost ledgers
"""

__version__ = "0.1.0"

from .models.generation import (
    CostLedger,
    EmbeddingResult,
    GenerationConfig,
    GenerationResult,
    ModelLimits,
    PerformanceLedger,
    PricingInfo,
    SelectionCriteria,
)
from .orchestration import (
    AllProvidersFailedError,
    LLMOrchestrator,
    NoActiveProviderError,
    OrchestratorError,
    ProviderNotFoundError,
    SelectionError,
    create_default_orchestrator,
)
from .providers import (
    AnthropicProvider,
    BaseAdapter,
    CohereProvider,
    GoogleProvider,
    MistralProvider,
    ModelValidationError,
    OpenAIProvider,
    ProviderAdapter,
    ProviderError,
    TransportError,
)

__all__ = [
    "LLMOrchestrator",
    "create_default_orchestrator",
    "ProviderAdapter",
    "BaseAdapter",
    "OpenAIProvider",
    "AnthropicProvider",
    "CohereProvider",
    "GoogleProvider",
    "MistralProvider",
    "GenerationConfig",
    "GenerationResult",
    "EmbeddingResult",
    "PricingInfo",
    "ModelLimits",
    "SelectionCriteria",
    "PerformanceLedger",
    "CostLedger",
    "OrchestratorError",
    "SelectionError",
    "NoActiveProviderError",
    "ProviderNotFoundError",
    "AllProvidersFailedError",
    "ProviderError",
    "ModelValidationError",
    "TransportError",
]
