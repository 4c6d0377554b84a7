"""
Provider Adapters Layer

This layer contains all LLM vendor-specific implementations.
Each provider adapter translates between the uniform request/result
models and the vendor's JSON wire format.
"""

from .base import (
    ProviderAdapter,
    ProviderError,
    ModelValidationError,
    TransportError,
    ServerError,
    NoResponseError,
    UnknownTransportError,
)
from .base_adapter import BaseAdapter
from .openai.adapter import OpenAIProvider
from .anthropic.adapter import AnthropicProvider
from .cohere.adapter import CohereProvider
from .google.adapter import GoogleProvider
from .mistral.adapter import MistralProvider

__all__ = [
    "ProviderAdapter",
    "ProviderError",
    "ModelValidationError",
    "TransportError",
    "ServerError",
    "NoResponseError",
    "UnknownTransportError",
    "BaseAdapter",
    "OpenAIProvider",
    "AnthropicProvider",
    "CohereProvider",
    "GoogleProvider",
    "MistralProvider",
]
