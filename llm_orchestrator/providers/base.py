"""
Base Provider Adapter Interface

This module defines the abstract contract every LLM vendor adapter
implements, together with the provider error taxonomy. Shared behavior
(HTTP transport, retries, default tables) lives in ``base_adapter.py``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Union

from ..models.generation import (
    EmbeddingResult,
    GenerationConfig,
    GenerationResult,
    ModelLimits,
    PricingInfo,
)


ConfigInput = Union[GenerationConfig, Mapping[str, Any], None]


class ProviderAdapter(ABC):
    """
    Abstract base class for LLM provider adapters.

    The adapter is responsible for:
    - Translating the uniform request into the vendor's JSON body
    - Making exactly one HTTP call per operation (plus bounded retries)
    - Decoding the vendor response into GenerationResult / EmbeddingResult
    - Converting transport failures into failure-shaped results

    Provider adapters should NOT contain:
    - Cross-provider logic (selection, fallback)
    - Ledger bookkeeping
    """

    id: str
    name: str
    description: str
    models: List[str]
    default_model: str

    @abstractmethod
    async def generate(self, prompt: str, config: ConfigInput = None) -> GenerationResult:
        """
        Generate a completion for ``prompt``.

        Unset config fields use the adapter defaults. Transport failures are
        returned as ``GenerationResult(success=False, error=...)``.

        Raises:
            ModelValidationError: If the requested model is not in ``models``.
                Raised before any network call.
        """
        pass

    @abstractmethod
    async def get_embeddings(self, text: str, model: Optional[str] = None) -> EmbeddingResult:
        """
        Compute an embedding vector for ``text``.

        Never raises for transport failures.
        """
        pass

    @abstractmethod
    async def validate_connection(self) -> bool:
        """
        Probe a lightweight vendor endpoint.

        Returns:
            bool: True if the vendor answered successfully, False on any failure
        """
        pass

    @abstractmethod
    def get_pricing(self) -> PricingInfo:
        """Return pricing information. Never touches the network."""
        pass

    @abstractmethod
    def get_model_limits(self, model: str) -> ModelLimits:
        """Return limits for ``model``, or the adapter default for unknown models."""
        pass

    @abstractmethod
    def get_language_support(self, code: Optional[str] = None) -> Union[float, Dict[str, float]]:
        """
        Return language coverage.

        With ``code`` a single score in [0, 1] is returned, otherwise the
        full language table.
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
        return None


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    Attributes:
        provider: Provider id
        status_code: HTTP status code if applicable
        is_retryable: Whether the retry helper should try again
        original_error: The wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.is_retryable = False
        self.original_error: Optional[Exception] = None


class ModelValidationError(ProviderError):
    """Requested model is not in the adapter's declared model list."""

    def __init__(self, model: str, supported: List[str], provider: Optional[str] = None):
        self.model = model
        self.supported = list(supported)
        super().__init__(
            f"Model {model} is not supported. Supported models: {', '.join(supported)}",
            provider=provider,
        )


class TransportError(ProviderError):
    """A single HTTP exchange with a vendor failed."""

    kind = "unknown"


class ServerError(TransportError):
    """The vendor answered with an HTTP error status."""

    kind = "server_error"

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        vendor_message: Optional[str] = None
    ):
        super().__init__(message, provider=provider, status_code=status_code)
        self.vendor_message = vendor_message


class NoResponseError(TransportError):
    """The request timed out or never reached the vendor."""

    kind = "no_response"


class UnknownTransportError(TransportError):
    """Any other failure, including malformed vendor responses."""

    kind = "unknown"


def resolve_config(config: ConfigInput) -> GenerationConfig:
    """
    Turn any accepted config form into a GenerationConfig.

    Raises:
        pydantic.ValidationError: If a mapping has unknown keys or bad values
        TypeError: For any other config type
    """
    if config is None:
        return GenerationConfig()
    if isinstance(config, GenerationConfig):
        return config
    if isinstance(config, Mapping):
        return GenerationConfig.model_validate(dict(config))
    raise TypeError(f"Unsupported config type: {type(config).__name__}")
