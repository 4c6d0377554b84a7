from typing import Any, Dict, Optional, Tuple

import httpx

from ..base_adapter import BaseAdapter
from ...config.constants import (
    COHERE_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
)
from ...core.normalization.usage import (
    count_embedding_tokens,
    count_tokens_used,
    placeholder_time,
)
from ...models.generation import EmbeddingResult, GenerationConfig, GenerationResult
from ...observability.logging import UsageCounts
from .parsers import decode_embedding, decode_generation
from .payloads import build_embed_body, build_generate_body


class CohereProvider(BaseAdapter):
    """
    Cohere generate and embed endpoints.

    Cohere does not report latency; ``processing_time_ms`` carries the
    billed output token count instead, or None when it is missing.
    """

    base_url = COHERE_BASE_URL
    default_embedding_model = "embed-english-v3.0"

    PRICING = {
        "cost_per_token": 0.0015,
        "cost_per_embedding": 0.00015,
        "currency": "USD",
        "monthly_quota": DEFAULT_MONTHLY_QUOTA,
    }
    MODEL_LIMITS = {
        "command": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 96},
        "command-light": {"max_tokens": 2048, "max_context_length": 2048, "max_batch_size": 96},
        "command-nightly": {"max_tokens": 4096, "max_context_length": 8192, "max_batch_size": 96},
    }
    FALLBACK_LIMITS = MODEL_LIMITS["command"]
    LANGUAGE_SUPPORT = {"he": 0.7, "en": 1.0, "ar": 0.6}

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        monthly_quota: int = DEFAULT_MONTHLY_QUOTA,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            api_key,
            "cohere",
            "Cohere",
            "Cohere Command language models",
            ["command", "command-light", "command-nightly"],
            "command",
            base_url=base_url,
            monthly_quota=monthly_quota,
            max_retries=max_retries,
            timeout=timeout,
            client=client,
        )

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _build_generation_request(
        self, prompt: str, model: str, config: GenerationConfig
    ) -> Tuple[str, Dict[str, Any]]:
        return "/generate", build_generate_body(prompt, model, config)

    def _parse_generation(
        self, data: Any, model: str, elapsed_ms: float
    ) -> Tuple[GenerationResult, UsageCounts]:
        generation = decode_generation(data)
        metadata = {"model": model, "finish_reason": generation.finish_reason}
        if generation.api_version:
            metadata["api_version"] = generation.api_version
        result = GenerationResult(
            text=generation.text,
            tokens_used=count_tokens_used(generation.usage),
            processing_time_ms=placeholder_time(generation.usage["completion_tokens"]),
            success=True,
            metadata=metadata,
        )
        return result, generation.usage

    def _build_embedding_request(self, text: str, model: str) -> Tuple[str, Dict[str, Any]]:
        return "/embed", build_embed_body(text, model)

    def _parse_embedding(
        self, data: Any, elapsed_ms: float
    ) -> Tuple[EmbeddingResult, UsageCounts]:
        decoded = decode_embedding(data)
        result = EmbeddingResult(
            embedding=decoded.embedding,
            tokens_used=count_embedding_tokens(decoded.usage),
            processing_time_ms=placeholder_time(decoded.usage["completion_tokens"]),
            success=True,
        )
        return result, decoded.usage
