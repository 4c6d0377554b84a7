from typing import Any, Dict, Optional, Tuple

import httpx

from ..base_adapter import BaseAdapter
from ...config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
    MISTRAL_BASE_URL,
)
from ...core.normalization.usage import (
    count_embedding_tokens,
    count_tokens_used,
    placeholder_time,
)
from ...models.generation import EmbeddingResult, GenerationConfig, GenerationResult
from ...observability.logging import UsageCounts
from .parsers import decode_chat_response, decode_embedding_response
from .payloads import build_chat_completion_body, build_embedding_body


class MistralProvider(BaseAdapter):
    """
    Mistral chat completions and embeddings.

    ``processing_time_ms`` carries ``usage.completion_tokens`` (a token
    count, not a latency), or None when it is missing.
    """

    base_url = MISTRAL_BASE_URL
    default_embedding_model = "mistral-embed"

    PRICING = {
        "cost_per_token": 0.0007,
        "cost_per_embedding": 0.00007,
        "currency": "USD",
        "monthly_quota": DEFAULT_MONTHLY_QUOTA,
    }
    MODEL_LIMITS = {
        "mistral-large": {"max_tokens": 8192, "max_context_length": 32768, "max_batch_size": 32},
        "mistral-medium": {"max_tokens": 4096, "max_context_length": 32768, "max_batch_size": 32},
        "mistral-small": {"max_tokens": 4096, "max_context_length": 32768, "max_batch_size": 32},
    }
    FALLBACK_LIMITS = MODEL_LIMITS["mistral-medium"]
    LANGUAGE_SUPPORT = {"he": 0.75, "en": 1.0, "ar": 0.65}

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
            "mistral",
            "Mistral",
            "Mistral AI language models",
            ["mistral-large", "mistral-medium", "mistral-small"],
            "mistral-medium",
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
        return "/chat/completions", build_chat_completion_body(prompt, model, config)

    def _parse_generation(
        self, data: Any, model: str, elapsed_ms: float
    ) -> Tuple[GenerationResult, UsageCounts]:
        completion = decode_chat_response(data)
        result = GenerationResult(
            text=completion.text,
            tokens_used=count_tokens_used(completion.usage),
            processing_time_ms=placeholder_time(completion.usage["completion_tokens"]),
            success=True,
            metadata={
                "model": completion.model or model,
                "finish_reason": completion.finish_reason,
            },
        )
        return result, completion.usage

    def _build_embedding_request(self, text: str, model: str) -> Tuple[str, Dict[str, Any]]:
        return "/embeddings", build_embedding_body(text, model)

    def _parse_embedding(
        self, data: Any, elapsed_ms: float
    ) -> Tuple[EmbeddingResult, UsageCounts]:
        decoded = decode_embedding_response(data)
        result = EmbeddingResult(
            embedding=decoded.embedding,
            tokens_used=count_embedding_tokens(decoded.usage),
            processing_time_ms=placeholder_time(decoded.usage["prompt_tokens"]),
            success=True,
        )
        return result, decoded.usage
