from typing import Any, Dict, Optional, Tuple

import httpx

from ..base_adapter import BaseAdapter
from ...config.constants import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
)
from ...core.normalization.usage import count_embedding_tokens, count_tokens_used
from ...models.generation import EmbeddingResult, GenerationConfig, GenerationResult
from ...observability.logging import UsageCounts
from .parsers import decode_embedding_response, decode_messages_response
from .payloads import build_embedding_body, build_messages_body


class AnthropicProvider(BaseAdapter):
    """Anthropic Claude Messages API over HTTPS."""

    base_url = ANTHROPIC_BASE_URL
    default_embedding_model = "claude-3-sonnet-20240229"

    PRICING = {
        "cost_per_token": 0.003,
        "cost_per_embedding": 0.0001,
        "currency": "USD",
        "monthly_quota": DEFAULT_MONTHLY_QUOTA,
    }
    MODEL_LIMITS = {
        "claude-3-opus-20240229": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
        "claude-3-sonnet-20240229": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
        "claude-3-haiku-20240307": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
    }
    FALLBACK_LIMITS = MODEL_LIMITS["claude-3-sonnet-20240229"]
    LANGUAGE_SUPPORT = {"he": 0.85, "en": 1.0, "ar": 0.75}

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
            "anthropic",
            "Anthropic",
            "Anthropic Claude language models",
            ["claude-3-opus-20240229", "claude-3-sonnet-20240229", "claude-3-haiku-20240307"],
            "claude-3-sonnet-20240229",
            base_url=base_url,
            monthly_quota=monthly_quota,
            max_retries=max_retries,
            timeout=timeout,
            client=client,
        )

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def _build_generation_request(
        self, prompt: str, model: str, config: GenerationConfig
    ) -> Tuple[str, Dict[str, Any]]:
        return "/messages", build_messages_body(prompt, model, config)

    def _parse_generation(
        self, data: Any, model: str, elapsed_ms: float
    ) -> Tuple[GenerationResult, UsageCounts]:
        message = decode_messages_response(data)
        result = GenerationResult(
            text=message.text,
            tokens_used=count_tokens_used(message.usage),
            processing_time_ms=elapsed_ms,
            success=True,
            metadata={
                "model": message.model or model,
                "finish_reason": message.stop_reason,
            },
        )
        return result, message.usage

    def _build_embedding_request(self, text: str, model: str) -> Tuple[str, Dict[str, Any]]:
        return "/embeddings", build_embedding_body(text, model)

    def _parse_embedding(
        self, data: Any, elapsed_ms: float
    ) -> Tuple[EmbeddingResult, UsageCounts]:
        decoded = decode_embedding_response(data)
        result = EmbeddingResult(
            embedding=decoded.embedding,
            tokens_used=count_embedding_tokens(decoded.usage),
            processing_time_ms=elapsed_ms,
            success=True,
        )
        return result, decoded.usage
