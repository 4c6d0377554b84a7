from typing import Any, Dict, Optional, Tuple

import httpx

from ..base_adapter import BaseAdapter
from ...config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
    OPENAI_BASE_URL,
)
from ...core.normalization.usage import count_embedding_tokens, count_tokens_used
from ...models.generation import EmbeddingResult, GenerationConfig, GenerationResult
from ...observability.logging import UsageCounts
from .parsers import decode_chat_completion, decode_embedding_list
from .payloads import build_chat_completion_body, build_embedding_body


class OpenAIProvider(BaseAdapter):
    """OpenAI chat-completions and embeddings over HTTPS."""

    base_url = OPENAI_BASE_URL
    default_embedding_model = "text-embedding-ada-002"

    PRICING = {
        "cost_per_token": 0.002,
        "cost_per_embedding": 0.0001,
        "currency": "USD",
        "monthly_quota": DEFAULT_MONTHLY_QUOTA,
    }
    MODEL_LIMITS = {
        "gpt-4": {"max_tokens": 8192, "max_context_length": 8192, "max_batch_size": 20},
        "gpt-4-turbo": {"max_tokens": 4096, "max_context_length": 128000, "max_batch_size": 20},
        "gpt-3.5-turbo": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 20},
        "text-davinci-003": {"max_tokens": 4000, "max_context_length": 4000, "max_batch_size": 20},
    }
    FALLBACK_LIMITS = MODEL_LIMITS["gpt-3.5-turbo"]
    LANGUAGE_SUPPORT = {"he": 0.9, "en": 1.0, "ar": 0.8}

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
            "openai",
            "OpenAI",
            "OpenAI GPT language models",
            ["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"],
            "gpt-3.5-turbo",
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
        completion = decode_chat_completion(data, "openai")
        result = GenerationResult(
            text=completion.text,
            tokens_used=count_tokens_used(completion.usage),
            processing_time_ms=elapsed_ms,
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
        decoded = decode_embedding_list(data, "openai")
        result = EmbeddingResult(
            embedding=decoded.embedding,
            tokens_used=count_embedding_tokens(decoded.usage),
            processing_time_ms=elapsed_ms,
            success=True,
        )
        return result, decoded.usage
