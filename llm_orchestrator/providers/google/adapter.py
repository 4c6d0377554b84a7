from typing import Any, Dict, Optional, Tuple

import httpx

from ..base_adapter import BaseAdapter
from ...config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
    GOOGLE_BASE_URL,
)
from ...core.normalization.usage import (
    count_embedding_tokens,
    count_tokens_used,
    placeholder_time,
)
from ...models.generation import EmbeddingResult, GenerationConfig, GenerationResult
from ...observability.logging import UsageCounts
from .parsers import decode_embed_content, decode_generate_content
from .payloads import build_embed_content_body, build_generate_content_body


class GoogleProvider(BaseAdapter):
    """
    Google Gemini generateContent / embedContent.

    ``processing_time_ms`` carries ``usageMetadata.candidatesTokenCount``
    (a token count, not a latency), or None when it is missing.
    """

    base_url = GOOGLE_BASE_URL
    default_embedding_model = "embedding-001"

    PRICING = {
        "cost_per_token": 0.001,
        "cost_per_embedding": 0.0001,
        "currency": "USD",
        "monthly_quota": DEFAULT_MONTHLY_QUOTA,
    }
    MODEL_LIMITS = {
        "gemini-pro": {"max_tokens": 8192, "max_context_length": 32768, "max_batch_size": 100},
        "gemini-pro-vision": {"max_tokens": 4096, "max_context_length": 16384, "max_batch_size": 100},
        "text-bison": {"max_tokens": 8192, "max_context_length": 8192, "max_batch_size": 100},
    }
    FALLBACK_LIMITS = MODEL_LIMITS["gemini-pro"]
    LANGUAGE_SUPPORT = {"he": 0.8, "en": 1.0, "ar": 0.7}

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
            "google",
            "Google",
            "Google Gemini language models",
            ["gemini-pro", "gemini-pro-vision", "text-bison"],
            "gemini-pro",
            base_url=base_url,
            monthly_quota=monthly_quota,
            max_retries=max_retries,
            timeout=timeout,
            client=client,
        )

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-goog-api-key": self._api_key}

    def _build_generation_request(
        self, prompt: str, model: str, config: GenerationConfig
    ) -> Tuple[str, Dict[str, Any]]:
        return f"/models/{model}:generateContent", build_generate_content_body(prompt, config)

    def _parse_generation(
        self, data: Any, model: str, elapsed_ms: float
    ) -> Tuple[GenerationResult, UsageCounts]:
        candidate = decode_generate_content(data)
        result = GenerationResult(
            text=candidate.text,
            tokens_used=count_tokens_used(candidate.usage),
            processing_time_ms=placeholder_time(candidate.usage["completion_tokens"]),
            success=True,
            metadata={
                "model": candidate.model or model,
                "finish_reason": candidate.finish_reason,
            },
        )
        return result, candidate.usage

    def _build_embedding_request(self, text: str, model: str) -> Tuple[str, Dict[str, Any]]:
        return f"/models/{model}:embedContent", build_embed_content_body(text)

    def _parse_embedding(
        self, data: Any, elapsed_ms: float
    ) -> Tuple[EmbeddingResult, UsageCounts]:
        decoded = decode_embed_content(data)
        result = EmbeddingResult(
            embedding=decoded.embedding,
            tokens_used=count_embedding_tokens(decoded.usage),
            processing_time_ms=placeholder_time(decoded.usage["completion_tokens"]),
            success=True,
        )
        return result, decoded.usage
