"""
Shared adapter behavior.

BaseAdapter implements the ProviderAdapter contract once, in terms of a
handful of per-vendor hooks (auth headers, request builders, response
parsers). Retries and error classification are composed in from the
reliability layer rather than inherited.
"""

import threading
import time
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx

from .base import (
    ConfigInput,
    ModelValidationError,
    ProviderAdapter,
    TransportError,
    resolve_config,
)
from .errors import ErrorMapper
from ..config.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MONTHLY_QUOTA,
    DEFAULT_TIMEOUT_SECONDS,
)
from ..config.models import (
    DEFAULT_LANGUAGE_SUPPORT,
    DEFAULT_MODEL_LIMITS,
    DEFAULT_PRICING,
    FALLBACK_MODEL_LIMITS,
)
from ..models.generation import (
    EmbeddingResult,
    GenerationConfig,
    GenerationResult,
    ModelLimits,
    PricingInfo,
)
from ..observability.logging import ProviderLogger, UsageCounts
from ..reliability.retry import RetryConfig, RetryManager


# Errors raised while decoding a 2xx body that does not match the vendor schema
DECODE_ERRORS = (KeyError, IndexError, TypeError, ValueError)


class BaseAdapter(ProviderAdapter):
    """
    HTTP-backed provider adapter with default tables.

    Subclasses set ``base_url`` and the class-level tables they override,
    and implement:

    - ``_auth_headers()``
    - ``_build_generation_request(prompt, model, config) -> (path, body)``
    - ``_parse_generation(data, model, elapsed_ms) -> (GenerationResult, usage)``
    - ``_build_embedding_request(text, model) -> (path, body)``
    - ``_parse_embedding(data, elapsed_ms) -> (EmbeddingResult, usage)``

    ``usage`` is the normalized usage dict, logged next to ``tokens_used``.
    """

    base_url: str = ""
    models_path: str = "/models"
    default_embedding_model: str = ""

    PRICING: Dict[str, Any] = DEFAULT_PRICING
    MODEL_LIMITS: Dict[str, Dict[str, int]] = DEFAULT_MODEL_LIMITS
    FALLBACK_LIMITS: Dict[str, int] = FALLBACK_MODEL_LIMITS
    LANGUAGE_SUPPORT: Dict[str, float] = DEFAULT_LANGUAGE_SUPPORT

    def __init__(
        self,
        api_key: str,
        id: str,
        name: str,
        description: str,
        models: List[str],
        default_model: str,
        *,
        base_url: Optional[str] = None,
        monthly_quota: int = DEFAULT_MONTHLY_QUOTA,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key or ""
        self.id = id
        self.name = name
        self.description = description
        self.models = list(models)
        self.default_model = default_model
        if base_url:
            self.base_url = base_url.rstrip("/")
        self.monthly_quota = monthly_quota
        self.max_retries = max_retries
        self.timeout = timeout

        self._client = client
        self._owns_client = client is None
        self._available: Optional[bool] = None

        self._usage_lock = threading.Lock()
        self._tokens_billed = 0

        self.retry_manager = RetryManager()
        self.retry_config = RetryConfig(max_attempts=max_retries)
        self.logger = ProviderLogger(id)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ===== Contract =====

    async def generate(self, prompt: str, config: ConfigInput = None) -> GenerationResult:
        """Generate text for ``prompt`` through the vendor API."""
        resolved = resolve_config(config)
        model = resolved.model or self.default_model
        self.validate_model(model)

        with self.logger.track_request("generate", model) as request_info:
            path, body = self._build_generation_request(prompt, model, resolved)
            started = time.perf_counter()
            try:
                data = await self._request_json("POST", path, body)
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                result, usage = self._parse_generation(data, model, elapsed_ms)
            except TransportError as e:
                request_info["success"] = False
                self.logger.warning("Generation failed", model=model,
                                    request_id=request_info["request_id"], error_kind=e.kind)
                return GenerationResult.failure(str(e), model=model, provider=self.id)
            except DECODE_ERRORS as e:
                request_info["success"] = False
                error = ErrorMapper.malformed_response(self.id, f"{type(e).__name__}: {e}")
                self.logger.warning("Malformed generation response", model=model,
                                    request_id=request_info["request_id"])
                return GenerationResult.failure(str(error), model=model, provider=self.id)

            request_info["success"] = True
            result.metadata.setdefault("model", model)
            result.metadata["provider"] = self.id
            self._record_usage(result.tokens_used)
            self.logger.log_usage(model, request_info["request_id"], result.tokens_used, usage)
            return result

    async def get_embeddings(self, text: str, model: Optional[str] = None) -> EmbeddingResult:
        """Embed ``text`` with ``model`` or the adapter's default embedding model."""
        model = model or self.default_embedding_model

        with self.logger.track_request("embeddings", model) as request_info:
            path, body = self._build_embedding_request(text, model)
            started = time.perf_counter()
            try:
                data = await self._request_json("POST", path, body)
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                result, usage = self._parse_embedding(data, elapsed_ms)
            except TransportError as e:
                request_info["success"] = False
                self.logger.warning("Embedding failed", model=model,
                                    request_id=request_info["request_id"], error_kind=e.kind)
                return EmbeddingResult.failure(str(e))
            except DECODE_ERRORS as e:
                request_info["success"] = False
                error = ErrorMapper.malformed_response(self.id, f"{type(e).__name__}: {e}")
                return EmbeddingResult.failure(str(error))

            request_info["success"] = True
            self._record_usage(result.tokens_used)
            self.logger.log_usage(model, request_info["request_id"], result.tokens_used, usage)
            return result

    async def validate_connection(self) -> bool:
        """Probe the vendor's models listing once, without retries."""
        try:
            await self._request_json("GET", self.models_path, retry=False)
        except TransportError as e:
            self.logger.warning("Connection check failed", error_kind=e.kind)
            self._available = False
            return False
        self._available = True
        return True

    def is_available(self) -> bool:
        """
        Whether the provider looks usable.

        Reflects the last ``validate_connection()`` outcome, or whether an
        API key is configured if the connection was never checked.
        """
        if self._available is not None:
            return self._available
        return bool(self._api_key)

    def get_pricing(self) -> PricingInfo:
        pricing = dict(self.PRICING)
        pricing["monthly_quota"] = self.monthly_quota
        with self._usage_lock:
            pricing["current_monthly_cost"] = self._tokens_billed * pricing["cost_per_token"]
        return PricingInfo(**pricing)

    def get_model_limits(self, model: str) -> ModelLimits:
        limits = self.MODEL_LIMITS.get(model, self.FALLBACK_LIMITS)
        return ModelLimits(**limits)

    def get_language_support(self, code: Optional[str] = None) -> Union[float, Dict[str, float]]:
        if code is None:
            return dict(self.LANGUAGE_SUPPORT)
        return float(self.LANGUAGE_SUPPORT.get(code, 0.0))

    def validate_model(self, model: str) -> None:
        """
        Reject models outside the declared list.

        Raises:
            ModelValidationError: Before any network call is made
        """
        if model not in self.models:
            raise ModelValidationError(model, self.models, provider=self.id)

    # ===== Transport =====

    async def _request_json(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        retry: bool = True
    ) -> Any:
        """
        Perform one JSON request, retrying transient failures.

        Raises:
            TransportError: Classified failure after retries are exhausted
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        if body is not None:
            headers["Content-Type"] = "application/json"

        async def _send() -> Any:
            try:
                response = await self.client.request(
                    method, url, json=body, headers=headers, timeout=self.timeout
                )
                response.raise_for_status()
                return response.json()
            except Exception as e:  # noqa: BLE001
                raise ErrorMapper.map_error(e, self.id) from e

        if not retry:
            return await _send()
        return await self.retry_manager.execute_with_retry(_send, self.retry_config)

    def _record_usage(self, tokens: int) -> None:
        with self._usage_lock:
            self._tokens_billed += tokens

    # ===== Vendor hooks =====

    def _auth_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    def _build_generation_request(
        self, prompt: str, model: str, config: GenerationConfig
    ) -> Tuple[str, Dict[str, Any]]:
        raise NotImplementedError

    def _parse_generation(
        self, data: Any, model: str, elapsed_ms: float
    ) -> Tuple[GenerationResult, UsageCounts]:
        raise NotImplementedError

    def _build_embedding_request(self, text: str, model: str) -> Tuple[str, Dict[str, Any]]:
        raise NotImplementedError

    def _parse_embedding(self, data: Any, elapsed_ms: float) -> Tuple[EmbeddingResult, UsageCounts]:
        raise NotImplementedError
