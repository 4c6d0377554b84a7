"""
Multi-provider orchestrator.

The orchestrator owns a registry of provider adapters, picks one for a
task, and routes generation through a sequential fallback chain so that a
single vendor outage does not fail the caller. Every adapter call is
folded into per-provider performance and cost ledgers.
"""

import asyncio
import logging
import time
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.generation import (
    CostLedger,
    EmbeddingResult,
    GenerationResult,
    PerformanceLedger,
    SelectionCriteria,
)
from ..providers.base import ConfigInput, ModelValidationError, ProviderAdapter, resolve_config
from ..core.routing.selector import language_score, rank_providers
from .errors import (
    AllProvidersFailedError,
    NoActiveProviderError,
    ProviderNotFoundError,
    SelectionError,
)
from .ledger import LedgerBook

logger = logging.getLogger(__name__)


class LLMOrchestrator:
    """
    Registry, selection and fallback across LLM providers.

    Example:
        async with LLMOrchestrator([OpenAIProvider(key), MistralProvider(key)]) as llm:
            await llm.select_best_model(SelectionCriteria(language="he"))
            result = await llm.generate("Hello")
    """

    def __init__(self, providers: Optional[Iterable[ProviderAdapter]] = None):
        self._providers: Dict[str, ProviderAdapter] = {}
        self._active_id: Optional[str] = None
        self._lock = asyncio.Lock()
        self._ledgers = LedgerBook()

        for provider in providers or ():
            self._register(provider)

    async def __aenter__(self) -> "LLMOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ===== Registry =====

    @property
    def providers(self) -> List[str]:
        """Registered provider ids in registration order."""
        return list(self._providers)

    @property
    def active_provider(self) -> Optional[str]:
        """Id of the provider chosen by the last selection, if any."""
        return self._active_id

    def get_provider(self, provider_id: str) -> ProviderAdapter:
        provider = self._providers.get(provider_id)
        if provider is None:
            raise ProviderNotFoundError(f"provider {provider_id} not found", provider_id)
        return provider

    async def add_provider(self, provider: ProviderAdapter) -> bool:
        """
        Register a provider under its id.

        Returns:
            bool: False if the id was already registered (the existing
            adapter is kept)
        """
        async with self._lock:
            return self._register(provider)

    def _register(self, provider: ProviderAdapter) -> bool:
        if provider.id in self._providers:
            logger.debug("Provider %s already registered, ignoring", provider.id)
            return False

        self._providers[provider.id] = provider
        pricing = provider.get_pricing()
        self._ledgers.open(provider.id, pricing.cost_per_token, pricing.currency)
        logger.debug("Registered provider %s", provider.id)
        return True

    # ===== Selection =====

    async def select_best_model(self, criteria: Optional[SelectionCriteria] = None) -> ProviderAdapter:
        """
        Choose the provider best suited to a task and make it active.

        Providers priced above ``criteria.max_cost`` per token are excluded;
        the rest are ranked by coverage of ``criteria.language``.

        Raises:
            SelectionError: If no registered provider qualifies
        """
        criteria = criteria or SelectionCriteria()
        async with self._lock:
            ranked = rank_providers(list(self._providers.values()), criteria)
            if not ranked:
                raise SelectionError()

            best = ranked[0]
            self._active_id = best.id

        logger.info(
            "Selected provider %s (language=%s score=%.2f max_cost=%s)",
            best.id, criteria.language, language_score(best, criteria.language), criteria.max_cost
        )
        return best

    async def _fallback_chain(self, provider_id: Optional[str]) -> List[ProviderAdapter]:
        """The first provider to try followed by the others in registration order."""
        async with self._lock:
            if not self._providers:
                raise NoActiveProviderError()

            first_id = provider_id or self._active_id or next(iter(self._providers))
            if first_id not in self._providers:
                raise ProviderNotFoundError(f"provider {first_id} not found", first_id)

            chain = [self._providers[first_id]]
            chain.extend(p for pid, p in self._providers.items() if pid != first_id)
            return chain

    # ===== Operations =====

    async def generate(
        self,
        prompt: str,
        config: ConfigInput = None,
        provider_id: Optional[str] = None
    ) -> GenerationResult:
        """
        Generate text, falling back across providers on failure.

        Args:
            prompt: Prompt text
            config: GenerationConfig or equivalent dict
            provider_id: Provider to try first. Defaults to the active
                provider, or the first registered one.

        Returns:
            The first successful GenerationResult, unchanged

        Raises:
            NoActiveProviderError: If no provider is registered
            ModelValidationError: If the first provider rejects the model
            pydantic.ValidationError: If a config mapping is invalid
            AllProvidersFailedError: If every provider failed
        """
        resolved = resolve_config(config)
        chain = await self._fallback_chain(provider_id)
        attempts: List[Tuple[str, str]] = []

        for position, provider in enumerate(chain):
            started = time.perf_counter()
            try:
                result = await provider.generate(prompt, resolved)
            except ModelValidationError as e:
                if position == 0:
                    raise
                attempts.append((provider.id, str(e)))
                continue
            except Exception as e:  # noqa: BLE001
                self._record(provider.id, False, 0, started)
                attempts.append((provider.id, str(e) or type(e).__name__))
                logger.warning("Provider %s raised %s, trying next", provider.id, type(e).__name__)
                continue

            self._record(provider.id, result.success, result.tokens_used, started)
            if result.success:
                if attempts:
                    logger.info("Provider %s succeeded after %d failed attempt(s)",
                                provider.id, len(attempts))
                return result

            attempts.append((provider.id, result.error or "unknown error"))
            logger.warning("Provider %s failed: %s, trying next", provider.id, result.error)

        logger.error("All providers failed: %s", ", ".join(pid for pid, _ in attempts))
        raise AllProvidersFailedError(attempts)

    async def get_embeddings(
        self,
        text: str,
        model: Optional[str] = None,
        provider_id: Optional[str] = None
    ) -> EmbeddingResult:
        """
        Embed ``text`` with one provider. There is no fallback for embeddings.

        Raises:
            NoActiveProviderError: If no provider is registered
        """
        provider = (await self._fallback_chain(provider_id))[0]
        started = time.perf_counter()
        try:
            result = await provider.get_embeddings(text, model)
        except Exception:
            self._record(provider.id, False, 0, started)
            raise
        self._record(provider.id, result.success, result.tokens_used, started)
        return result

    async def validate_provider_connection(self, provider_id: str) -> bool:
        """
        Check connectivity of one provider.

        Raises:
            ProviderNotFoundError: If the id is not registered
        """
        return await self.get_provider(provider_id).validate_connection()

    def get_model_performance(self, provider_id: str) -> PerformanceLedger:
        ledger = self._ledgers.performance(provider_id)
        if ledger is None:
            raise ProviderNotFoundError(f"no performance data for provider {provider_id}", provider_id)
        return ledger

    def get_usage_costs(self, provider_id: str) -> CostLedger:
        ledger = self._ledgers.costs(provider_id)
        if ledger is None:
            raise ProviderNotFoundError(f"no cost data for provider {provider_id}", provider_id)
        return ledger

    async def aclose(self) -> None:
        """Close every registered adapter's HTTP client."""
        for provider in list(self._providers.values()):
            await provider.aclose()

    def _record(self, provider_id: str, success: bool, tokens_used: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        self._ledgers.record(provider_id, success, tokens_used, elapsed_ms)
