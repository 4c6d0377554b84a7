"""Tests for LLMOrchestrator registry, selection, fallback and ledgers."""

import asyncio
from typing import List, Optional

import pytest
from pydantic import ValidationError

from llm_orchestrator.models.generation import (
    EmbeddingResult,
    GenerationConfig,
    GenerationResult,
    SelectionCriteria,
)
from llm_orchestrator.orchestration import (
    AllProvidersFailedError,
    LLMOrchestrator,
    NoActiveProviderError,
    ProviderNotFoundError,
    SelectionError,
)
from llm_orchestrator.providers import (
    BaseAdapter,
    MistralProvider,
    ModelValidationError,
    OpenAIProvider,
)
from llm_orchestrator.providers.base import resolve_config


class StubProvider(BaseAdapter):
    """Scripted adapter using the default pricing and language tables."""

    def __init__(
        self,
        id: str,
        results: Optional[List[object]] = None,
        cost_per_token: float = 0.002,
        language_support: Optional[dict] = None,
    ):
        super().__init__("key", id, id.title(), f"{id} stub", [f"{id}-model"], f"{id}-model")
        self.PRICING = {**self.PRICING, "cost_per_token": cost_per_token}
        if language_support is not None:
            self.LANGUAGE_SUPPORT = language_support
        self.results = list(results or [])
        self.prompts: List[str] = []
        self.connection_ok = True

    def _next(self):
        item = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def generate(self, prompt, config=None):
        self.prompts.append(prompt)
        resolved = resolve_config(config)
        self.validate_model(resolved.model or self.default_model)
        return self._next()

    async def get_embeddings(self, text, model=None):
        self.prompts.append(text)
        return self._next()

    async def validate_connection(self):
        return self.connection_ok


def ok(text="ok", tokens=10):
    return GenerationResult(text=text, tokens_used=tokens, processing_time_ms=5.0, success=True)


def failed(error="Server error: 500 - boom"):
    return GenerationResult.failure(error)


class TestRegistry:

    @pytest.mark.asyncio
    async def test_add_provider_is_idempotent(self):
        orchestrator = LLMOrchestrator()
        first = StubProvider("alpha", [ok("first")])
        duplicate = StubProvider("alpha", [ok("second")])

        assert await orchestrator.add_provider(first) is True
        assert await orchestrator.add_provider(duplicate) is False

        assert orchestrator.providers == ["alpha"]
        assert orchestrator.get_provider("alpha") is first
        result = await orchestrator.generate("hi")
        assert result.text == "first"

    def test_constructor_registers_in_order(self):
        orchestrator = LLMOrchestrator([StubProvider("b"), StubProvider("a"), StubProvider("b")])
        assert orchestrator.providers == ["b", "a"]
        assert orchestrator.active_provider is None

    def test_get_unknown_provider(self):
        with pytest.raises(ProviderNotFoundError, match="provider missing not found"):
            LLMOrchestrator().get_provider("missing")

    @pytest.mark.asyncio
    async def test_concurrent_registration(self):
        orchestrator = LLMOrchestrator()
        results = await asyncio.gather(
            *(orchestrator.add_provider(StubProvider("same")) for _ in range(5))
        )
        assert sorted(results) == [False, False, False, False, True]
        assert orchestrator.providers == ["same"]


class TestSelection:

    @pytest.mark.asyncio
    async def test_cost_constrained_selection(self):
        orchestrator = LLMOrchestrator([
            StubProvider("expensive", cost_per_token=0.002, language_support={"he": 1.0}),
            StubProvider("cheap", cost_per_token=0.0007, language_support={"he": 0.5}),
        ])

        selected = await orchestrator.select_best_model(SelectionCriteria(language="he", max_cost=0.001))

        assert selected.id == "cheap"
        assert orchestrator.active_provider == "cheap"

    @pytest.mark.asyncio
    async def test_language_constrained_selection(self, hebrew_criteria):
        orchestrator = LLMOrchestrator([
            StubProvider("low", language_support={"he": 0.7, "en": 1.0}),
            StubProvider("mid", language_support={"he": 0.85, "en": 1.0}),
            StubProvider("high", language_support={"he": 0.9, "en": 1.0}),
            StubProvider("fair", language_support={"he": 0.8, "en": 1.0}),
            StubProvider("weak", language_support={"he": 0.75, "en": 1.0}),
        ])

        selected = await orchestrator.select_best_model(hebrew_criteria)

        assert selected.id == "high"
        assert orchestrator.active_provider == "high"

    @pytest.mark.asyncio
    async def test_ties_keep_registration_order(self):
        orchestrator = LLMOrchestrator([StubProvider("first"), StubProvider("second")])
        selected = await orchestrator.select_best_model(SelectionCriteria(language="en"))
        assert selected.id == "first"

    @pytest.mark.asyncio
    async def test_unsupported_language_still_selects(self):
        orchestrator = LLMOrchestrator([StubProvider("only")])
        selected = await orchestrator.select_best_model(SelectionCriteria(language="fr"))
        assert selected.id == "only"

    @pytest.mark.asyncio
    async def test_nothing_within_budget(self):
        orchestrator = LLMOrchestrator([StubProvider("pricey", cost_per_token=0.01)])
        with pytest.raises(SelectionError, match="no suitable model for task"):
            await orchestrator.select_best_model(SelectionCriteria(max_cost=0.001))
        assert orchestrator.active_provider is None

    @pytest.mark.asyncio
    async def test_empty_registry(self):
        orchestrator = LLMOrchestrator()

        with pytest.raises(SelectionError, match="no suitable model for task"):
            await orchestrator.select_best_model(SelectionCriteria())

        with pytest.raises(NoActiveProviderError, match="no active model selected"):
            await orchestrator.generate("hi")

        with pytest.raises(NoActiveProviderError):
            await orchestrator.get_embeddings("hi")

    @pytest.mark.asyncio
    async def test_real_adapters_select_by_price(self):
        orchestrator = LLMOrchestrator([OpenAIProvider("k"), MistralProvider("k")])
        selected = await orchestrator.select_best_model(SelectionCriteria(language="he", max_cost=0.001))
        assert selected.id == "mistral"


class TestGenerate:

    @pytest.mark.asyncio
    async def test_first_success_is_returned_unchanged(self):
        expected = ok("primary")
        primary = StubProvider("primary", [expected])
        backup = StubProvider("backup", [ok("backup")])
        orchestrator = LLMOrchestrator([primary, backup])

        result = await orchestrator.generate("hi")

        assert result is expected
        assert backup.prompts == []

    @pytest.mark.asyncio
    async def test_fallback_on_failed_result(self):
        primary = StubProvider("primary", [failed()])
        backup = StubProvider("backup", [ok("from backup")])
        orchestrator = LLMOrchestrator([primary, backup])

        result = await orchestrator.generate("hi")

        assert result.success is True
        assert result.text == "from backup"
        assert primary.prompts == ["hi"]
        assert backup.prompts == ["hi"]

    @pytest.mark.asyncio
    async def test_fallback_on_exception(self):
        primary = StubProvider("primary", [RuntimeError("adapter bug")])
        backup = StubProvider("backup", [ok()])
        orchestrator = LLMOrchestrator([primary, backup])

        result = await orchestrator.generate("hi")

        assert result.success is True
        assert orchestrator.get_model_performance("primary").success_rate == 0.0

    @pytest.mark.asyncio
    async def test_active_provider_is_tried_first(self):
        first = StubProvider("first", [ok("first")], language_support={"he": 0.5})
        second = StubProvider("second", [ok("second")], language_support={"he": 0.9})
        orchestrator = LLMOrchestrator([first, second])

        await orchestrator.select_best_model(SelectionCriteria(language="he"))
        result = await orchestrator.generate("hi")

        assert result.text == "second"
        assert first.prompts == []

    @pytest.mark.asyncio
    async def test_explicit_provider_id(self):
        first = StubProvider("first", [ok("first")])
        second = StubProvider("second", [ok("second")])
        orchestrator = LLMOrchestrator([first, second])

        result = await orchestrator.generate("hi", provider_id="second")

        assert result.text == "second"
        assert orchestrator.active_provider is None

    @pytest.mark.asyncio
    async def test_explicit_unknown_provider_id(self):
        orchestrator = LLMOrchestrator([StubProvider("only", [ok()])])
        with pytest.raises(ProviderNotFoundError):
            await orchestrator.generate("hi", provider_id="nope")

    @pytest.mark.asyncio
    async def test_all_providers_fail(self):
        orchestrator = LLMOrchestrator([
            StubProvider("a", [failed("Server error: 500 - a down")]),
            StubProvider("b", [failed("No response from server")]),
        ])

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await orchestrator.generate("hi")

        error = exc_info.value
        assert error.attempts == [
            ("a", "Server error: 500 - a down"),
            ("b", "No response from server"),
        ]
        assert error.last_error == "No response from server"
        assert "No response from server" in str(error)

    @pytest.mark.asyncio
    async def test_model_validation_from_first_provider_is_raised(self):
        backup = StubProvider("backup", [ok()])
        orchestrator = LLMOrchestrator([StubProvider("primary", [ok()]), backup])

        with pytest.raises(ModelValidationError):
            await orchestrator.generate("hi", GenerationConfig(model="unknown-model"))

        assert backup.prompts == []

    @pytest.mark.asyncio
    async def test_invalid_config_raises_before_any_provider(self):
        primary = StubProvider("primary", [ok()])
        backup = StubProvider("backup", [ok()])
        orchestrator = LLMOrchestrator([primary, backup])

        with pytest.raises(ValidationError):
            await orchestrator.generate("hi", {"top_k": 5})

        for stub in (primary, backup):
            assert stub.prompts == []
            assert orchestrator.get_model_performance(stub.id).call_count == 0
            assert orchestrator.get_usage_costs(stub.id).call_count == 0

    @pytest.mark.asyncio
    async def test_real_adapter_fallback(self, mock_http, mistral_completion):
        openai_client, openai_requests = mock_http((503, {"error": {"message": "Overloaded"}}))
        mistral_client, mistral_requests = mock_http((200, mistral_completion))
        orchestrator = LLMOrchestrator([
            OpenAIProvider("k", client=openai_client),
            MistralProvider("k", client=mistral_client),
        ])

        result = await orchestrator.generate("hi")

        assert len(openai_requests) == 3
        assert len(mistral_requests) == 1
        assert result.text == "Bonjour"
        assert result.metadata["provider"] == "mistral"


class TestEmbeddings:

    @pytest.mark.asyncio
    async def test_no_fallback_for_embeddings(self):
        failure = EmbeddingResult.failure("Server error: 500 - boom")
        primary = StubProvider("primary", [failure])
        backup = StubProvider("backup", [EmbeddingResult(embedding=[1.0], success=True)])
        orchestrator = LLMOrchestrator([primary, backup])

        result = await orchestrator.get_embeddings("text")

        assert result is failure
        assert backup.prompts == []


class TestLedgers:

    @pytest.mark.asyncio
    async def test_ledgers_start_empty(self):
        orchestrator = LLMOrchestrator([StubProvider("a", cost_per_token=0.0015)])

        performance = orchestrator.get_model_performance("a")
        costs = orchestrator.get_usage_costs("a")

        assert performance.call_count == 0
        assert costs.call_count == 0
        assert costs.cost_per_token == 0.0015
        assert costs.currency == "USD"

    @pytest.mark.asyncio
    async def test_ledgers_track_calls(self):
        provider = StubProvider("a", [ok(tokens=10), failed(), ok(tokens=20)], cost_per_token=0.001)
        orchestrator = LLMOrchestrator([provider])

        await orchestrator.generate("1")
        with pytest.raises(AllProvidersFailedError):
            await orchestrator.generate("2")
        await orchestrator.generate("3")

        performance = orchestrator.get_model_performance("a")
        assert performance.call_count == 3
        assert performance.success_rate == pytest.approx(2 / 3)
        assert performance.average_tokens_used == pytest.approx(10.0)
        assert performance.average_response_time_ms >= 0.0

        costs = orchestrator.get_usage_costs("a")
        assert costs.call_count == 3
        assert costs.total_tokens == 30
        assert costs.total_cost == pytest.approx(0.03)

    @pytest.mark.asyncio
    async def test_snapshots_are_copies(self):
        orchestrator = LLMOrchestrator([StubProvider("a", [ok()])])
        snapshot = orchestrator.get_model_performance("a")

        await orchestrator.generate("hi")

        assert snapshot.call_count == 0
        assert orchestrator.get_model_performance("a").call_count == 1

    def test_unknown_provider_ledgers(self):
        orchestrator = LLMOrchestrator()
        with pytest.raises(ProviderNotFoundError, match="no performance data for provider ghost"):
            orchestrator.get_model_performance("ghost")
        with pytest.raises(ProviderNotFoundError, match="no cost data for provider ghost"):
            orchestrator.get_usage_costs("ghost")


class TestConnections:

    @pytest.mark.asyncio
    async def test_validate_provider_connection(self):
        healthy = StubProvider("healthy")
        broken = StubProvider("broken")
        broken.connection_ok = False
        orchestrator = LLMOrchestrator([healthy, broken])

        assert await orchestrator.validate_provider_connection("healthy") is True
        assert await orchestrator.validate_provider_connection("broken") is False

    @pytest.mark.asyncio
    async def test_validate_unknown_provider(self):
        with pytest.raises(ProviderNotFoundError, match="provider ghost not found"):
            await LLMOrchestrator().validate_provider_connection("ghost")

    @pytest.mark.asyncio
    async def test_context_manager_closes_adapters(self):
        provider = OpenAIProvider("k")
        _ = provider.client

        async with LLMOrchestrator([provider]) as orchestrator:
            assert orchestrator.providers == ["openai"]

        assert provider._client is None

    def test_stub_uses_default_tables(self):
        provider = StubProvider("a")
        limits = provider.get_model_limits("anything")
        assert (limits.max_tokens, limits.max_context_length, limits.max_batch_size) == (1000, 1000, 1)
        assert provider.get_language_support() == {"he": 0.9, "en": 1.0, "ar": 0.8}
        assert provider.get_pricing().monthly_quota == 1_000_000
