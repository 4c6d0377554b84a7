"""Tests for request/result models and usage normalization."""

import pytest
from pydantic import ValidationError

from llm_orchestrator.core.normalization import (
    count_embedding_tokens,
    count_tokens_used,
    normalize_usage,
    placeholder_time,
)
from llm_orchestrator.models.generation import (
    EmbeddingResult,
    GenerationConfig,
    GenerationResult,
    PricingInfo,
    SelectionCriteria,
)


class TestGenerationConfig:

    def test_defaults(self):
        config = GenerationConfig()
        assert config.model is None
        assert config.temperature == 0.7
        assert config.max_tokens == 1000
        assert config.additional_params == {}

    def test_temperature_is_clamped(self):
        assert GenerationConfig(temperature=1.7).temperature == 1.0
        assert GenerationConfig(temperature=-0.5).temperature == 0.0
        assert GenerationConfig(temperature=0).temperature == 0.0

    def test_camel_case_aliases(self):
        config = GenerationConfig.model_validate(
            {"maxTokens": 12, "additionalParams": {"stop": ["\n"]}}
        )
        assert config.max_tokens == 12
        assert config.additional_params == {"stop": ["\n"]}

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            GenerationConfig.model_validate({"top_k": 5})


class TestResults:

    def test_generation_failure_shape(self):
        result = GenerationResult.failure("Error: boom", provider="openai")
        assert result.success is False
        assert result.text == ""
        assert result.tokens_used == 0
        assert result.processing_time_ms is None
        assert result.error == "Error: boom"
        assert result.metadata == {"provider": "openai"}

    def test_embedding_failure_shape(self):
        result = EmbeddingResult.failure("No response from server")
        assert result.success is False
        assert result.embedding == []
        assert result.tokens_used == 0

    def test_pricing_rejects_negative_values(self):
        with pytest.raises(ValidationError):
            PricingInfo(cost_per_token=-1, cost_per_embedding=0, monthly_quota=10)

    def test_selection_criteria_alias(self):
        criteria = SelectionCriteria.model_validate({"language": "ar", "maxCost": 0.001})
        assert criteria.max_cost == 0.001
        assert SelectionCriteria().max_cost is None


class TestUsageNormalization:

    @pytest.mark.parametrize("provider, usage, expected", [
        ("openai", {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}, 15),
        ("mistral", {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}, 3),
        ("anthropic", {"input_tokens": 7, "output_tokens": 3}, 10),
        ("cohere", {"input_tokens": 4, "output_tokens": 4}, 8),
        ("google", {"promptTokenCount": 2, "candidatesTokenCount": 9, "totalTokenCount": 11}, 11),
    ])
    def test_tokens_used_sums_prompt_and_completion(self, provider, usage, expected):
        assert count_tokens_used(normalize_usage(usage, provider)) == expected

    def test_missing_fields_are_none(self):
        usage = normalize_usage({"input_tokens": 3}, "anthropic")
        assert usage == {"prompt_tokens": 3, "completion_tokens": None, "total_tokens": None}

    def test_total_only(self):
        assert count_tokens_used(normalize_usage({"totalTokenCount": 9}, "google")) == 9

    def test_empty_usage(self):
        assert count_tokens_used(normalize_usage(None, "openai")) == 0

    @pytest.mark.parametrize("provider, usage, expected", [
        ("mistral", {"total_tokens": 42, "completion_tokens": 21}, 42),
        ("openai", {"total_tokens": 30, "prompt_tokens": 12}, 30),
        ("google", {"promptTokenCount": 4, "totalTokenCount": 10}, 10),
    ])
    def test_total_wins_over_a_single_part(self, provider, usage, expected):
        assert count_tokens_used(normalize_usage(usage, provider)) == expected

    def test_single_part_without_total(self):
        assert count_tokens_used(normalize_usage({"output_tokens": 6}, "anthropic")) == 6

    def test_embedding_tokens_are_input_tokens(self):
        assert count_embedding_tokens(normalize_usage({"total_tokens": 10, "prompt_tokens": 5}, "mistral")) == 5
        assert count_embedding_tokens(normalize_usage({"total_tokens": 7}, "openai")) == 7
        assert count_embedding_tokens(normalize_usage(None, "cohere")) == 0

    def test_placeholder_time(self):
        assert placeholder_time(5) == 5.0
        assert placeholder_time(0) == 0.0
        assert placeholder_time(None) is None

    def test_generic_mapping_for_other_providers(self):
        usage = normalize_usage({"input_tokens": 2, "completion_tokens": 3}, "custom")
        assert usage["prompt_tokens"] == 2
        assert usage["completion_tokens"] == 3
