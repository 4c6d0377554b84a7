from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List

from ..config.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
)


class GenerationConfig(BaseModel):
    """
    Per-call generation settings shared by every provider.

    Unset fields fall back to the adapter defaults. Both snake_case and the
    camelCase names used by the simulation engine (``maxTokens``,
    ``additionalParams``) are accepted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    model: Optional[str] = Field(None, description="Model identifier, adapter default when unset")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, description="Sampling temperature in [0, 1]")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, alias="maxTokens", description="Maximum tokens to generate")
    additional_params: Dict[str, Any] = Field(
        default_factory=dict,
        alias="additionalParams",
        description="Vendor passthrough parameters merged into the request body"
    )

    @field_validator('temperature')
    def validate_temperature(cls, v):
        return min(max(v, 0.0), 1.0)

    @field_validator('max_tokens')
    def validate_max_tokens(cls, v):
        return max(v, 1)


class GenerationResult(BaseModel):
    """Uniform result of a text generation call."""
    text: str = ""
    tokens_used: int = 0
    processing_time_ms: Optional[float] = None
    success: bool
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def failure(cls, error: str, **metadata: Any) -> "GenerationResult":
        return cls(
            text="",
            tokens_used=0,
            processing_time_ms=None,
            success=False,
            error=error,
            metadata=metadata,
        )


class EmbeddingResult(BaseModel):
    """Uniform result of an embedding call."""
    embedding: List[float] = Field(default_factory=list)
    tokens_used: int = 0
    processing_time_ms: Optional[float] = None
    success: bool
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "EmbeddingResult":
        return cls(
            embedding=[],
            tokens_used=0,
            processing_time_ms=None,
            success=False,
            error=error,
        )


class PricingInfo(BaseModel):
    """Static pricing of a provider plus its spend so far this month."""
    cost_per_token: float = Field(..., ge=0.0)
    cost_per_embedding: float = Field(..., ge=0.0)
    currency: str = DEFAULT_CURRENCY
    monthly_quota: int = Field(..., ge=0)
    current_monthly_cost: float = Field(default=0.0, ge=0.0)


class ModelLimits(BaseModel):
    """Token and batch limits of a single model."""
    max_tokens: int
    max_context_length: int
    max_batch_size: int = 1


class SelectionCriteria(BaseModel):
    """Task description used to rank candidate providers."""
    model_config = ConfigDict(populate_by_name=True)

    complexity: float = Field(default=0.5, ge=0.0, le=1.0)
    language: str = "en"
    max_cost: Optional[float] = Field(None, ge=0.0, alias="maxCost", description="Maximum cost per token")


class PerformanceLedger(BaseModel):
    """Running performance averages of one provider."""
    average_response_time_ms: float = 0.0
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    average_tokens_used: float = 0.0
    call_count: int = 0


class CostLedger(BaseModel):
    """Accumulated spend of one provider."""
    currency: str = DEFAULT_CURRENCY
    cost_per_token: float = Field(default=0.0, ge=0.0)
    total_tokens: int = 0
    total_cost: float = 0.0
    call_count: int = 0
