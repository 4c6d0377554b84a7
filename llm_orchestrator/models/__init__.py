"""Data models for the LLM orchestrator."""

from .generation import (
    GenerationConfig,
    GenerationResult,
    EmbeddingResult,
    PricingInfo,
    ModelLimits,
    SelectionCriteria,
    PerformanceLedger,
    CostLedger,
)

__all__ = [
    "GenerationConfig",
    "GenerationResult",
    "EmbeddingResult",
    "PricingInfo",
    "ModelLimits",
    "SelectionCriteria",
    "PerformanceLedger",
    "CostLedger",
]
