"""
Default provider tables.

Adapters that do not declare their own pricing, limits or language coverage
fall back to these entries. Values are plain dicts so they can be copied
into the pydantic models by the adapters.
"""

from .constants import DEFAULT_CURRENCY, DEFAULT_MONTHLY_QUOTA

# Limits for every model known across vendors
DEFAULT_MODEL_LIMITS = {
    # OpenAI
    "gpt-4": {"max_tokens": 8192, "max_context_length": 8192, "max_batch_size": 20},
    "gpt-4-turbo": {"max_tokens": 4096, "max_context_length": 128000, "max_batch_size": 20},
    "gpt-3.5-turbo": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 20},
    # Anthropic
    "claude-3-opus-20240229": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
    "claude-3-sonnet-20240229": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
    "claude-3-haiku-20240307": {"max_tokens": 4096, "max_context_length": 200000, "max_batch_size": 1},
    # Cohere
    "command": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 96},
    "command-light": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 96},
    "command-nightly": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 96},
    "command-light-nightly": {"max_tokens": 4096, "max_context_length": 4096, "max_batch_size": 96},
    # Google
    "gemini-pro": {"max_tokens": 32768, "max_context_length": 32768, "max_batch_size": 100},
    "gemini-pro-vision": {"max_tokens": 32768, "max_context_length": 32768, "max_batch_size": 100},
    "text-bison": {"max_tokens": 8192, "max_context_length": 8192, "max_batch_size": 100},
    # Mistral
    "mistral-tiny": {"max_tokens": 8192, "max_context_length": 8192, "max_batch_size": 32},
    "mistral-small": {"max_tokens": 32768, "max_context_length": 32768, "max_batch_size": 32},
    "mistral-medium": {"max_tokens": 32768, "max_context_length": 32768, "max_batch_size": 32},
    "mistral-large": {"max_tokens": 32768, "max_context_length": 32768, "max_batch_size": 32},
}

# Conservative entry for unknown models
FALLBACK_MODEL_LIMITS = {"max_tokens": 1000, "max_context_length": 1000, "max_batch_size": 1}

# Language code -> coverage score in [0, 1]
DEFAULT_LANGUAGE_SUPPORT = {
    "he": 0.9,
    "en": 1.0,
    "ar": 0.8,
}

DEFAULT_PRICING = {
    "cost_per_token": 0.002,
    "cost_per_embedding": 0.0001,
    "currency": DEFAULT_CURRENCY,
    "monthly_quota": DEFAULT_MONTHLY_QUOTA,
}
