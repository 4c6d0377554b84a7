"""
Orchestrator defaults.

Timeouts and retry counts apply per adapter call. Pricing, limits and
language tables live in ``llm_orchestrator/config/models.py``.
"""

# Per-call HTTP timeout (seconds)
DEFAULT_TIMEOUT_SECONDS = 30.0

# Attempts per adapter call, backoff is 2 ** attempt seconds between them
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_BASE = 2.0

# Generation defaults
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

# Pricing defaults
DEFAULT_CURRENCY = "USD"
DEFAULT_MONTHLY_QUOTA = 1_000_000

# Environment variables read by create_default_orchestrator()
PROVIDER_API_KEY_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "cohere": "COHERE_API_KEY",
    "google": "GOOGLE_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}
TIMEOUT_ENV_VAR = "LLM_ORCHESTRATOR_TIMEOUT"

# Vendor endpoints
OPENAI_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
COHERE_BASE_URL = "https://api.cohere.ai/v1"
GOOGLE_BASE_URL = "https://generativelanguage.googleapis.com/v1"
MISTRAL_BASE_URL = "https://api.mistral.ai/v1"
