"""Environment bootstrap for a fully populated orchestrator."""

import logging
import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

from ..config.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    PROVIDER_API_KEY_ENV_VARS,
    TIMEOUT_ENV_VAR,
)
from ..providers.anthropic.adapter import AnthropicProvider
from ..providers.cohere.adapter import CohereProvider
from ..providers.google.adapter import GoogleProvider
from ..providers.mistral.adapter import MistralProvider
from ..providers.openai.adapter import OpenAIProvider
from .orchestrator import LLMOrchestrator

logger = logging.getLogger(__name__)

PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "cohere": CohereProvider,
    "google": GoogleProvider,
    "mistral": MistralProvider,
}


def _timeout_from_env() -> float:
    raw = os.getenv(TIMEOUT_ENV_VAR)
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", TIMEOUT_ENV_VAR, raw)
        return DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        logger.warning("Ignoring non-positive %s=%r", TIMEOUT_ENV_VAR, raw)
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


def create_default_orchestrator(env_file: Optional[str] = None, **overrides: Any) -> LLMOrchestrator:
    """
    Build an orchestrator with all five vendors registered.

    API keys are read from ``OPENAI_API_KEY``, ``ANTHROPIC_API_KEY``,
    ``COHERE_API_KEY``, ``GOOGLE_API_KEY`` and ``MISTRAL_API_KEY`` after
    loading ``env_file`` (or a ``.env`` found from the working directory).
    Missing keys register the provider with an empty key; its calls then
    fail with the vendor's authentication error and fall back.

    Args:
        env_file: Path of a dotenv file to load
        **overrides: Keyword arguments passed to every adapter
            (``timeout``, ``max_retries``, ``client``, ...)
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    adapter_kwargs = {"timeout": _timeout_from_env()}
    adapter_kwargs.update(overrides)

    providers = []
    for provider_id, provider_cls in PROVIDER_CLASSES.items():
        api_key = os.getenv(PROVIDER_API_KEY_ENV_VARS[provider_id], "")
        if not api_key:
            logger.warning("%s is not set, %s calls will fail",
                           PROVIDER_API_KEY_ENV_VARS[provider_id], provider_id)
        providers.append(provider_cls(api_key, **adapter_kwargs))

    return LLMOrchestrator(providers)
