"""Configuration module for the LLM orchestrator."""

from .models import (
    DEFAULT_MODEL_LIMITS,
    FALLBACK_MODEL_LIMITS,
    DEFAULT_LANGUAGE_SUPPORT,
    DEFAULT_PRICING,
)

# Import all constants
from .constants import *

__all__ = [
    "DEFAULT_MODEL_LIMITS",
    "FALLBACK_MODEL_LIMITS",
    "DEFAULT_LANGUAGE_SUPPORT",
    "DEFAULT_PRICING",
]
