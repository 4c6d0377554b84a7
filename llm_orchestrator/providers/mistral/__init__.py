"""Mistral provider adapter."""

from .adapter import MistralProvider

__all__ = ["MistralProvider"]
