"""Anthropic provider adapter."""

from .adapter import AnthropicProvider

__all__ = ["AnthropicProvider"]
