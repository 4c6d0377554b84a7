"""Cohere provider adapter."""

from .adapter import CohereProvider

__all__ = ["CohereProvider"]
