"""Observability helpers (structured provider logging)."""

from .logging import ProviderLogger

__all__ = ["ProviderLogger"]
