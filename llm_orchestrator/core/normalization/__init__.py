"""Normalization of vendor usage reporting."""

from .usage import count_embedding_tokens, count_tokens_used, normalize_usage, placeholder_time

__all__ = ["normalize_usage", "count_tokens_used", "count_embedding_tokens", "placeholder_time"]
