"""Google provider adapter."""

from .adapter import GoogleProvider

__all__ = ["GoogleProvider"]
