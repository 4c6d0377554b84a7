"""Reliability layer for error handling and retries.

This layer handles:
- Transport error classification (server error, no response, unknown)
- Bounded retry with exponential backoff
"""

from .retry import RetryManager, RetryConfig
from .error_classifier import ErrorClassifier, ErrorKind, ErrorClassification

__all__ = [
    "RetryManager",
    "RetryConfig",
    "ErrorClassifier",
    "ErrorKind",
    "ErrorClassification",
]
