"""
Error mapping utilities for provider adapters.

This module converts exceptions raised during a vendor call (httpx errors,
decoding failures) into the provider transport taxonomy.
"""

from .base import NoResponseError, ServerError, TransportError, UnknownTransportError
from ..reliability.error_classifier import ErrorClassifier, ErrorKind


class ErrorMapper:
    """Maps raw exceptions to TransportError subclasses."""

    @staticmethod
    def map_error(error: Exception, provider: str) -> TransportError:
        """
        Map an exception raised while calling ``provider``.

        Args:
            error: The raw exception
            provider: Provider id used to tag the error

        Returns:
            TransportError subclass with classification metadata
        """
        if isinstance(error, TransportError):
            return error

        classification = ErrorClassifier.classify(error)

        if classification.kind == ErrorKind.SERVER_ERROR:
            mapped: TransportError = ServerError(
                classification.user_message,
                provider=provider,
                status_code=classification.status_code,
                vendor_message=classification.vendor_message,
            )
        elif classification.kind == ErrorKind.NO_RESPONSE:
            mapped = NoResponseError(classification.user_message, provider=provider)
        else:
            mapped = UnknownTransportError(classification.user_message, provider=provider)

        mapped.is_retryable = classification.is_retryable
        mapped.original_error = error
        return mapped

    @staticmethod
    def malformed_response(provider: str, detail: str) -> UnknownTransportError:
        """Error for a 2xx response whose body does not match the vendor schema."""
        error = UnknownTransportError(
            ErrorClassifier.render(ErrorKind.UNKNOWN, f"malformed response ({detail})"),
            provider=provider,
        )
        return error
