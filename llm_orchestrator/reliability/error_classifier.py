"""
Error classification for vendor HTTP calls.

Every failure of an outbound request is sorted into one of three kinds
(server error, no response, unknown) with a kind-prefixed, human readable
message and a retry decision.
"""

from enum import Enum
from typing import Any, Optional
from dataclasses import dataclass

import httpx


class ErrorKind(Enum):
    """Transport failure kinds shared by all providers."""
    SERVER_ERROR = "server_error"
    NO_RESPONSE = "no_response"
    UNKNOWN = "unknown"


@dataclass
class ErrorClassification:
    """Detailed error classification."""
    kind: ErrorKind
    is_retryable: bool
    user_message: str
    status_code: Optional[int] = None
    vendor_message: Optional[str] = None


class ErrorClassifier:
    """Classifies exceptions raised while talking to a vendor."""

    # 429 and 5xx are transient, everything else is the caller's problem
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    NO_RESPONSE_ERRORS = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )

    @classmethod
    def classify(cls, error: Exception) -> ErrorClassification:
        """
        Classify an exception.

        Args:
            error: Exception raised by httpx or while decoding a response

        Returns:
            ErrorClassification with kind, retry flag and rendered message
        """
        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            vendor_message = cls.extract_vendor_message(error.response)
            return ErrorClassification(
                kind=ErrorKind.SERVER_ERROR,
                is_retryable=status_code in cls.RETRYABLE_STATUS_CODES,
                user_message=cls.render(ErrorKind.SERVER_ERROR, vendor_message, status_code),
                status_code=status_code,
                vendor_message=vendor_message,
            )

        if isinstance(error, cls.NO_RESPONSE_ERRORS):
            return ErrorClassification(
                kind=ErrorKind.NO_RESPONSE,
                is_retryable=True,
                user_message=cls.render(ErrorKind.NO_RESPONSE, cls._describe(error)),
            )

        return ErrorClassification(
            kind=ErrorKind.UNKNOWN,
            is_retryable=False,
            user_message=cls.render(ErrorKind.UNKNOWN, cls._describe(error)),
        )

    @staticmethod
    def render(kind: ErrorKind, detail: Optional[str], status_code: Optional[int] = None) -> str:
        """Render a kind-prefixed message."""
        if kind == ErrorKind.SERVER_ERROR:
            return f"Server error: {status_code} - {detail or 'no message'}"
        if kind == ErrorKind.NO_RESPONSE:
            if detail:
                return f"No response from server: {detail}"
            return "No response from server"
        return f"Error: {detail or 'unknown error'}"

    @staticmethod
    def extract_vendor_message(response: httpx.Response) -> Optional[str]:
        """
        Pull the vendor's error message out of a response body.

        Vendors disagree on the envelope: ``{"error": {"message": ...}}``
        (OpenAI, Anthropic, Google, Mistral), ``{"message": ...}`` (Cohere)
        or ``{"detail": ...}``. Falls back to the raw body text.
        """
        try:
            body: Any = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str) and error:
                return error
            for key in ("message", "detail"):
                if body.get(key):
                    return str(body[key])

        text = response.text.strip() if response.text else ""
        return text or response.reason_phrase or None

    @staticmethod
    def _describe(error: Exception) -> str:
        message = str(error)
        return message if message else type(error).__name__
